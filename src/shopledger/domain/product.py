"""Product domain service."""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Product as ProductEntity, TransferResult, SHOP_ONE, SHOP_TWO
from shopledger.domain.errors import ValidationError, NotFoundError, product_not_found
from shopledger.domain.requests import TransferRequest, normalize
from shopledger.utils.amount_parser import parse_amount, parse_quantity

logger = logging.getLogger(__name__)

SHOPS = (SHOP_ONE, SHOP_TWO)


def _money(value: Any, field: str) -> Decimal:
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {e}") from e
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative")
    return amount


def _stock(value: Any) -> int:
    try:
        stock = parse_quantity(value)
    except ValueError as e:
        raise ValidationError(f"Invalid stock: {e}") from e
    if stock < 0:
        raise ValidationError("stock cannot be negative")
    return stock


class ProductService:
    """Service for managing products and moving stock between shops."""

    def __init__(self, db: Database):
        """Initialize product service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_product(
        self,
        name: str,
        purchase_price: Any,
        sale_price: Any,
        stock: Any = 0,
        shop_id: str = SHOP_ONE,
        sku: Optional[str] = None,
        category: Optional[str] = None,
        supplier_id: Optional[str] = None,
        supplier_name: Optional[str] = None,
        size: Optional[str] = None,
        unit: Optional[str] = None,
    ) -> str:
        """Create a product.

        Args:
            name: Product name
            purchase_price: Cost price (number or string)
            sale_price: Selling price (number or string)
            stock: Opening stock
            shop_id: Shop holding the product ("shop-1" or "shop-2")
            sku: Optional stock-keeping unit, used to match products across shops

        Returns:
            Product ID

        Raises:
            ValidationError: If a field is missing or malformed
        """
        if not name or not name.strip():
            raise ValidationError("name is required")
        if shop_id not in SHOPS:
            raise ValidationError(f"Unknown shop '{shop_id}'. Expected one of: {', '.join(SHOPS)}")

        product_id = self.db.create_product(
            name=name.strip(),
            purchase_price=_money(purchase_price, "purchasePrice"),
            sale_price=_money(sale_price, "salePrice"),
            stock=_stock(stock),
            sku=sku or None,
            category=category,
            shop_id=shop_id,
            supplier_id=supplier_id,
            supplier_name=supplier_name,
            size=size,
            unit=unit,
        )
        logger.info("Created product %s '%s' in %s", product_id, name, shop_id)
        return product_id

    def get_product(self, product_id: str) -> Optional[ProductEntity]:
        """Get product by ID, or None if not found."""
        return self.db.get_product(product_id)

    def require_product(self, product_id: str) -> ProductEntity:
        """Get product by ID.

        Raises:
            NotFoundError: If product doesn't exist
        """
        product = self.db.get_product(product_id)
        if product is None:
            raise NotFoundError(product_not_found(product_id))
        return product

    def list_products(self, shop_id: Optional[str] = None) -> list[ProductEntity]:
        """List products, newest first, optionally only those in one shop."""
        return self.db.list_products(shop_id=shop_id)

    def update_product(self, product_id: str, **fields) -> None:
        """Update product fields.

        Only the given fields change. Prices and stock are validated the same
        way as on creation.

        Raises:
            ValidationError: If a field is malformed or cannot be edited
            NotFoundError: If product doesn't exist
        """
        if "name" in fields and not (fields["name"] or "").strip():
            raise ValidationError("name cannot be empty")
        for field in ("purchase_price", "sale_price"):
            if field in fields:
                fields[field] = _money(fields[field], field)
        if "stock" in fields:
            fields["stock"] = _stock(fields["stock"])
        self.db.update_product(product_id, **fields)
        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(fields)))

    def delete_product(self, product_id: str) -> None:
        """Delete a product. Past sale and purchase lines keep their snapshots."""
        self.db.delete_product(product_id)
        logger.info("Deleted product %s", product_id)

    def transfer_stock(self, request: TransferRequest | Mapping[str, Any]) -> TransferResult:
        """Move stock from a product to its counterpart in the other shop.

        The counterpart is matched by SKU, then by name, and is created as a
        copy of the source when the other shop has no match.

        Raises:
            ValidationError: If the request is malformed
            NotFoundError: If the source product doesn't exist
            InsufficientStockError: If the source has less stock than requested
        """
        request = normalize(request, TransferRequest)
        result = self.db.transfer_stock(request)
        logger.info(
            "Transferred %d of product %s to %s (%s product %s)",
            result.quantity,
            result.source_product_id,
            result.destination_shop_id,
            "new" if result.created_destination else "existing",
            result.destination_product_id,
        )
        return result
