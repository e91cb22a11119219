"""Abstract database interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

# Import leaf domain modules directly; the services import this module
from shopledger.domain.entities import (
    Product,
    Customer,
    Sale,
    Payment,
    Supplier,
    Purchase,
    SupplierPayment,
    Expense,
    PurchaseReceipt,
    TransferResult,
)
from shopledger.domain.requests import (
    SaleRequest,
    PaymentRequest,
    TransferRequest,
    PurchaseRequest,
    SupplierPaymentRequest,
)


class Database(ABC):
    """Abstract database interface for shopledger.

    Every ledger operation (``record_*``, ``transfer_stock``, ``reset_all``)
    runs as one atomic transaction: either all of its writes commit or none do.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self,
        name: str,
        purchase_price: Decimal,
        sale_price: Decimal,
        stock: int = 0,
        sku: Optional[str] = None,
        category: Optional[str] = None,
        shop_id: Optional[str] = None,
        supplier_id: Optional[str] = None,
        supplier_name: Optional[str] = None,
        size: Optional[str] = None,
        unit: Optional[str] = None,
    ) -> str:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID."""
        pass

    @abstractmethod
    def list_products(self, shop_id: Optional[str] = None) -> list[Product]:
        """List products, newest first, optionally filtered by shop."""
        pass

    @abstractmethod
    def update_product(self, product_id: str, **fields) -> None:
        """Update product fields."""
        pass

    @abstractmethod
    def delete_product(self, product_id: str) -> None:
        """Delete a product."""
        pass

    # Customer operations
    @abstractmethod
    def create_customer(
        self, name: str, phone: Optional[str] = None, address: Optional[str] = None
    ) -> str:
        """Create a customer with zero balances. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: str) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def list_customers(self) -> list[Customer]:
        """List all customers, newest first."""
        pass

    @abstractmethod
    def update_customer(self, customer_id: str, **fields) -> None:
        """Update customer contact fields."""
        pass

    @abstractmethod
    def delete_customer(self, customer_id: str) -> None:
        """Delete a customer."""
        pass

    # Supplier operations
    @abstractmethod
    def create_supplier(self, name: str, **fields) -> str:
        """Create a supplier with zero balances. Returns supplier ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers, newest first."""
        pass

    @abstractmethod
    def update_supplier(self, supplier_id: str, **fields) -> None:
        """Update supplier contact fields."""
        pass

    @abstractmethod
    def delete_supplier(self, supplier_id: str) -> None:
        """Delete a supplier."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        description: str,
        amount: Decimal,
        category: Optional[str] = None,
        shop_id: Optional[str] = None,
    ) -> str:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def list_expenses(self, shop_id: Optional[str] = None) -> list[Expense]:
        """List expenses, newest first, optionally filtered by shop."""
        pass

    # Ledger operations
    @abstractmethod
    def record_sale(self, request: SaleRequest) -> str:
        """Record a sale or return. Returns the sequential sale ID."""
        pass

    @abstractmethod
    def record_payment(self, request: PaymentRequest) -> str:
        """Record a customer payment. Returns payment ID."""
        pass

    @abstractmethod
    def transfer_stock(self, request: TransferRequest) -> TransferResult:
        """Move stock to the matching product in the other shop."""
        pass

    @abstractmethod
    def record_purchase(self, request: PurchaseRequest) -> PurchaseReceipt:
        """Record a supplier purchase and restock its products."""
        pass

    @abstractmethod
    def record_supplier_payment(self, request: SupplierPaymentRequest) -> str:
        """Record a payment to a supplier. Returns payment ID."""
        pass

    @abstractmethod
    def reset_all(self) -> dict[str, int]:
        """Delete every row from every table. Returns deleted counts per table."""
        pass

    # Query operations
    @abstractmethod
    def get_sale(self, sale_id: str) -> Optional[Sale]:
        """Get a sale with its line items."""
        pass

    @abstractmethod
    def list_sales(
        self, customer_id: Optional[str] = None, shop_id: Optional[str] = None
    ) -> list[Sale]:
        """List sales with their line items, newest first."""
        pass

    @abstractmethod
    def list_payments(self, customer_id: Optional[str] = None) -> list[Payment]:
        """List customer payments, newest first."""
        pass

    @abstractmethod
    def get_purchase(self, purchase_id: str) -> Optional[Purchase]:
        """Get a purchase with its line items."""
        pass

    @abstractmethod
    def list_purchases(self, supplier_id: Optional[str] = None) -> list[Purchase]:
        """List purchases with their line items, newest first."""
        pass

    @abstractmethod
    def list_supplier_payments(self, supplier_id: Optional[str] = None) -> list[SupplierPayment]:
        """List supplier payments, newest first."""
        pass
