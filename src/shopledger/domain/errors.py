"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input, rejected before any transaction begins."""


class NotFoundError(DomainError):
    """Referenced product, customer, supplier or sale does not exist."""


class ConstraintError(DomainError):
    """Storage-level failure such as a foreign-key violation or id collision."""


class InsufficientStockError(DomainError):
    """Operation would drive a product's stock below zero."""


def product_not_found(product_id: str) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def customer_not_found(customer_id: str) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def supplier_not_found(supplier_id: str) -> str:
    """Return message for missing supplier."""
    return f"Supplier {supplier_id} not found"


def sale_not_found(sale_id: str) -> str:
    """Return message for missing sale."""
    return f"Sale {sale_id} not found"


def purchase_not_found(purchase_id: str) -> str:
    """Return message for missing purchase."""
    return f"Purchase {purchase_id} not found"


def insufficient_stock(product_name: str, available: int, requested: int) -> str:
    """Return message when a product cannot cover the requested quantity."""
    return (
        f"Insufficient stock for '{product_name}': "
        f"{available} available, {requested} requested"
    )


def purchase_item_failed(index: int, product_id: str | None, reason: str) -> str:
    """Return message for a purchase line that aborted the purchase."""
    return f"Error processing purchase item at index {index} (productId={product_id}): {reason}"
