"""
Domain exceptions raised by the service layer
"""


class GreenGrocerError(Exception):
    """Base exception for GreenGrocer errors"""
    pass


class NotFoundError(GreenGrocerError):
    """Referenced entity does not exist"""
    pass


class ValidationError(GreenGrocerError):
    """Malformed input detected by a service"""
    pass


class DuplicateError(GreenGrocerError):
    """Unique value (username, sku) already taken"""
    pass


class PermissionDeniedError(GreenGrocerError):
    """Caller may not act on this entity"""
    pass


class EmptyCartError(GreenGrocerError):
    """Checkout attempted with no cart items"""
    pass


class ProductUnavailableError(GreenGrocerError):
    """A cart item references a product that no longer exists"""
    pass


class InsufficientStockError(GreenGrocerError):
    """Requested quantity exceeds current stock"""
    
    def __init__(self, product_name: str, available: float):
        self.product_name = product_name
        self.available = available
        super().__init__(f"Not enough stock for {product_name}. Available: {available:g}")


class InvalidStatusTransitionError(GreenGrocerError):
    """Status change rejected by the transition table"""
    
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change order status from {current} to {requested}")
