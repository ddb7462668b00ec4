from typing import Any, Dict, Optional


class LifecycleError(Exception):
    """Base exception for stock and request-transition operations"""

    code = 'lifecycle_error'

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code or self.code
        self.details = details or {}
        super().__init__(self.message)


class RequestNotFound(LifecycleError):
    """Raised when a request id does not resolve to a request"""

    code = 'not_found'

    def __init__(self, request_id):
        super().__init__(f"Request #{request_id} not found", details={'request_id': request_id})


class StockNotFound(LifecycleError):
    """Raised when no stock batch exists for an item type"""

    code = 'not_found'

    def __init__(self, item_type: str):
        super().__init__(f"No stock recorded for {item_type}", details={'item_type': item_type})


class IllegalTransition(LifecycleError):
    """Raised when an action is not valid from the request's current status"""

    code = 'illegal_transition'

    def __init__(self, action: str, current: str):
        message = f"cannot {action} a{'n' if current[:1] in 'aeiou' else ''} {current} request"
        super().__init__(message, details={'action': action, 'current_status': current})


class InsufficientStock(LifecycleError):
    """Raised when a reservation asks for more than is on hand"""

    code = 'insufficient_stock'

    def __init__(self, item_type: str, available: int, requested: int):
        self.item_type = item_type
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock: {available} available, {requested} requested",
            details={
                'item_type': item_type,
                'available_quantity': available,
                'requested_quantity': requested,
            },
        )


class PermissionDenied(LifecycleError):
    """Raised when the acting user may not perform a transition"""

    code = 'permission_denied'

    def __init__(self, action: str):
        super().__init__(f"Only brooder managers can {action} requests", details={'action': action})


class PersistenceUnavailable(LifecycleError):
    """Raised when the database call failed or timed out; safe to retry"""

    code = 'persistence_unavailable'

    def __init__(self):
        super().__init__("Storage is temporarily unavailable, please retry")


class InvalidRequest(LifecycleError):
    """Raised when a request's stock lines cannot back a reservation"""

    code = 'invalid_request'

    def __init__(self, request_id, problem: str):
        super().__init__(f"Request #{request_id} {problem}", details={'request_id': request_id})
