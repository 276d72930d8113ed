# app/domain/errors.py
"""
Bledy domenowe storefrontu.
Kazdy blad niesie status HTTP, handler w app.api.errors zamienia go na {"error": message}.
"""


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StorefrontError):
    status_code = 400


class AuthError(StorefrontError):
    status_code = 401


class NotFound(StorefrontError):
    status_code = 404


class InvalidState(StorefrontError):
    status_code = 400


class Conflict(StorefrontError):
    status_code = 409


class InternalError(StorefrontError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


# wspolne komunikaty
ERROR_TOKEN_REQUIRED = "Token is required"
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_INVALID_CREDENTIALS = "Invalid username or password"
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_EMPTY_CART = "Cannot place an order from an empty cart"
ERROR_CART_BUSY = "Cart is being modified by another request"
ERROR_INTERNAL = "Internal server error"
