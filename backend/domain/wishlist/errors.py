from __future__ import annotations


class WishlistError(Exception):
    """Base error for wishlist operations.

    ``status_code`` is the HTTP status the server layer maps the error to; the
    domain itself does not depend on any web framework.
    """

    status_code: int = 500
    default_message: str = "Unexpected wishlist error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(WishlistError):
    status_code = 400
    default_message = "Invalid request."


class Forbidden(WishlistError):
    status_code = 403
    default_message = "密码错误。"


class NotFound(WishlistError):
    status_code = 404
    default_message = "Item not found."


class Conflict(WishlistError):
    status_code = 409
    default_message = "Conflict."


class DuplicateEntry(Conflict):
    default_message = "Item is already in the wishlist."


class ServerMisconfigured(WishlistError):
    status_code = 500
    default_message = "Server is not configured."


class UpstreamFailure(WishlistError):
    status_code = 502
    default_message = "Failed to reach the catalog. Please try again later."


class StorageError(WishlistError):
    status_code = 500
    default_message = "Storage is unavailable."
