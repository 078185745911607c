"""
Catalog Error Taxonomy

Every failure the catalog reports to a client is one of these exceptions.
Each carries the HTTP status it maps to and the single message the client
sees; main.py turns them into ``{"message": ...}`` responses.

- ShapeError:     missing or malformed field, raised before any storage call
- RangeError:     numeric value outside its documented bounds
- ConflictError:  unique-key violation on insert
- NotFoundError:  nothing matched a keyed lookup, update or delete
- IntegrityError: a key expected to be unique matched several rows
- StorageError:   any other failure of a storage round trip

IntegrityError and StorageError are server faults: their detail is logged
and the client only ever receives SERVER_ERROR_MESSAGE.
"""

SERVER_ERROR_MESSAGE = "server error - contact support"


class CatalogError(Exception):
    """Base class for errors raised by the catalog services."""

    status_code: int = 500
    server_fault: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def client_message(self) -> str:
        """Message safe to send across the HTTP boundary."""
        return SERVER_ERROR_MESSAGE if self.server_fault else self.message


class ShapeError(CatalogError):
    status_code = 400


class RangeError(CatalogError):
    status_code = 400


class ConflictError(CatalogError):
    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class IntegrityError(CatalogError):
    status_code = 500
    server_fault = True


class StorageError(CatalogError):
    status_code = 500
    server_fault = True
