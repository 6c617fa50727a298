"""Error taxonomy for the adherence engine."""


class EngineError(Exception):
    """Base class for errors raised by the engine."""

    kind = "engine_error"


class InvalidConfiguration(EngineError):
    """Raised when plan settings or a referenced slot number are invalid."""

    kind = "invalid_configuration"


class InvalidQuantity(EngineError):
    """Raised when a logged quantity or duration is not a positive number."""

    kind = "invalid_quantity"


class UnknownItem(EngineError):
    """Raised when a descriptor is missing from the reference catalog."""

    kind = "unknown_item"


class UserNotFound(EngineError):
    """Raised when the user has no profile."""

    kind = "user_not_found"


class StorageUnavailable(EngineError):
    """Raised when the backing store cannot be reached or rejects a query."""

    kind = "storage_unavailable"
