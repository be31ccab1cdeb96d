"""Exception hierarchy shared by the engine and its adapters."""


class VocatoError(Exception):
    """Base class for all vocato errors."""


class StoreError(VocatoError):
    """A storage adapter could not complete a request."""


class QueryFailure(StoreError):
    """Reading from a WordStore (or progress store) failed."""


class PersistFailure(StoreError):
    """Writing to a WordStore (or progress store) failed."""


class InvalidWordError(VocatoError, ValueError):
    """Word data was rejected before reaching the store."""
