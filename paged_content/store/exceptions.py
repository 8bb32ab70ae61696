class StoreError(Exception):
    """Base exception for repository store failures."""


class ObjectNotFoundError(StoreError):
    """Raised when an object id does not resolve to a stored object."""


class DatastreamNotFoundError(StoreError):
    """Raised when an object has no datastream with the requested id."""
