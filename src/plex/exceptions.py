"""Exception classes for the Plex catalog client.

Transport failures are not wrapped: httpx exceptions reach the caller
unchanged. Initialization outcomes are returned as
``InitializationStatus`` values, not raised.
"""


class PlexError(Exception):
    """Base exception for all Plex catalog errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PlexNotInitializedError(PlexError):
    """Content was requested before initialization completed with OK."""

    pass


class PlexAlreadyInitializedError(PlexError):
    """Initialization was attempted a second time on the same service.

    Create a new service to initialize again.
    """

    pass


class MalformedRecordError(PlexError):
    """A metadata record lacks the media or file part it must carry.

    Attributes:
        key: Key of the offending record
    """

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Malformed record {key}: {message}")
