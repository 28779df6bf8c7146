"""Error taxonomy for the link shortener.

Every failure the core can report derives from ShortenerError and carries
the HTTP status and public message the web layer renders.
"""


class ShortenerError(Exception):
    """Base class for link shortener failures."""

    status_code = 500
    message = "internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(ShortenerError):
    """The caller supplied an unusable target URL."""

    status_code = 400
    message = "invalid input"


class CapacityExceeded(ShortenerError):
    """The store holds as many links as it is allowed to."""

    status_code = 503
    message = "service temporarily unavailable"


class NotFound(ShortenerError):
    """No link exists for the requested code."""

    status_code = 404
    message = "short link not found"


class Expired(ShortenerError):
    """The link exists but its expiration time has passed."""

    status_code = 410
    message = "short link expired"


class StorageError(ShortenerError):
    """The durable store failed (connectivity, query error, timeout)."""


class DuplicateCodeError(StorageError):
    """An insert collided with an existing code."""


class CodeGenerationError(ShortenerError):
    """No free code was found within the attempt budget."""
