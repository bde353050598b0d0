"""Error taxonomy for the streaming gesture pipeline."""


class SignStreamError(Exception):
    """Base class for pipeline errors."""


class MalformedFrame(SignStreamError, ValueError):
    """A landmark frame has the wrong dimensionality or non-finite values."""


class WindowNotReady(SignStreamError):
    """Inference was attempted before the window filled up."""


class ClassifierFailure(SignStreamError):
    """The classifier raised or returned an unusable distribution."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class ModelLoadError(SignStreamError):
    """No model loader produced a classifier."""
