"""Exceptions raised inside the AI layer. Requesters translate them into user-facing messages."""


class CannaConnectError(Exception):
    """Base for every error raised by this package."""


class InvalidPhotoError(CannaConnectError):
    """The submitted photo is not a base64 image data URI."""


class AnalysisError(CannaConnectError):
    """The model call did not produce a usable result."""


class ModelUnavailableError(AnalysisError):
    """Network failure, timeout or non-2xx status from the model endpoint."""


class ModelResponseError(AnalysisError):
    """The model answered, but not in the expected shape."""
