"""
Request-level errors raised by the upload flow.
"""


class InvalidFileTypeError(ValueError):
    """A part declared a media type that is not an image."""

    def __init__(self, message: str = "Only image files are allowed!"):
        super().__init__(message)


class CredentialsNotConfiguredError(RuntimeError):
    """No refresh token is configured for Google Drive."""

    def __init__(self, message: str = "No refresh token available. Please authenticate first."):
        super().__init__(message)
