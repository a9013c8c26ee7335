"""Exceptions raised by the upload pipeline."""


class BatchValidationError(Exception):
    """The batch envelope is unusable; nothing was uploaded."""


class MissingInspectionUuidError(BatchValidationError):
    """The inspection UUID is absent or empty after sanitizing."""

    def __init__(self, message: str = "Inspection UUID is required"):
        super().__init__(message)


class UploadError(Exception):
    """A storage put failed. Carries the backend's message."""

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key
        self.message = message
