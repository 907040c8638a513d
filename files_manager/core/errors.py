# files_manager/core/errors.py


class FilesManagerError(Exception):
    """Base error; carries the message and HTTP status sent back to the client."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class Unauthorized(FilesManagerError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationFailed(FilesManagerError):
    status_code = 400


class NotFound(FilesManagerError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class UnsupportedOperation(FilesManagerError):
    status_code = 400


class StorageFailure(FilesManagerError):
    status_code = 400
