class DevConsoleError(Exception):
    pass


class ValidationError(DevConsoleError):
    pass


class ConflictError(DevConsoleError):
    pass


class MarkupShapeError(DevConsoleError):
    pass


class RequestFailed(DevConsoleError):
    pass


class RemoteError(DevConsoleError):
    def __init__(self, message: str, status_code: int, path: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.path = path
