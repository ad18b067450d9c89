"""
Importer Exceptions

Every failure in the import pipeline is raised as a subclass of
PoEditorImportError. None of them are handled below the importer, which
logs once and re-raises.
"""


class PoEditorImportError(Exception):
    """Import error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ApiError(PoEditorImportError):
    """PoEditor API returned a non-success status, malformed JSON or a failed response envelope."""

    def __init__(self, message: str, status_code: int = None, code: str = None, details: dict = None):
        super().__init__(message, code=code, details=details)
        self.status_code = status_code


class NetworkError(PoEditorImportError):
    """Transport failure or non-success status while downloading a translation file."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message, code="network_error", details={"url": url})
        self.url = url
        self.status_code = status_code


class ParseError(PoEditorImportError):
    """Downloaded translation file is not a valid Android resources document."""
    pass


class FileWriteError(PoEditorImportError):
    """Resource file could not be written to disk."""

    def __init__(self, message: str, path=None):
        super().__init__(message, code="file_write_error", details={"path": str(path) if path else None})
        self.path = path
