class DirectoryError(Exception):
    """Raised when an external drug directory cannot answer a lookup."""


class DirectoryNetworkError(DirectoryError):
    """Raised when a directory call fails due to network or HTTP status issues."""


class DirectoryValidationError(DirectoryError):
    """Raised when a directory payload does not have the expected shape."""
