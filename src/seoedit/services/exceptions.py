"""Custom exceptions for SEO editor services."""


class FileModifiedError(Exception):
    """Raised when a document file changes between being read and being written.

    Writing anyway would discard the other change.

    Attributes:
        path: Path to the file that was modified
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str = "File was modified during write operation"):
        """Initialize FileModifiedError.

        Args:
            path: Path to the file that was modified
            message: Human-readable error message
        """
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")
