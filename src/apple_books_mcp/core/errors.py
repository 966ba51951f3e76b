"""Error types raised while reading the Apple Books stores.

Every error carries a ``kind`` so the dispatcher can report failures
uniformly without inspecting messages.
"""


class LibraryError(Exception):
    """Base class for all expected failures of a library operation."""

    kind = "library_error"


class DirectoryNotFoundError(LibraryError):
    kind = "directory_not_found"

    def __init__(self, directory: str):
        self.directory = directory
        super(DirectoryNotFoundError, self).__init__(
            f"Store directory does not exist: {directory}"
        )


class DirectoryAccessError(LibraryError):
    kind = "directory_access_denied"

    def __init__(self, directory: str):
        self.directory = directory
        super(DirectoryAccessError, self).__init__(
            f"Permission denied while reading store directory: {directory}"
        )


class StoreNotFoundError(LibraryError):
    kind = "store_not_found"

    def __init__(self, directory: str, extension: str):
        self.directory = directory
        super(StoreNotFoundError, self).__init__(
            f"No SQLite database ({extension}) found in {directory}"
        )


class ExtractionError(LibraryError):
    """Opening a store or running a query against it failed."""

    kind = "extraction_failed"


class SearchQueryError(LibraryError):
    kind = "validation_error"


class UnknownToolError(LibraryError):
    kind = "unknown_tool"

    def __init__(self, name: str):
        self.name = name
        super(UnknownToolError, self).__init__(f"Unknown tool: {name}")
