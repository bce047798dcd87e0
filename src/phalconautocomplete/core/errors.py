"""
Exceptions raised by the packaging stages.

Every stage failure is a ``PackagingError``; ``kind`` names the stage family
so callers and logs can tell a network problem from a broken archive without
parsing messages.
"""


class PackagingError(Exception):
    """Base class for all fatal packaging failures."""

    kind = "packaging"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class WorkspaceError(PackagingError):
    """The temporary workspace or the output directory could not be set up."""

    kind = "environment"


class DownloadError(PackagingError):
    """The upstream archive could not be fetched."""

    kind = "network"


class ArchiveError(PackagingError):
    """An archive could not be extracted or created."""

    kind = "archive"


class StructureError(PackagingError):
    """The extracted release does not have the expected layout."""

    kind = "structure"


class FileOperationError(PackagingError):
    """A copy, move or cleanup on the file system failed."""

    kind = "filesystem"


class SubstitutionError(PackagingError):
    """Placeholder substitution in the plugin descriptor failed."""

    kind = "substitution"
