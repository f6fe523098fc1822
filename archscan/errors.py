"""Error taxonomy for the application scan."""

from pathlib import Path
from typing import Union


class ArchScanError(Exception):
    """Base error carrying the path that failed and why."""

    def __init__(self, path: Union[str, Path], cause: str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause}")


class DirectoryOpenError(ArchScanError):
    """The applications root could not be opened or listed. Fatal."""


class MetadataError(ArchScanError):
    """Info.plist could not yield an executable name. Recoverable."""


class MetadataReadError(MetadataError):
    pass


class MetadataParseError(MetadataError):
    pass


class MetadataMissingKeyError(MetadataError):
    pass


class ExecutableNotFoundError(ArchScanError):
    """CFBundleExecutable points at a file that does not exist."""


class ArchitectureDetectionError(ArchScanError):
    """The prober could not describe the executable."""
