"""
Core models for the application scan.

Bundles are plain dataclasses; scan results are pydantic models so they can be
dumped to JSON without extra glue.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class Architecture(str, Enum):
    """CPU architecture categories an executable is reduced to"""

    INTEL = "intel-64bit"
    APPLE_SILICON = "apple-silicon"
    UNIVERSAL = "universal"
    UNKNOWN = "unknown"


@dataclass
class ApplicationBundle:
    """One installed application directory and its resolved main executable."""

    path: Path
    executable_name: str

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def info_plist(self) -> Path:
        return info_plist_path(self.path)

    @property
    def executable_path(self) -> Path:
        # Always under the bundle, even for names like "/bin/sh"
        return self.path / "Contents" / "MacOS" / self.executable_name.lstrip("/")


def info_plist_path(bundle_path: Path) -> Path:
    """Fixed location of a bundle's metadata file."""
    return bundle_path / "Contents" / "Info.plist"


class ScanStats(BaseModel):
    """Counters collected while walking the applications root"""

    bundles: int = 0
    classified: int = 0
    unclassified: int = 0
    skipped: int = 0
    not_found: int = 0
    errors: int = 0


class ScanResult(BaseModel):
    """Executable paths bucketed by architecture"""

    intel: List[str] = Field(default_factory=list)
    apple_silicon: List[str] = Field(default_factory=list)
    universal: List[str] = Field(default_factory=list)
    stats: ScanStats = Field(default_factory=ScanStats)

    def bucket(self, architecture: Architecture) -> List[str]:
        if architecture == Architecture.INTEL:
            return self.intel
        if architecture == Architecture.APPLE_SILICON:
            return self.apple_silicon
        if architecture == Architecture.UNIVERSAL:
            return self.universal
        raise KeyError(architecture)

    def add(self, architecture: Architecture, path: str) -> bool:
        """Append path to the matching bucket. Returns False for UNKNOWN."""
        if architecture == Architecture.UNKNOWN:
            return False
        self.bucket(architecture).append(path)
        return True

    def sorted(self) -> "ScanResult":
        """Copy of this result with every bucket in ascending path order."""
        return ScanResult(
            intel=sorted(self.intel),
            apple_silicon=sorted(self.apple_silicon),
            universal=sorted(self.universal),
            stats=self.stats.model_copy(),
        )
