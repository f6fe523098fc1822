from typing import Optional

from archscan.probers.base import ArchitectureProber
from archscan.probers.file_command import DEFAULT_FILE_COMMAND, FileCommandProber
from archscan.probers.macho import MachOHeaderProber

PROBER_NAMES = ("file", "macho")


class ProberFactory:
    """Factory for creating architecture probers."""

    @staticmethod
    def get_prober(name: str = "file", file_command: Optional[str] = None) -> ArchitectureProber:
        """Get the prober registered under name."""
        if name not in PROBER_NAMES:
            raise ValueError(f"Unknown prober {name!r}, expected one of {', '.join(PROBER_NAMES)}")

        if name == "macho":
            return MachOHeaderProber()

        return FileCommandProber(file_command or DEFAULT_FILE_COMMAND)
