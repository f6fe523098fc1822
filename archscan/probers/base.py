from abc import ABC, abstractmethod
from pathlib import Path


class ArchitectureProber(ABC):
    """
    Interface for turning an executable path into an architecture descriptor.
    Swappable so the scanner does not care whether we shell out or read headers.
    """

    name: str

    @abstractmethod
    def probe(self, path: Path) -> str:
        """
        Describe the binary at path.

        Args:
            path: Executable the caller has already checked exists

        Returns:
            Canonical descriptor such as "64-bit executable arm64",
            "universal" or "unknown"

        Raises:
            ArchitectureDetectionError: the binary could not be inspected
        """
        pass
