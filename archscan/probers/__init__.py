from .base import ArchitectureProber
from .file_command import FileCommandProber
from .macho import MachOHeaderProber
from .factory import ProberFactory, PROBER_NAMES

__all__ = [
    "ArchitectureProber",
    "FileCommandProber",
    "MachOHeaderProber",
    "ProberFactory",
    "PROBER_NAMES",
]
