"""Prober that reads Mach-O and fat headers directly instead of shelling out.

Produces descriptors in the same shape file(1) does, so classification works
unchanged:

    64-bit executable arm64
    64-bit executable x86_64
    universal binary with 2 architectures: x86_64 arm64
"""

import struct
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from archscan.descriptor import UNKNOWN
from archscan.errors import ArchitectureDetectionError
from archscan.probers.base import ArchitectureProber

MH_MAGIC = 0xFEEDFACE
MH_MAGIC_64 = 0xFEEDFACF
FAT_MAGIC = 0xCAFEBABE
FAT_MAGIC_64 = 0xCAFEBABF

# Java class files share FAT_MAGIC; their version field is always larger.
MAX_FAT_ARCHES = 30

CPU_ARCH_ABI64 = 0x01000000
CPU_ARCH_ABI64_32 = 0x02000000
CPU_SUBTYPE_MASK = 0xFF000000

CPU_TYPE_X86 = 0x7
CPU_TYPE_X86_64 = CPU_TYPE_X86 | CPU_ARCH_ABI64
CPU_TYPE_ARM = 0xC
CPU_TYPE_ARM64 = CPU_TYPE_ARM | CPU_ARCH_ABI64
CPU_TYPE_ARM64_32 = CPU_TYPE_ARM | CPU_ARCH_ABI64_32
CPU_TYPE_POWERPC = 0x12
CPU_TYPE_POWERPC64 = CPU_TYPE_POWERPC | CPU_ARCH_ABI64

CPU_SUBTYPE_X86_64_H = 8
CPU_SUBTYPE_ARM64E = 2

CPU_TYPE_NAMES = {
    CPU_TYPE_X86: "i386",
    CPU_TYPE_X86_64: "x86_64",
    CPU_TYPE_ARM: "arm",
    CPU_TYPE_ARM64: "arm64",
    CPU_TYPE_ARM64_32: "arm64_32",
    CPU_TYPE_POWERPC: "ppc",
    CPU_TYPE_POWERPC64: "ppc64",
}

FILETYPE_NAMES = {
    0x1: "object",
    0x2: "executable",
    0x6: "dynamically linked shared library",
    0x7: "dynamic linker",
    0x8: "bundle",
}

FAT_HEADER_SIZE = 8
FAT_ARCH_SIZE = 20
FAT_ARCH_64_SIZE = 32
MACH_HEADER_SIZE = 16


def arch_name(cputype: int, cpusubtype: int) -> str:
    subtype = cpusubtype & ~CPU_SUBTYPE_MASK
    if cputype == CPU_TYPE_X86_64 and subtype == CPU_SUBTYPE_X86_64_H:
        return "x86_64h"
    if cputype == CPU_TYPE_ARM64 and subtype == CPU_SUBTYPE_ARM64E:
        return "arm64e"
    return CPU_TYPE_NAMES.get(cputype, f"cputype {cputype:#x}")


def parse_fat_header(header: bytes) -> Optional[List[str]]:
    """Architecture names from a fat header, or None if header is not one."""
    if len(header) < FAT_HEADER_SIZE:
        return None

    magic, nfat_arch = struct.unpack(">II", header[:FAT_HEADER_SIZE])
    if magic not in (FAT_MAGIC, FAT_MAGIC_64):
        return None
    if nfat_arch == 0 or nfat_arch > MAX_FAT_ARCHES:
        return None

    entry_size = FAT_ARCH_64_SIZE if magic == FAT_MAGIC_64 else FAT_ARCH_SIZE
    archs = []
    for i in range(nfat_arch):
        start = FAT_HEADER_SIZE + i * entry_size
        entry = header[start:start + 8]
        if len(entry) < 8:
            break
        cputype, cpusubtype = struct.unpack(">II", entry)
        archs.append(arch_name(cputype, cpusubtype))
    return archs


def parse_thin_header(header: bytes) -> Optional[Tuple[bool, str, str]]:
    """(is_64bit, filetype name, arch name) for a thin Mach-O header."""
    if len(header) < MACH_HEADER_SIZE:
        return None

    for endian in ("<", ">"):
        magic, cputype, cpusubtype, filetype = struct.unpack(f"{endian}IIII", header[:MACH_HEADER_SIZE])
        if magic in (MH_MAGIC, MH_MAGIC_64):
            filetype_name = FILETYPE_NAMES.get(filetype, f"filetype {filetype}")
            return magic == MH_MAGIC_64, filetype_name, arch_name(cputype, cpusubtype)
    return None


def describe_header(header: bytes) -> str:
    """Descriptor for the leading bytes of a binary."""
    archs = parse_fat_header(header)
    if archs is not None:
        return f"universal binary with {len(archs)} architectures: {' '.join(archs)}"

    thin = parse_thin_header(header)
    if thin is None:
        return UNKNOWN

    is_64bit, filetype_name, arch = thin
    if is_64bit:
        return f"64-bit {filetype_name} {arch}"
    return f"{filetype_name} {arch}"


class MachOHeaderProber(ArchitectureProber):
    """Reads just enough of the file to describe its architectures."""

    name = "macho"

    def __init__(self, read_size: int = 4096):
        self.read_size = read_size

    def probe(self, path: Path) -> str:
        try:
            with open(path, "rb") as f:
                header = f.read(self.read_size)
        except OSError as e:
            raise ArchitectureDetectionError(path, e.strerror or str(e)) from e

        descriptor = describe_header(header)
        logger.debug(f"header {path} -> {descriptor!r}")
        return descriptor
