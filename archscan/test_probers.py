import os
import struct

import pytest

from archscan.descriptor import classify
from archscan.errors import ArchitectureDetectionError
from archscan.models import Architecture
from archscan.probers import FileCommandProber, MachOHeaderProber
from archscan.probers.macho import (
    CPU_TYPE_ARM64,
    CPU_TYPE_X86,
    CPU_TYPE_X86_64,
    FAT_MAGIC,
    FAT_MAGIC_64,
    MH_MAGIC,
    MH_MAGIC_64,
    describe_header,
)

posix_only = pytest.mark.skipif(os.name != "posix", reason="needs /bin/sh")


def fake_command(tmp_path, body, name="fakefile"):
    script = tmp_path / name
    script.write_text("#!/bin/sh\n" + body + "\n")
    script.chmod(0o755)
    return str(script)


def thin_header(cputype, cpusubtype=0, filetype=2, magic=MH_MAGIC_64, endian="<"):
    header = struct.pack(f"{endian}IIIIIII", magic, cputype, cpusubtype, filetype, 0, 0, 0)
    if magic == MH_MAGIC_64:
        header += struct.pack(f"{endian}I", 0)
    return header


def fat_header(*cputypes, magic=FAT_MAGIC):
    header = struct.pack(">II", magic, len(cputypes))
    for i, cputype in enumerate(cputypes):
        if magic == FAT_MAGIC_64:
            header += struct.pack(">IIQQII", cputype, 0, 16384 * (i + 1), 1024, 14, 0)
        else:
            header += struct.pack(">IIIII", cputype, 0, 16384 * (i + 1), 1024, 14)
    return header


# ---------------------------------------------------------------------------
# file(1) prober
# ---------------------------------------------------------------------------


@posix_only
def test_file_prober_reduces_output(tmp_path):
    command = fake_command(tmp_path, 'echo "$1: Mach-O 64-bit executable arm64"')
    target = tmp_path / "Foo"
    target.write_bytes(b"")

    descriptor = FileCommandProber(command).probe(target)

    assert descriptor == "64-bit executable arm64"
    assert classify(descriptor) == Architecture.APPLE_SILICON


@posix_only
def test_file_prober_captures_stderr(tmp_path):
    command = fake_command(tmp_path, 'echo "$1: Mach-O universal binary" >&2')
    prober = FileCommandProber(command)

    output = prober.run(tmp_path / "Foo")

    assert "universal" in output
    assert prober.probe(tmp_path / "Foo") == "universal"


@posix_only
def test_file_prober_reinvokes_every_call(tmp_path):
    counter = tmp_path / "calls"
    command = fake_command(tmp_path, f'echo x >> "{counter}"\necho "$1: data"')
    prober = FileCommandProber(command)

    prober.probe(tmp_path / "Foo")
    prober.probe(tmp_path / "Foo")

    assert counter.read_text().count("x") == 2


@posix_only
def test_file_prober_nonzero_exit(tmp_path):
    command = fake_command(tmp_path, 'echo "cannot open $1"\nexit 1')
    with pytest.raises(ArchitectureDetectionError) as exc_info:
        FileCommandProber(command).probe(tmp_path / "Foo")
    assert "status 1" in exc_info.value.cause


@posix_only
def test_file_prober_undecodable_output(tmp_path):
    command = fake_command(tmp_path, "printf '\\377\\376\\375'")
    with pytest.raises(ArchitectureDetectionError):
        FileCommandProber(command).probe(tmp_path / "Foo")


def test_file_prober_missing_command(tmp_path):
    prober = FileCommandProber(str(tmp_path / "no-such-command"))
    with pytest.raises(ArchitectureDetectionError) as exc_info:
        prober.probe(tmp_path / "Foo")
    assert exc_info.value.path == tmp_path / "Foo"


# ---------------------------------------------------------------------------
# Mach-O header prober
# ---------------------------------------------------------------------------


def test_thin_arm64():
    descriptor = describe_header(thin_header(CPU_TYPE_ARM64))
    assert descriptor == "64-bit executable arm64"
    assert classify(descriptor) == Architecture.APPLE_SILICON


def test_thin_arm64e():
    assert describe_header(thin_header(CPU_TYPE_ARM64, cpusubtype=0x80000002)) == "64-bit executable arm64e"


def test_thin_x86_64():
    descriptor = describe_header(thin_header(CPU_TYPE_X86_64, cpusubtype=3))
    assert descriptor == "64-bit executable x86_64"
    assert classify(descriptor) == Architecture.INTEL


def test_big_endian_header():
    assert describe_header(thin_header(CPU_TYPE_X86_64, endian=">")) == "64-bit executable x86_64"


def test_32bit_intel_is_not_bucketed():
    descriptor = describe_header(thin_header(CPU_TYPE_X86, magic=MH_MAGIC))
    assert descriptor == "executable i386"
    assert classify(descriptor) == Architecture.UNKNOWN


def test_dylib_is_not_bucketed():
    descriptor = describe_header(thin_header(CPU_TYPE_ARM64, filetype=6))
    assert descriptor == "64-bit dynamically linked shared library arm64"
    assert classify(descriptor) == Architecture.UNKNOWN


@pytest.mark.parametrize("magic", [FAT_MAGIC, FAT_MAGIC_64])
def test_fat_binary(magic):
    descriptor = describe_header(fat_header(CPU_TYPE_X86_64, CPU_TYPE_ARM64, magic=magic))
    assert descriptor == "universal binary with 2 architectures: x86_64 arm64"
    assert classify(descriptor) == Architecture.UNIVERSAL


def test_java_class_file_is_not_fat():
    assert describe_header(b"\xca\xfe\xba\xbe\x00\x00\x00\x34" + b"\x00" * 32) == "unknown"


@pytest.mark.parametrize("data", [b"", b"\x00", b"#!/bin/sh\necho hello\n"])
def test_non_macho_is_unknown(data):
    assert describe_header(data) == "unknown"


def test_macho_prober_reads_file(tmp_path):
    target = tmp_path / "Foo"
    target.write_bytes(fat_header(CPU_TYPE_X86_64, CPU_TYPE_ARM64) + b"\x00" * 64)
    assert MachOHeaderProber().probe(target).startswith("universal binary")


def test_macho_prober_unreadable(tmp_path):
    with pytest.raises(ArchitectureDetectionError):
        MachOHeaderProber().probe(tmp_path)
