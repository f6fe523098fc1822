"""Bundle scanner - walks the applications root and buckets executables by architecture."""

import os
from pathlib import Path
from typing import List, Optional

from loguru import logger

from archscan.descriptor import classify
from archscan.errors import (
    ArchitectureDetectionError,
    DirectoryOpenError,
    ExecutableNotFoundError,
    MetadataError,
)
from archscan.metadata import read_executable_name
from archscan.models import ApplicationBundle, Architecture, ScanResult, info_plist_path
from archscan.probers import ArchitectureProber, FileCommandProber

APPLICATIONS_ROOT = Path("/Applications")


def list_bundle_dirs(root: Path) -> List[Path]:
    """Immediate subdirectories of root, in directory listing order.

    The directory handle is released before returning, even on error.
    Symlinks are not followed.
    """
    try:
        with os.scandir(root) as entries:
            return [Path(entry.path) for entry in entries if entry.is_dir(follow_symlinks=False)]
    except OSError as e:
        raise DirectoryOpenError(root, e.strerror or str(e)) from e


def resolve_bundle(bundle_dir: Path) -> Optional[ApplicationBundle]:
    """Read a bundle's Info.plist and locate its main executable.

    Returns None if the directory has no Info.plist (not a bundle).

    Raises:
        MetadataError: Info.plist unreadable, malformed or without CFBundleExecutable
        ExecutableNotFoundError: Contents/MacOS/<name> does not exist
    """
    plist_path = info_plist_path(bundle_dir)
    if not plist_path.exists():
        return None

    bundle = ApplicationBundle(path=bundle_dir, executable_name=read_executable_name(plist_path))
    if not bundle.executable_path.exists():
        raise ExecutableNotFoundError(bundle.executable_path, "executable file not found")
    return bundle


def scan_applications(
    root: Path = APPLICATIONS_ROOT,
    prober: Optional[ArchitectureProber] = None,
) -> ScanResult:
    """
    Scan every bundle under root and classify its main executable.

    Per-bundle failures are logged and skipped; only a failure to list root
    itself is raised.

    Args:
        root: Directory whose immediate subdirectories are application bundles
        prober: Architecture prober, defaults to the file(1) utility

    Returns:
        ScanResult with each bucket sorted by path

    Raises:
        DirectoryOpenError: root could not be opened or listed
    """
    prober = prober or FileCommandProber()
    result = ScanResult()
    stats = result.stats

    for bundle_dir in list_bundle_dirs(root):
        stats.bundles += 1

        try:
            bundle = resolve_bundle(bundle_dir)
        except MetadataError as e:
            logger.warning(f"Error parsing {e.path}: {e.cause}")
            stats.errors += 1
            continue
        except ExecutableNotFoundError as e:
            logger.info(f"Executable file not found at: {e.path}")
            stats.not_found += 1
            continue

        if bundle is None:
            stats.skipped += 1
            continue

        try:
            descriptor = prober.probe(bundle.executable_path)
        except ArchitectureDetectionError as e:
            logger.warning(f"Error determining architecture: {e}")
            stats.errors += 1
            continue

        architecture = classify(descriptor)
        logger.debug(f"{bundle.name}: {descriptor} -> {architecture.value}")

        if result.add(architecture, str(bundle.executable_path)):
            stats.classified += 1
        else:
            stats.unclassified += 1

    return result.sorted()


def inspect_executable(path: Path, prober: Optional[ArchitectureProber] = None) -> tuple[str, Architecture]:
    """Probe a single executable and return (descriptor, architecture)."""
    prober = prober or FileCommandProber()
    descriptor = prober.probe(path)
    return descriptor, classify(descriptor)
