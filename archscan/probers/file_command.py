"""Prober backed by the file(1) utility."""

import subprocess
from pathlib import Path

from loguru import logger

from archscan.descriptor import extract_architecture
from archscan.errors import ArchitectureDetectionError
from archscan.probers.base import ArchitectureProber

DEFAULT_FILE_COMMAND = "file"


class FileCommandProber(ArchitectureProber):
    """Runs `file <path>` and reduces its combined output to a descriptor.

    One process per call, no caching and no timeout.
    """

    name = "file"

    def __init__(self, command: str = DEFAULT_FILE_COMMAND):
        self.command = command

    def run(self, path: Path) -> str:
        """Return the raw combined stdout/stderr of the introspection command."""
        try:
            completed = subprocess.run(
                [self.command, str(path)],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            raise ArchitectureDetectionError(path, f"could not run {self.command}: {e}") from e

        try:
            output = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ArchitectureDetectionError(path, f"undecodable output from {self.command}") from e

        if completed.returncode != 0:
            raise ArchitectureDetectionError(
                path, f"{self.command} exited with status {completed.returncode}: {output.strip()}"
            )

        return output

    def probe(self, path: Path) -> str:
        output = self.run(path)
        descriptor = extract_architecture(output, str(path))
        logger.debug(f"{self.command} {path} -> {descriptor!r}")
        return descriptor
