"""Info.plist reader - pulls the main executable name out of a bundle's metadata."""

import plistlib
from pathlib import Path
from typing import Any, Dict

from archscan.errors import MetadataMissingKeyError, MetadataParseError, MetadataReadError

EXECUTABLE_KEY = "CFBundleExecutable"


def load_plist(plist_path: Path) -> Dict[str, Any]:
    """Read and parse a property list (XML or binary) into a dict."""
    try:
        content = plist_path.read_bytes()
    except OSError as e:
        raise MetadataReadError(plist_path, e.strerror or str(e)) from e

    try:
        data = plistlib.loads(content)
    except Exception as e:
        # plistlib leaks AttributeError/TypeError etc. on malformed values
        raise MetadataParseError(plist_path, f"invalid property list: {e}") from e

    if not isinstance(data, dict):
        raise MetadataParseError(plist_path, f"expected a dictionary at top level, got {type(data).__name__}")

    return data


def read_executable_name(plist_path: Path) -> str:
    """Return CFBundleExecutable from the plist at plist_path.

    Raises:
        MetadataReadError: the file could not be read
        MetadataParseError: the content is not a property list dictionary
        MetadataMissingKeyError: the key is absent or not a string
    """
    data = load_plist(plist_path)
    value = data.get(EXECUTABLE_KEY)
    if not isinstance(value, str) or not value.strip("/"):
        raise MetadataMissingKeyError(plist_path, f"{EXECUTABLE_KEY} not found")
    return value
