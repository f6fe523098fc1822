"""Reduce introspection text to a canonical descriptor and classify it."""

from typing import List, Optional, Tuple

from archscan.models import Architecture

UNIVERSAL = "universal"
UNKNOWN = "unknown"

# Substring patterns checked in order, first match wins.
CATEGORY_PATTERNS: List[Tuple[str, Architecture]] = [
    ("executable arm64", Architecture.APPLE_SILICON),
    ("64-bit executable x86_64", Architecture.INTEL),
    (UNIVERSAL, Architecture.UNIVERSAL),
]

MIN_TOKENS = 5


def _split_prefix(output: str, path: Optional[str]) -> List[str]:
    """Tokens following the leading "<path>:" of a file(1) style line."""
    text = output.strip()
    if path:
        prefix = f"{path}:"
        if text.startswith(prefix):
            return text[len(prefix):].split()

    tokens = text.split()
    for i, token in enumerate(tokens):
        if token.endswith(":"):
            return tokens[i + 1:]
    return tokens[1:]


def extract_architecture(output: str, path: Optional[str] = None) -> str:
    """Turn a line like "/x/Foo: Mach-O 64-bit executable x86_64" into "64-bit executable x86_64".

    Any token equal to "universal" short-circuits to "universal". The path
    prefix counts as one token no matter how many spaces it holds; with fewer
    than five tokens the descriptor is "unknown".
    """
    if UNIVERSAL in output.split():
        return UNIVERSAL

    remainder = _split_prefix(output, path)
    if 1 + len(remainder) < MIN_TOKENS:
        return UNKNOWN

    # Drop the format token ("Mach-O"), keep "<bitness> <filetype> <arch>".
    return " ".join(remainder[1:])


def classify(descriptor: str) -> Architecture:
    for pattern, architecture in CATEGORY_PATTERNS:
        if pattern in descriptor:
            return architecture
    return Architecture.UNKNOWN
