"""Filename sanitizing and collision-resistant stored-name generation.

The client-supplied filename is display-only; the stored name produced here
is the only name that ever reaches the filesystem.
"""

import re
import secrets

from sikap.shared.utils.datetime import epoch_millis

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")
_DOT_RUNS = re.compile(r"\.{2,}")
_EXTENSION = re.compile(r"\.[a-z0-9]{1,10}")

DEFAULT_BASE_NAME = "file"
# Keeps the stored name (timestamp, token, base, extension) well under NAME_MAX.
MAX_BASE_LENGTH = 100


def sanitize_filename(name: str) -> str:
    """Replace characters outside [a-zA-Z0-9.-] with '_', collapse '_' runs, lower-case."""
    sanitized = _UNSAFE_CHARS.sub("_", name)
    sanitized = _UNDERSCORE_RUNS.sub("_", sanitized)
    return sanitized.lower()


def split_extension(original_filename: str) -> tuple[str, str]:
    """Split off a lower-cased extension ('.pdf').

    Returns (base, extension); extension is '' when the part after the last
    dot is not 1-10 plain ASCII letters and digits.
    """
    dot = original_filename.rfind(".")
    if dot == -1:
        return original_filename, ""
    extension = original_filename[dot:].lower()
    if not _EXTENSION.fullmatch(extension):
        return original_filename, ""
    return original_filename[:dot], extension


def generate_secure_name(original_filename: str) -> str:
    """Return '{epoch_ms}_{16 hex chars}_{sanitized_base}{extension}'.

    Safe as a bare filename under a fixed root: no path separators, no '..',
    never empty, and under 150 characters. Two calls in the same
    millisecond differ by the random token.
    """
    base, extension = split_extension(original_filename or "")
    safe_base = _DOT_RUNS.sub(".", sanitize_filename(base)).strip("._-")
    safe_base = safe_base[:MAX_BASE_LENGTH].strip("._-")
    if not safe_base:
        safe_base = DEFAULT_BASE_NAME
    token = secrets.token_hex(8)
    return f"{epoch_millis()}_{token}_{safe_base}{extension}"
