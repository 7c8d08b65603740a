"""Utilities for generating readable, practically unique identifiers."""

import re
import secrets
import unicodedata
from collections.abc import Container

# Ids handed out during this process; never handed out twice
_issued: set[str] = set()


def slugify(text: str) -> str:
    """
    Convert text to a lowercase, hyphenated slug.

    Example: "Fix Login Bug!" -> "fix-login-bug"
    """
    # Normalize unicode characters
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()

    # Replace spaces and underscores with hyphens
    text = re.sub(r"[\s_]+", "-", text)

    # Remove any character that isn't alphanumeric or hyphen
    text = re.sub(r"[^a-z0-9\-]", "", text)

    # Collapse multiple hyphens and trim
    return re.sub(r"-+", "-", text).strip("-")


def slugify_column_id(name: str) -> str:
    """
    Convert a column title to an identifier with underscores.

    Examples:
        "In Progress" -> "in_progress"
        "123 Numbers" -> "col_123_numbers"
    """
    name = unicodedata.normalize("NFKD", name)
    name = name.encode("ascii", "ignore").decode("ascii")
    name = name.lower()
    name = re.sub(r"[\s\-]+", "_", name)
    name = re.sub(r"[^a-z0-9_]", "", name)
    name = re.sub(r"_+", "_", name).strip("_")

    # Must start with a letter
    if name and name[0].isdigit():
        name = f"col_{name}"

    return name or "column"


def generate_task_id(title: str, taken: Container[str]) -> str:
    """Generate a task id from a title plus random bits.

    Example: "Fix login bug" -> "fix-login-bug-3f9a1c2e"

    The id is unique among ``taken`` and among ids issued earlier in this
    process.
    """
    base = slugify(title)[:32].strip("-") or "task"
    while True:
        candidate = f"{base}-{secrets.token_hex(4)}"
        if candidate not in taken and candidate not in _issued:
            _issued.add(candidate)
            return candidate


def generate_column_id(title: str, taken: Container[str]) -> str:
    """Generate a column id from a title.

    Uses the bare slug when it is free ("Review" -> "review") and appends
    random bits otherwise.
    """
    base = slugify_column_id(title)[:32].strip("_") or "column"
    candidate = base
    while candidate in taken or candidate in _issued:
        candidate = f"{base}_{secrets.token_hex(3)}"
    _issued.add(candidate)
    return candidate
