"""
Validation utilities for proxied paths
"""

from typing import List

from proxy_service.models.errors import InvalidIdentifierError, InvalidPathError

# Values a frontend produces when it interpolates a missing id
PLACEHOLDER_IDS = frozenset({"", "undefined", "null"})


def parse_resource_id(raw: str, label: str = "resource") -> int:
    """
    Parse a path identifier into a positive integer.

    Raises InvalidIdentifierError for placeholders and anything that is not
    a base-10 positive integer, so no backend call is made for them.
    """
    value = (raw or "").strip()

    if value in PLACEHOLDER_IDS:
        raise InvalidIdentifierError(
            f"Invalid {label} ID",
            details=f"{label.capitalize()} ID is required and must be a valid number",
        )

    if not (value.isascii() and value.isdigit()) or int(value) <= 0:
        raise InvalidIdentifierError(
            f"Invalid {label} ID format",
            details=f"{label.capitalize()} ID must be a positive integer",
        )

    return int(value)


def split_media_path(raw: str) -> List[str]:
    """Split an image path into its non-empty segments"""
    segments = [segment for segment in (raw or "").split("/") if segment]
    if not segments:
        raise InvalidPathError("Invalid image path", details="Image path must not be empty")
    return segments
