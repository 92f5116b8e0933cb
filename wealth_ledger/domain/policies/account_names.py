"""Naming policies for user-created ledger entities."""

_HEX_CHARS = set("0123456789abcdef")
MAX_NAME_LENGTH = 120


def is_valid_account_name(name: str) -> bool:
    """Return True when the name is usable as a display name.

    Blank names, names longer than :data:`MAX_NAME_LENGTH` and names that
    look like opaque 32-character hex guids are rejected.

    Args:
        name: Account or category name to evaluate.

    Returns:
        bool: True when the name should be accepted.
    """
    candidate = name.strip()
    if not candidate or len(candidate) > MAX_NAME_LENGTH:
        return False
    if len(candidate) == 32:
        lowered = candidate.lower()
        if all(char in _HEX_CHARS for char in lowered):
            return False
    return True


__all__ = ["MAX_NAME_LENGTH", "is_valid_account_name"]
