"""Domain normalization helpers."""

from collections.abc import Iterable


def normalize_symbol(symbol: str | None) -> str | None:
    """Normalize asset symbols to their canonical upper-case form.

    Args:
        symbol: Raw symbol supplied by a caller.

    Returns:
        str | None: Upper-cased symbol, or None when blank.
    """
    if not symbol:
        return None
    cleaned = symbol.strip()
    return cleaned.upper() if cleaned else None


def normalize_currency(code: str | None, default: str) -> str:
    """Normalize currency codes, falling back to a default.

    Args:
        code: Raw currency code.
        default: Code used when the value is blank.

    Returns:
        str: Upper-cased currency code.
    """
    if not code:
        return default
    cleaned = code.strip()
    return cleaned.upper() if cleaned else default


def normalize_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Strip tags, drop blanks and duplicates while keeping order."""
    if not tags:
        return ()
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip() if isinstance(tag, str) else ""
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


__all__ = ["normalize_symbol", "normalize_currency", "normalize_tags"]
