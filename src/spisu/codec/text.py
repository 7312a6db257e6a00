"""Space-padded alphanumeric fields."""

from __future__ import annotations


def encode_text(value: object, width: int) -> str:
    """Uppercase, then truncate or right-pad ``value`` to ``width``.

    ``str.upper`` keeps extended letters (``ä`` becomes ``Ä``).
    """
    text = "" if value is None else str(value)
    return text.upper()[:width].ljust(width)


def decode_text(field: str) -> str:
    # padding is kept; callers trim when they need to
    return field
