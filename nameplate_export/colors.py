"""Human-readable names for the label color palette."""

from __future__ import annotations

PALETTE: dict[str, str] = {
    "Green": "#22C55E",
    "Red": "#EF4444",
    "Yellow": "#EAB308",
    "Blue": "#3B82F6",
    "Black": "#000000",
    "White": "#FFFFFF",
    "Orange": "#F97316",
    "Gray": "#6B7280",
}

_NAMES_BY_HEX = {hex_value.lower(): name for name, hex_value in PALETTE.items()}


def _hex_key(value: str) -> str:
    key = value.strip().lower()
    if key and not key.startswith("#"):
        key = f"#{key}"
    return key


def resolve_color_name(hex_value: str) -> str:
    """Return the palette name for ``hex_value`` or the input unchanged."""

    return _NAMES_BY_HEX.get(_hex_key(hex_value or ""), hex_value)


def resolve_hex(value: str, fallback: str = "#000000") -> str:
    """Return a ``#RRGGBB`` value for a palette name or hex string."""

    text = (value or "").strip()
    for name, hex_value in PALETTE.items():
        if text.lower() == name.lower():
            return hex_value
    key = _hex_key(text)
    if len(key) == 4:
        key = "#" + "".join(ch * 2 for ch in key[1:])
    if len(key) == 7 and all(ch in "0123456789abcdef" for ch in key[1:]):
        return key.upper()
    return fallback
