"""Stable per-player chart colors."""

SATURATION = 70
LIGHTNESS = 50


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def player_hue(player_id: str) -> int:
    """Hash a player id to a hue in ``[0, 360)``.

    Follows the classic JavaScript ``hash << 5`` string hash over UTF-16 code
    units, so ids get the same hue here as in a browser.
    """
    encoded = player_id.encode("utf-16-le")
    hash_ = 0
    for offset in range(0, len(encoded), 2):
        code_unit = int.from_bytes(encoded[offset : offset + 2], "little")
        hash_ = code_unit + (_to_int32(_to_int32(hash_) << 5) - hash_)
    return abs(hash_) % 360


def player_color(player_id: str) -> str:
    """CSS ``hsl()`` color for a player."""
    return f"hsl({player_hue(player_id)}, {SATURATION}%, {LIGHTNESS}%)"
