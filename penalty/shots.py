"""Named penalty presets.

Aim in degrees (negative = left), power in percent, curve from -100 (bends
left) to 100 (bends right).
"""

from penalty.types import ShotParams

SHOT_PRESETS = {
    "straight_drive": {
        "label": "Straight Drive",
        "aim": 0,
        "power": 100,
        "curve": 0,
    },
    "top_left": {
        "label": "Placed Left",
        "aim": -30,
        "power": 90,
        "curve": 0,
    },
    "top_right": {
        "label": "Placed Right",
        "aim": 30,
        "power": 90,
        "curve": 0,
    },
    "far_post": {
        "label": "Far Post (in off the post)",
        "aim": 40,
        "power": 100,
        "curve": 0,
    },
    "curler_left": {
        "label": "Curler Bending Left",
        "aim": 35,
        "power": 90,
        "curve": -60,
    },
    "curler_right": {
        "label": "Curler Bending Right",
        "aim": -35,
        "power": 90,
        "curve": 60,
    },
    "scuffed": {
        "label": "Scuffed (dies short)",
        "aim": 5,
        "power": 30,
        "curve": 0,
    },
}


def get_shot(key: str) -> ShotParams:
    """Return ShotParams for a preset key."""
    preset = SHOT_PRESETS[key]
    return ShotParams(aim=preset["aim"], power=preset["power"], curve=preset["curve"])


def list_shots() -> list[str]:
    """Return all available shot preset keys."""
    return list(SHOT_PRESETS.keys())
