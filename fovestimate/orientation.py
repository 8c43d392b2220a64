"""
Orientation handling for FOV Estimation

Stored pixel dimensions follow the raw sensor readout. EXIF orientations
5-8 display the image rotated by 90 or 270 degrees, so the on-screen width
and height are transposed.
"""

from typing import Optional, Tuple

ROTATED_ORIENTATIONS = frozenset({5, 6, 7, 8})


def is_rotated(orientation: Optional[int]) -> bool:
    return orientation in ROTATED_ORIENTATIONS


def adjust_for_orientation(width: int, height: int, orientation: Optional[int]) -> Tuple[int, int]:
    """Return (visual_width, visual_height) for the given orientation code.

    Unknown codes are treated as unrotated.
    """
    if is_rotated(orientation):
        return height, width
    return width, height
