"""
Close-focus correction for FOV Estimation

This module applies the thin-lens equation to account for the increase in
effective focal length when the subject is at a finite distance. The
correction narrows the computed FOV and is 1.0 at infinity.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def close_focus_correction_factor(focal_length_mm: Optional[float],
                                  focus_distance_m: Optional[float]) -> float:
    """Multiplier (>= 1.0) for the effective focal length at the focus distance.

    Missing, zero or negative focus distance is treated as infinity. A focus
    distance at or inside the focal length cannot be modelled and also
    returns 1.0. Without a physical focal length there is nothing to correct.
    """
    if not focus_distance_m or focus_distance_m <= 0:
        return 1.0
    if focal_length_mm is None:
        logger.debug("No physical focal length, skipping close-focus correction")
        return 1.0

    # Image-side distance in mm
    d = 1000 * focus_distance_m - focal_length_mm
    if d <= 0:
        logger.debug(f"Focus distance {focus_distance_m} m is inside the focal length, no correction")
        return 1.0

    return 1 + focal_length_mm / d
