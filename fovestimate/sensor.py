"""
Sensor and unit constants for FOV Estimation

All angles and crop factors are computed against the 35mm full-frame
reference sensor (36 x 24 mm). This module also converts the EXIF
FocalPlaneResolutionUnit code into a millimetre multiplier.
"""

import logging
from typing import Optional

from .enums import FocalPlaneUnit
from .models import SensorModel

logger = logging.getLogger(__name__)

FULL_FRAME = SensorModel(width_mm=36.0, height_mm=24.0)

SENSOR_WIDTH_MM = FULL_FRAME.width_mm
SENSOR_HEIGHT_MM = FULL_FRAME.height_mm
SENSOR_DIAGONAL_MM = FULL_FRAME.diagonal_mm  # ~43.266 mm


def focal_plane_unit_multiplier(unit_code: Optional[int]) -> Optional[float]:
    """Millimetres per focal-plane resolution unit.

    Returns None for unit 1 ("no absolute unit"), which makes a physical
    sensor size impossible to recover. A missing or unrecognised code is
    read as inches: many cameras omit or mis-tag the unit and inches is the
    EXIF default. That is a policy choice, not a physical fact.
    """
    try:
        unit = FocalPlaneUnit(unit_code)
    except ValueError:
        logger.debug(f"Unrecognised FocalPlaneResolutionUnit {unit_code!r}, assuming inches")
        unit = FocalPlaneUnit.INCH

    if unit is FocalPlaneUnit.NONE:
        return None
    elif unit is FocalPlaneUnit.INCH:
        return 25.4
    elif unit is FocalPlaneUnit.CENTIMETRE:
        return 10.0
    elif unit is FocalPlaneUnit.MILLIMETRE:
        return 1.0
    elif unit is FocalPlaneUnit.MICROMETRE:
        return 0.001
    raise AssertionError(f"Unhandled focal plane unit: {unit!r}")
