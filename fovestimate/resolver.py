"""
Focal-Length Resolver for FOV Estimation

This module resolves the 35mm-equivalent focal length of an image from
whatever subset of focal-length tags its metadata carries. Each strategy
is a pure function returning a positive value in millimetres or None; the
resolver tries them in priority order and stops at the first success.
"""

import logging
import math
from typing import Callable, Optional, Tuple

from .errors import ResolutionError
from .models import MetadataRecord
from .sensor import SENSOR_WIDTH_MM, SENSOR_HEIGHT_MM, focal_plane_unit_multiplier

logger = logging.getLogger(__name__)

Strategy = Callable[[MetadataRecord], Optional[float]]


def _positive(value: Optional[float]) -> Optional[float]:
    """The value if it is a finite number above zero, else None"""
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return value


def from_direct_tag(record: MetadataRecord) -> Optional[float]:
    """FocalLengthIn35mmFormat, taken as-is"""
    return _positive(record.focal_length_35mm)


def from_scale_factor(record: MetadataRecord) -> Optional[float]:
    """FocalLength x ScaleFactor35efl (an ExifTool composite, not native EXIF)"""
    focal_length = _positive(record.focal_length)
    scale_factor = _positive(record.scale_factor_35efl)
    if focal_length is None or scale_factor is None:
        return None
    return _positive(focal_length * scale_factor)


def actual_sensor_dimensions(record: MetadataRecord) -> Optional[Tuple[Optional[float], Optional[float]]]:
    """Back-calculate the physical sensor size (mm) from focal-plane resolution tags.

    Returns (sensor_width, sensor_height) where an axis is None when its
    resolution tag is missing or not positive, or None when neither axis
    can be derived.
    """
    multiplier = focal_plane_unit_multiplier(record.focal_plane_unit)
    if multiplier is None:
        return None

    sensor_width = None
    sensor_height = None

    x_res = _positive(record.focal_plane_x_res)
    if x_res is not None:
        sensor_width = (record.width / x_res) * multiplier

    y_res = _positive(record.focal_plane_y_res)
    if y_res is not None:
        sensor_height = (record.height / y_res) * multiplier

    if sensor_width is None and sensor_height is None:
        return None

    return sensor_width, sensor_height


def from_focal_plane(record: MetadataRecord) -> Optional[float]:
    """FocalLength x crop factor derived from the physical sensor size.

    When both axes resolve, the per-axis crop factors are averaged.
    """
    focal_length = _positive(record.focal_length)
    if focal_length is None:
        return None

    sensor = actual_sensor_dimensions(record)
    if sensor is None:
        return None
    sensor_width, sensor_height = sensor

    crop_factors = []
    if sensor_width:
        crop_factors.append(SENSOR_WIDTH_MM / sensor_width)
    if sensor_height:
        crop_factors.append(SENSOR_HEIGHT_MM / sensor_height)

    if not crop_factors:
        return None

    crop_factor = sum(crop_factors) / len(crop_factors)
    logger.debug(f"Focal-plane crop factor {crop_factor:.4f} from {len(crop_factors)} axis/axes")
    return _positive(focal_length * crop_factor)


STRATEGIES: Tuple[Strategy, ...] = (
    from_direct_tag,
    from_scale_factor,
    from_focal_plane,
)


def resolve_35mm_equivalent(record: MetadataRecord) -> float:
    """Resolve the 35mm-equivalent focal length in mm, or raise ResolutionError"""
    for strategy in STRATEGIES:
        value = strategy(record)
        if value is not None:
            logger.debug(f"Resolved 35mm-equivalent focal length {value:.2f} mm via {strategy.__name__}")
            return value

    raise ResolutionError(
        "Cannot determine 35 mm-equivalent focal length. "
        "The image must contain either FocalLengthIn35mmFormat, "
        "FocalLength + ScaleFactor35efl, or FocalLength + FocalPlaneResolution tags. "
        "FocalPlaneResolutionUnit must not be 1 (no-unit)."
    )
