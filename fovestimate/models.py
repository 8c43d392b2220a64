"""
Data models for FOV Estimation

This module contains the immutable records passed between the metadata
reader, the computation components and the reporting layer.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .errors import InvalidDimensionsError


@dataclass(frozen=True)
class SensorModel:
    """Physical sensor dimensions in millimetres"""
    width_mm: float
    height_mm: float

    @property
    def diagonal_mm(self) -> float:
        return math.hypot(self.width_mm, self.height_mm)


@dataclass(frozen=True)
class MetadataRecord:
    """Normalised capture metadata for a single image.

    Dimensions are the raw (unrotated) pixel counts as stored in the file.
    Every optional field is None when the tag was absent or unparseable.
    """
    width: int
    height: int
    orientation: int = 1
    focal_length: Optional[float] = None
    focal_length_35mm: Optional[float] = None
    scale_factor_35efl: Optional[float] = None
    focal_plane_x_res: Optional[float] = None
    focal_plane_y_res: Optional[float] = None
    focal_plane_unit: Optional[int] = None
    focus_distance: Optional[float] = None
    digital_zoom_ratio: Optional[float] = None

    def __post_init__(self):
        if not self.width or not self.height or self.width <= 0 or self.height <= 0:
            raise InvalidDimensionsError(
                f"Image dimensions must be positive, got {self.width} x {self.height}"
            )


@dataclass(frozen=True)
class ResultRecord:
    """FOV and focal-length metrics derived from one MetadataRecord"""
    raw_width: int
    raw_height: int
    visual_width: int
    visual_height: int
    orientation: int
    focal_length: Optional[float]
    focal_length_35mm: float
    scale_factor_35efl: Optional[float]
    f_pixel_diagonal: float
    hfov: float
    vfov: float
    dfov: float
    focus_distance: Optional[float] = None
    rotated: bool = False
    correction_factor: float = 1.0
    file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
