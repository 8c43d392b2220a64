"""
Field-of-view and pixel focal-length computation for FOV Estimation

All formulas assume a rectilinear lens on the 35mm full-frame model
(36 x 24 mm, diagonal ~43.266 mm).
"""

from typing import NamedTuple

import numpy as np

from .sensor import SENSOR_WIDTH_MM, SENSOR_HEIGHT_MM, SENSOR_DIAGONAL_MM


class FieldOfView(NamedTuple):
    """Horizontal, vertical and diagonal field of view in degrees"""
    hfov: float
    vfov: float
    dfov: float

    def swapped(self) -> "FieldOfView":
        """Swap hfov/vfov for rotated images; the diagonal is rotation-invariant"""
        return FieldOfView(hfov=self.vfov, vfov=self.hfov, dfov=self.dfov)


def _angle_deg(sensor_dimension_mm: float, f35mm: float) -> float:
    return float(np.degrees(2 * np.arctan(sensor_dimension_mm / (2 * f35mm))))


def compute_fov(f35mm: float) -> FieldOfView:
    """Convert a 35mm-equivalent focal length into angular fields of view.

    f35mm is expected to be positive; zero or negative input is not
    rejected and yields a degenerate angle.
    """
    return FieldOfView(
        hfov=_angle_deg(SENSOR_WIDTH_MM, f35mm),
        vfov=_angle_deg(SENSOR_HEIGHT_MM, f35mm),
        dfov=_angle_deg(SENSOR_DIAGONAL_MM, f35mm),
    )


def compute_diagonal_pixel_focal_length(f35mm: float, width: int, height: int) -> float:
    """Focal length in pixels along the image diagonal.

    f_pixel = (f35mm / 43.266) * sqrt(W^2 + H^2)

    Pass the raw (pre-orientation) dimensions. The result only depends on
    W^2 + H^2, so swapping width and height gives the identical value.
    """
    diagonal_px = np.sqrt(float(width) ** 2 + float(height) ** 2)
    return float((f35mm / SENSOR_DIAGONAL_MM) * diagonal_px)
