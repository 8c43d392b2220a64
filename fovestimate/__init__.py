"""
FOV Estimation - field of view and pixel focal length from image metadata.

This package provides classes and utilities for:
- Reading and normalising capture metadata
- Resolving the 35mm-equivalent focal length
- Orientation-aware horizontal/vertical/diagonal FOV
- Diagonal pixel focal length for calibration and SfM
- Thin-lens close-focus correction
- Parallel batch processing
"""

__version__ = "1.0.0"

from .enums import FocalPlaneUnit
from .errors import FovEstimationError, ResolutionError, InvalidDimensionsError, MetadataReadError
from .models import SensorModel, MetadataRecord, ResultRecord
from .sensor import FULL_FRAME, focal_plane_unit_multiplier
from .resolver import resolve_35mm_equivalent
from .orientation import adjust_for_orientation, is_rotated
from .fov import FieldOfView, compute_fov, compute_diagonal_pixel_focal_length
from .corrector import close_focus_correction_factor
from .exif import normalize_tags, read_metadata
from .parallel import ParallelProcessor
from .pipeline import FovEstimationPipeline, analyze_record

__all__ = [
    'FocalPlaneUnit',
    'FovEstimationError',
    'ResolutionError',
    'InvalidDimensionsError',
    'MetadataReadError',
    'SensorModel',
    'MetadataRecord',
    'ResultRecord',
    'FULL_FRAME',
    'focal_plane_unit_multiplier',
    'resolve_35mm_equivalent',
    'adjust_for_orientation',
    'is_rotated',
    'FieldOfView',
    'compute_fov',
    'compute_diagonal_pixel_focal_length',
    'close_focus_correction_factor',
    'normalize_tags',
    'read_metadata',
    'ParallelProcessor',
    'FovEstimationPipeline',
    'analyze_record',
]
