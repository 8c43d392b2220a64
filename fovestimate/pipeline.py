"""
Main Pipeline for FOV Estimation

This module contains the analysis entry points: analyze_record, which turns
one MetadataRecord into a ResultRecord, and the FovEstimationPipeline class,
which reads files, applies configuration and processes whole directories.
"""

import json
import logging
import time
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from .corrector import close_focus_correction_factor
from .errors import FovEstimationError
from .exif import read_metadata
from .fov import compute_fov, compute_diagonal_pixel_focal_length
from .models import MetadataRecord, ResultRecord
from .orientation import adjust_for_orientation, is_rotated
from .parallel import ParallelProcessor
from .resolver import resolve_35mm_equivalent

logger = logging.getLogger(__name__)

# Formats Pillow can open without plugins; raws are read through their TIFF container
SUPPORTED_EXTENSIONS = (
    '.jpg', '.jpeg', '.png', '.tiff', '.tif', '.webp',
    '.dng', '.cr2', '.nef', '.arw',
)

DEFAULT_CONFIG = {
    "apply_close_focus_correction": False,
    "max_workers": None,
    "extensions": SUPPORTED_EXTENSIONS,
}


def analyze_record(record: MetadataRecord, apply_close_focus_correction: bool = False,
                   file: Optional[str] = None) -> ResultRecord:
    """Compute all FOV / focal-length metrics for one image's metadata.

    FOV uses the 35mm full-frame model. With close-focus correction on, the
    35mm-equivalent focal length is scaled by the thin-lens factor before the
    FOV is computed; the pixel focal length always uses the value at infinity.
    Raises ResolutionError if no focal length can be resolved.
    """
    f35mm = resolve_35mm_equivalent(record)

    visual_width, visual_height = adjust_for_orientation(record.width, record.height, record.orientation)
    rotated = is_rotated(record.orientation)

    # The thin-lens factor uses the physical focal length, not the 35mm-equivalent
    correction = (
        close_focus_correction_factor(record.focal_length, record.focus_distance)
        if apply_close_focus_correction else 1.0
    )

    fov = compute_fov(f35mm * correction)
    if rotated:
        fov = fov.swapped()

    f_pixel = compute_diagonal_pixel_focal_length(f35mm, record.width, record.height)

    return ResultRecord(
        raw_width=record.width,
        raw_height=record.height,
        visual_width=visual_width,
        visual_height=visual_height,
        orientation=record.orientation,
        focal_length=record.focal_length,
        focal_length_35mm=f35mm,
        scale_factor_35efl=record.scale_factor_35efl,
        f_pixel_diagonal=f_pixel,
        hfov=fov.hfov,
        vfov=fov.vfov,
        dfov=fov.dfov,
        focus_distance=record.focus_distance,
        rotated=rotated,
        correction_factor=correction,
        file=file,
    )


class FovEstimationPipeline:
    """Reads image metadata and produces FOV results for files and directories"""

    def __init__(self, config_path: Optional[str] = None, **overrides):
        self.config = load_config(config_path)
        self.config.update({k: v for k, v in overrides.items() if v is not None})

        self.apply_close_focus_correction = bool(self.config["apply_close_focus_correction"])
        self.extensions = {ext.lower() for ext in self.config["extensions"]}
        self.parallel_processor = ParallelProcessor(self.config.get("max_workers"))

        logger.info(f"FOV pipeline initialized (close-focus correction: "
                    f"{'on' if self.apply_close_focus_correction else 'off'})")

    def analyze_file(self, file_path: Union[str, Path]) -> ResultRecord:
        """Read an image's metadata and analyse it"""
        logger.info(f"Analyzing: {file_path}")
        record = read_metadata(file_path)
        return analyze_record(record, self.apply_close_focus_correction, file=str(file_path))

    def collect_images(self, dataset_path: Union[str, Path]) -> List[Path]:
        """List supported image files in a directory, sorted by name"""
        dataset_path = Path(dataset_path)

        if dataset_path.is_file():
            return [dataset_path]

        return sorted(
            (f for f in dataset_path.iterdir() if f.is_file() and f.suffix.lower() in self.extensions),
            key=lambda f: f.name,
        )

    def process_dataset(self, dataset_path: Union[str, Path]) -> Dict[str, Any]:
        """Analyse every image in a directory; a failed image never stops the batch"""
        logger.info(f"Starting dataset processing: {dataset_path}")

        image_files = self.collect_images(dataset_path)

        processing_stats: Dict[str, Any] = {
            "total_files": len(image_files),
            "succeeded": 0,
            "failed": 0,
            "processing_time": 0,
            "results": [],
            "errors": {},
            "mean_f_pixel_diagonal": None,
        }

        if not image_files:
            logger.warning(f"No image files found in {dataset_path}")
            return processing_stats

        start_time = time.time()

        outcomes = self.parallel_processor.process_batch_parallel(image_files, self._process_wrapper)

        for file_path, (result, error) in zip(image_files, outcomes):
            if result is not None:
                processing_stats["results"].append(result)
                processing_stats["succeeded"] += 1
            else:
                processing_stats["errors"][str(file_path)] = error
                processing_stats["failed"] += 1

        if processing_stats["results"]:
            processing_stats["mean_f_pixel_diagonal"] = float(
                np.mean([r.f_pixel_diagonal for r in processing_stats["results"]])
            )

        processing_stats["processing_time"] = time.time() - start_time

        logger.info(f"Processing complete. Succeeded: {processing_stats['succeeded']}, "
                    f"Failed: {processing_stats['failed']}")
        logger.info(f"Total processing time: {processing_stats['processing_time']:.2f} seconds")

        return processing_stats

    def _process_wrapper(self, file_path: Path) -> Tuple[Optional[ResultRecord], Optional[str]]:
        """Analyse one file, turning any failure into an error message"""
        try:
            return self.analyze_file(file_path), None
        except FovEstimationError as e:
            logger.error(f"Failed to analyze {file_path.name}: {e}")
            return None, str(e)
        except Exception as e:
            logger.error(f"Unexpected error analyzing {file_path.name}: {e}")
            logger.error(f"Traceback: {traceback.format_exc()}")
            return None, f"{type(e).__name__}: {e}"


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON config file over the defaults"""
    config = dict(DEFAULT_CONFIG)
    if config_path is not None:
        with open(config_path, 'r') as f:
            config.update(json.load(f))
        logger.info(f"Loaded configuration: {config_path}")
    return config


def create_default_config(config_path: str = 'config.json') -> Dict[str, Any]:
    """Create default configuration file"""
    config = dict(DEFAULT_CONFIG)

    with open(config_path, 'w') as f:
        json.dump(config, f, indent=2)

    return config
