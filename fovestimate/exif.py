"""
Metadata extraction for FOV Estimation

This module reads capture metadata from image files with Pillow and
normalises it into a MetadataRecord. The normaliser works on ExifTool-style
tag names, so a row of `exiftool -j` output can be fed to it directly.
"""

import logging
import math
import numbers
import re
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from PIL import ExifTags, Image

from .errors import InvalidDimensionsError, MetadataReadError
from .models import MetadataRecord

logger = logging.getLogger(__name__)

# Pillow tag names that differ from their ExifTool equivalents
PILLOW_TO_EXIFTOOL = {
    'FocalLengthIn35mmFilm': 'FocalLengthIn35mmFormat',
}

_OPEN_LOCK = threading.Lock()

_LEADING_NUMBER = re.compile(r'\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')


def parse_number(value: Any) -> Optional[float]:
    """Extract a float from a number, rational or unit-suffixed string ("78 mm").

    Returns None when nothing numeric can be read.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, tuple) and len(value) == 2:
        # Older Pillow releases return rationals as (numerator, denominator)
        numerator, denominator = value
        if not denominator:
            return None
        return numerator / denominator

    if isinstance(value, numbers.Real):
        result = float(value)
        return None if math.isnan(result) else result

    if isinstance(value, bytes):
        value = value.decode('ascii', errors='ignore')

    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return None
    return float(match.group(1))


def parse_orientation(value: Any) -> int:
    """Map an Orientation tag to its EXIF code (1-8), defaulting to 1.

    ExifTool prints orientations as descriptions such as "Rotate 90 CW";
    those are mapped by the rotation angle they mention.
    """
    if value is None:
        return 1
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return int(value) if math.isfinite(value) else 1

    text = str(value).strip()
    if text.isdigit():
        return int(text)
    if '90' in text:
        return 6
    if '270' in text:
        return 8
    if '180' in text:
        return 3
    return 1


def _first_number(raw: Mapping[str, Any], *names: str) -> Optional[float]:
    for name in names:
        value = parse_number(raw.get(name))
        if value is not None:
            return value
    return None


def normalize_tags(raw: Mapping[str, Any]) -> MetadataRecord:
    """Build a MetadataRecord from a flat mapping of ExifTool-style tag names"""
    width = _first_number(raw, 'ImageWidth', 'ExifImageWidth', 'PixelXDimension')
    height = _first_number(raw, 'ImageHeight', 'ExifImageHeight', 'PixelYDimension')

    if not width or not height:
        raise InvalidDimensionsError("Could not determine image pixel dimensions from EXIF data.")

    focal_plane_unit = parse_number(raw.get('FocalPlaneResolutionUnit'))
    if focal_plane_unit is not None and focal_plane_unit.is_integer():
        focal_plane_unit = int(focal_plane_unit)

    return MetadataRecord(
        width=int(width),
        height=int(height),
        orientation=parse_orientation(raw.get('Orientation')),
        focal_length=parse_number(raw.get('FocalLength')),
        focal_length_35mm=parse_number(raw.get('FocalLengthIn35mmFormat')),
        scale_factor_35efl=parse_number(raw.get('ScaleFactor35efl')),
        focal_plane_x_res=parse_number(raw.get('FocalPlaneXResolution')),
        focal_plane_y_res=parse_number(raw.get('FocalPlaneYResolution')),
        focal_plane_unit=focal_plane_unit,
        focus_distance=_first_number(raw, 'FocusDistance', 'SubjectDistance', 'ApproximateFocusDistance'),
        digital_zoom_ratio=parse_number(raw.get('DigitalZoomRatio')),
    )


def _open_image(file_path: Union[str, Path]) -> Image.Image:
    """Open an image for header reading, without Pillow's pixel-count limit.

    Only metadata is read, pixels are never decoded, so the decompression
    bomb check does not apply. The limit is a process-wide Pillow setting,
    so swaps are serialised.
    """
    with _OPEN_LOCK:
        previous_limit = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            return Image.open(file_path)
        finally:
            Image.MAX_IMAGE_PIXELS = previous_limit


def read_raw_tags(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Read IFD0 and Exif sub-IFD tags with Pillow, keyed by ExifTool-style names"""
    try:
        with _open_image(file_path) as img:
            exif = img.getexif()
            raw: Dict[str, Any] = {}
            for tag_id, value in exif.items():
                raw[ExifTags.TAGS.get(tag_id, str(tag_id))] = value
            exif_ifd = {ExifTags.TAGS.get(tag_id, str(tag_id)): value
                        for tag_id, value in exif.get_ifd(ExifTags.IFD.Exif).items()}
            raw.update(exif_ifd)

            if img.format == 'TIFF' and 'ExifImageWidth' in exif_ifd and 'ExifImageHeight' in exif_ifd:
                # TIFF-based raws (DNG, NEF, CR2, ARW) often carry a preview in IFD0
                raw['ImageWidth'] = exif_ifd['ExifImageWidth']
                raw['ImageHeight'] = exif_ifd['ExifImageHeight']
            else:
                # Pillow reports the stored (unrotated) pixel size
                raw['ImageWidth'], raw['ImageHeight'] = img.size
    except (OSError, Image.DecompressionBombError, ValueError, SyntaxError) as e:
        raise MetadataReadError(f"Could not read metadata from \"{file_path}\": {e}") from e

    for pillow_name, exiftool_name in PILLOW_TO_EXIFTOOL.items():
        if pillow_name in raw:
            raw[exiftool_name] = raw.pop(pillow_name)

    logger.debug(f"Read {len(raw)} tags from {file_path}")
    return raw


def read_metadata(file_path: Union[str, Path]) -> MetadataRecord:
    """Extract a normalised MetadataRecord from an image file"""
    return normalize_tags(read_raw_tags(file_path))
