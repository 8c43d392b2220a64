"""
Exceptions for FOV Estimation

Every failure raised by the package derives from FovEstimationError so
batch callers can tally a failed image and move on to the next one.
"""


class FovEstimationError(Exception):
    """Base class for all FOV estimation failures"""


class ResolutionError(FovEstimationError):
    """The 35mm-equivalent focal length cannot be determined from the metadata"""


class InvalidDimensionsError(FovEstimationError):
    """Pixel width or height is missing or not positive"""


class MetadataReadError(FovEstimationError):
    """The image file could not be opened or its metadata could not be read"""
