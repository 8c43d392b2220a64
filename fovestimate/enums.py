"""
Enums for FOV Estimation

This module contains enumeration classes for the coded EXIF values
used when deriving physical sensor dimensions.
"""

from enum import IntEnum


class FocalPlaneUnit(IntEnum):
    """Enumeration of FocalPlaneResolutionUnit codes"""
    NONE = 1  # No absolute unit
    INCH = 2
    CENTIMETRE = 3
    MILLIMETRE = 4
    MICROMETRE = 5
