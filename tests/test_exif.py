from fractions import Fraction

import pytest
from PIL import Image

from fovestimate.errors import InvalidDimensionsError, MetadataReadError, ResolutionError
from fovestimate.exif import normalize_tags, parse_number, parse_orientation, read_metadata, read_raw_tags
from fovestimate.pipeline import analyze_record


@pytest.mark.parametrize("value, expected", [
    (78, 78.0),
    (4.25, 4.25),
    ("78 mm", 78.0),
    ("1.18 m", 1.18),
    ("  .5", 0.5),
    ("-3e2 units", -300.0),
    (b"35", 35.0),
    ((425, 100), 4.25),
    (Fraction(9, 2), 4.5),
])
def test_parse_number(value, expected):
    assert parse_number(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [None, "", "inf", "Unknown", (1, 0), float("nan"), True])
def test_parse_number_unparseable(value):
    assert parse_number(value) is None


@pytest.mark.parametrize("value, expected", [
    (None, 1),
    (6, 6),
    ("8", 8),
    ("Horizontal (normal)", 1),
    ("Rotate 90 CW", 6),
    ("Rotate 270 CW", 8),
    ("Rotate 180", 3),
    ("Mirror horizontal and rotate 90 CW", 6),
])
def test_parse_orientation(value, expected):
    assert parse_orientation(value) == expected


def test_normalize_exiftool_row():
    record = normalize_tags({
        "ImageWidth": 6000,
        "ImageHeight": 4000,
        "Orientation": "Rotate 90 CW",
        "FocalLength": "90.0 mm",
        "FocalLengthIn35mmFormat": "90 mm",
        "ScaleFactor35efl": 1.0,
        "FocalPlaneXResolution": 1675.46,
        "FocalPlaneYResolution": 1675.46,
        "FocalPlaneResolutionUnit": 3,
        "FocusDistance": "2.5 m",
        "DigitalZoomRatio": 1,
    })
    assert record.width == 6000
    assert record.height == 4000
    assert record.orientation == 6
    assert record.focal_length == 90.0
    assert record.focal_length_35mm == 90.0
    assert record.scale_factor_35efl == 1.0
    assert record.focal_plane_unit == 3
    assert isinstance(record.focal_plane_unit, int)
    assert record.focus_distance == 2.5
    assert record.digital_zoom_ratio == 1.0


def test_normalize_dimension_fallbacks():
    record = normalize_tags({"ExifImageWidth": "4032", "PixelYDimension": 3024})
    assert (record.width, record.height) == (4032, 3024)
    assert record.orientation == 1
    assert record.focal_length is None


def test_normalize_focus_distance_fallbacks():
    record = normalize_tags({"ImageWidth": 100, "ImageHeight": 100,
                             "FocusDistance": "inf", "SubjectDistance": "3.2 m",
                             "ApproximateFocusDistance": 9})
    assert record.focus_distance == 3.2


def test_normalize_missing_dimensions():
    with pytest.raises(InvalidDimensionsError):
        normalize_tags({"ImageWidth": 100, "FocalLength": 50})


def _save_jpeg(path, size=(60, 40), orientation=None):
    img = Image.new("RGB", size, color=(120, 80, 40))
    if orientation is None:
        img.save(path, format="JPEG")
        return
    exif = Image.Exif()
    exif[0x0112] = orientation
    img.save(path, format="JPEG", exif=exif)


def test_read_metadata_from_jpeg(tmp_path):
    path = tmp_path / "portrait.jpg"
    _save_jpeg(path, orientation=6)

    record = read_metadata(path)
    assert (record.width, record.height) == (60, 40)
    assert record.orientation == 6
    assert record.focal_length_35mm is None


def test_read_raw_tags_uses_stored_size(tmp_path):
    path = tmp_path / "plain.jpg"
    _save_jpeg(path, size=(32, 16))
    raw = read_raw_tags(path)
    assert (raw["ImageWidth"], raw["ImageHeight"]) == (32, 16)


def test_jpeg_without_focal_tags_cannot_resolve(tmp_path):
    path = tmp_path / "plain.jpg"
    _save_jpeg(path)
    with pytest.raises(ResolutionError):
        analyze_record(read_metadata(path))


def test_unreadable_file(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_text("not an image")
    with pytest.raises(MetadataReadError):
        read_metadata(path)


def test_missing_file(tmp_path):
    with pytest.raises(MetadataReadError):
        read_metadata(tmp_path / "missing.jpg")


def _save_with_35mm_tag(path, size, focal_35mm, image_format="JPEG"):
    exif = Image.Exif()
    exif[0xA405] = focal_35mm  # FocalLengthIn35mmFilm
    Image.new("RGB", size).save(path, format=image_format, exif=exif)


def test_read_35mm_tag_from_jpeg(tmp_path):
    path = tmp_path / "tagged.jpg"
    _save_with_35mm_tag(path, (60, 40), 50)
    record = read_metadata(path)
    assert record.focal_length_35mm == 50.0
    assert analyze_record(record).hfov == pytest.approx(39.6, abs=0.1)


def test_pixel_limit_does_not_block_header_reads(tmp_path, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    path = tmp_path / "large.png"
    _save_with_35mm_tag(path, (200, 150), 28, image_format="PNG")

    record = read_metadata(path)
    assert (record.width, record.height) == (200, 150)
    assert Image.MAX_IMAGE_PIXELS == 100


class _StubExif(dict):
    def __init__(self, ifd0, exif_ifd):
        super().__init__(ifd0)
        self._exif_ifd = exif_ifd

    def get_ifd(self, tag):
        return self._exif_ifd


class _StubImage:
    def __init__(self, image_format, size, ifd0, exif_ifd):
        self.format = image_format
        self.size = size
        self._exif = _StubExif(ifd0, exif_ifd)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def getexif(self):
        return self._exif


def test_tiff_raw_prefers_exif_dimensions_over_preview(monkeypatch):
    # IFD0 of a NEF holds a 160x120 preview; the Exif sub-IFD has the sensor image
    stub = _StubImage("TIFF", (160, 120), {0x0100: 160, 0x0101: 120},
                      {0xA002: 6048, 0xA003: 4024, 0xA405: 50})
    monkeypatch.setattr("fovestimate.exif._open_image", lambda path: stub)

    record = read_metadata("shot.nef")
    assert (record.width, record.height) == (6048, 4024)
    assert record.focal_length_35mm == 50.0


def test_jpeg_keeps_stored_size_over_exif_dimensions(monkeypatch):
    stub = _StubImage("JPEG", (1600, 1200), {}, {0xA002: 4000, 0xA003: 3000})
    monkeypatch.setattr("fovestimate.exif._open_image", lambda path: stub)

    record = read_metadata("resized.jpg")
    assert (record.width, record.height) == (1600, 1200)
