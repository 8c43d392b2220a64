from fovestimate.models import MetadataRecord
from fovestimate.pipeline import analyze_record
from fovestimate.report import format_batch, format_result


def test_format_result():
    result = analyze_record(MetadataRecord(width=6000, height=4000, focal_length_35mm=90), file="shot.jpg")
    text = format_result(result)

    assert "File:               shot.jpg" in text
    assert "Focal length:       N/A mm" in text
    assert "Scale Factor:       N/A" in text
    assert "f_pixel (diagonal): 15000.00 px" in text
    assert "HFOV:               22.62°" in text
    assert "Close-focus factor" not in text


def test_format_result_shows_correction():
    record = MetadataRecord(width=6000, height=4000, focal_length=100, focal_length_35mm=100, focus_distance=1.18)
    text = format_result(analyze_record(record, apply_close_focus_correction=True))
    assert "Close-focus factor: 1.0926" in text


def test_format_batch():
    upright = analyze_record(MetadataRecord(width=6000, height=4000, focal_length_35mm=90), file="/x/a.jpg")
    rotated = analyze_record(MetadataRecord(width=6000, height=4000, orientation=6, focal_length_35mm=90),
                             file="/x/c.jpg")
    stats = {
        "total_files": 3,
        "succeeded": 2,
        "failed": 1,
        "results": [upright, rotated],
        "errors": {"/x/b.jpg": "Cannot determine 35 mm-equivalent focal length."},
        "mean_f_pixel_diagonal": 15000.0,
    }
    text = format_batch(stats)

    assert text.index("a.jpg") < text.index("b.jpg") < text.index("c.jpg")
    assert "⚠ Error: Cannot determine" in text
    assert "6 (rotated → 4000 × 6000)" in text
    assert "Average f_pixel (diag) = 15000.00 px" in text
    assert text.endswith("── Summary: 2 succeeded, 1 failed ──")
