"""
Plain-text reports for FOV Estimation results
"""

from pathlib import Path
from typing import Any, Dict, Optional

from .models import ResultRecord

RULE = "━" * 49


def _fmt(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:.2f}"


def format_result(result: ResultRecord) -> str:
    """Boxed single-image report"""
    lines = [
        "┌─────────────────────────────────────────────────┐",
        "│           FOV Estimation Results                │",
        "├─────────────────────────────────────────────────┤",
    ]
    if result.file:
        lines.append(f"│  File:               {result.file}")
    lines += [
        f"│  Raw dimensions:     {result.raw_width} × {result.raw_height} px",
        f"│  Orientation:        {result.orientation}",
        f"│  Visual dimensions:  {result.visual_width} × {result.visual_height} px",
        f"│  Focal length:       {_fmt(result.focal_length)} mm",
        f"│  Focal length (35mm):{result.focal_length_35mm:.2f} mm",
        f"│  Scale Factor:       {_fmt(result.scale_factor_35efl)}",
    ]
    if result.correction_factor != 1.0:
        lines.append(f"│  Close-focus factor: {result.correction_factor:.4f}")
    lines += [
        "├─────────────────────────────────────────────────┤",
        f"│  f_pixel (diagonal): {result.f_pixel_diagonal:.2f} px",
        "├─────────────────────────────────────────────────┤",
        f"│  HFOV:               {result.hfov:.2f}°",
        f"│  VFOV:               {result.vfov:.2f}°",
        f"│  DFOV:               {result.dfov:.2f}°",
        "└─────────────────────────────────────────────────┘",
    ]
    return "\n".join(lines)


def _format_batch_entry(result: ResultRecord) -> str:
    orientation = str(result.orientation)
    if result.rotated:
        orientation += f" (rotated → {result.visual_width} × {result.visual_height})"
    return "\n".join([
        f"  Dimensions:      {result.raw_width} × {result.raw_height} px",
        f"  Orientation:     {orientation}",
        f"  Focal length:    {_fmt(result.focal_length)} mm  (35mm eq: {result.focal_length_35mm:.2f} mm)",
        f"  Scale Factor:    {_fmt(result.scale_factor_35efl)}",
        f"  f_pixel (diag):  {result.f_pixel_diagonal:.2f} px",
        f"  HFOV / VFOV:     {result.hfov:.2f}° / {result.vfov:.2f}°",
        f"  DFOV:            {result.dfov:.2f}°",
    ])


def format_batch(stats: Dict[str, Any]) -> str:
    """Per-file sections followed by a success/failure summary"""
    results = {r.file: r for r in stats["results"]}
    files = sorted(list(results) + list(stats["errors"]), key=lambda f: Path(f).name)

    sections = [f"Found {stats['total_files']} image(s)", ""]
    for file in files:
        sections += [RULE, f"  {Path(file).name}", RULE]
        if file in results:
            sections.append(_format_batch_entry(results[file]))
        else:
            sections.append(f"  ⚠ Error: {stats['errors'][file]}")
        sections.append("")

    if stats.get("mean_f_pixel_diagonal") is not None:
        sections.append(f"Average f_pixel (diag) = {stats['mean_f_pixel_diagonal']:.2f} px")
    sections.append(f"── Summary: {stats['succeeded']} succeeded, {stats['failed']} failed ──")
    return "\n".join(sections)
