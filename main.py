#!/usr/bin/env python3
"""
Main entry point for FOV Estimation

Prints the diagonal pixel focal length and horizontal, vertical and
diagonal field of view for an image, or for every image in a directory.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from fovestimate.errors import FovEstimationError
from fovestimate.pipeline import FovEstimationPipeline
from fovestimate.report import format_batch, format_result

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Estimate field of view and pixel focal length from image EXIF")
    parser.add_argument("path", help="Image file or directory of images")
    parser.add_argument("--close-focus", action=argparse.BooleanOptionalAction, default=None,
                        help="Apply thin-lens close-focus correction to the FOV (overrides the config file)")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--workers", type=int, help="Worker threads for directory processing")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main function to run the FOV estimation CLI"""
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        pipeline = FovEstimationPipeline(
            args.config,
            apply_close_focus_correction=args.close_focus,
            max_workers=args.workers,
        )

        if Path(args.path).is_dir():
            stats = pipeline.process_dataset(args.path)
            if args.json:
                payload = dict(stats, results=[r.to_dict() for r in stats["results"]])
                print(json.dumps(payload, indent=2, ensure_ascii=False))
            else:
                print(format_batch(stats))
            return 0 if stats["succeeded"] > 0 else 1

        result = pipeline.analyze_file(args.path)
        if args.json:
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            print(format_result(result))
        return 0

    except (FovEstimationError, OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
