#!/usr/bin/env python3
"""
CLI: Generate a batch of spiral-gradient thought images. Runs with no arguments;
every parameter comes from config/default.yaml unless overridden here.
Usage:
  python scripts/generate.py
  python scripts/generate.py --count 5 --seed 42
  python scripts/generate.py --upload
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse

from spiral_thoughts.config import load_config
from spiral_thoughts.pipeline import build_jobs, generate_batch
from spiral_thoughts.workflow_utils import setup_graceful_shutdown, setup_logging


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate spiral gradient images with a wrapped thought and brand label."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=None,
        help="Number of images (default: output.count from config).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for palette selection (default: output.seed, else random and logged).",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Directory for PNG files (default: output.dir from config).",
    )
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload each image to Google Drive and log it to the brand's sheet.",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(config.get("logging", {}).get("level", "INFO"))

    # Invalid config (brand, gradient type, palette mode, sizes) fails here, before rendering
    jobs = build_jobs(config, count=args.count)
    publisher = None
    if args.upload or config.get("publish", {}).get("enabled"):
        from spiral_thoughts.publish import GooglePublisher
        publisher = GooglePublisher.from_config(config)

    setup_graceful_shutdown()
    print("Starting image generation...")
    results = generate_batch(
        jobs,
        config=config,
        seed=args.seed,
        publisher=publisher,
        out_dir=args.output_dir,
    )
    failed = [r for r in results if not r.ok]
    for r in results:
        if r.ok:
            print(f"  {r.path}" + (f" -> {r.url}" if r.url else ""))
    if failed:
        print(f"{len(failed)} of {len(results)} images failed; see log for details.", file=sys.stderr)
        return 1
    print(f"All {len(results)} images generated successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
