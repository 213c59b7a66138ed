"""
CLI entry point for the live signal pulse window.

Usage:
    neurospark [options]
    python -m neurospark [options]
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from neurospark.config import PROFILES, SignalConfig, load_config
from neurospark.utils import setup_logging


def add_common_arguments(parser: argparse.ArgumentParser, default_profile: str | None = None):
    """Options shared by the live and export CLIs."""
    parser.add_argument(
        "-c", "--config", type=Path, default=None,
        help="JSON file with configuration overrides",
    )

    # Resolution & Profile
    parser.add_argument(
        "-p", "--profile", type=str, default=default_profile,
        choices=list(PROFILES),
        help="Target profile (low: 720p 30fps, medium: 1080p 60fps, high: 4k 60fps)",
    )
    parser.add_argument("--width", type=int, default=None, help="Surface width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Surface height (overrides profile)")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second (overrides profile)")

    # Visual
    parser.add_argument(
        "--background", type=Path, default=None,
        help="Image the pulses are composited onto",
    )
    parser.add_argument(
        "--pulses", type=int, default=None,
        help="Initial pulse count (default: 4)",
    )

    # Logging
    parser.add_argument(
        "--log-level", type=str, default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", type=str, default=None, help="Also log to a rotating file")


def build_config(args: argparse.Namespace) -> SignalConfig:
    """Resolve config file, profile and flag overrides, then set up logging."""
    raw = {}
    if args.config is not None:
        config, raw = load_config(args.config)
    else:
        config = SignalConfig()

    log_config = dict(raw.get("logging", {}))
    if args.log_level:
        log_config["level"] = args.log_level
    if args.log_file:
        log_config["log_file"] = args.log_file
    setup_logging(log_config)

    overrides = {}
    if args.profile:
        p_cfg = PROFILES[args.profile]
        overrides.update(width=p_cfg["width"], height=p_cfg["height"], fps=p_cfg["fps"])
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.fps is not None:
        overrides["fps"] = args.fps
    if args.pulses is not None:
        overrides["initial_pulses"] = args.pulses

    return dataclasses.replace(config, **overrides).validate()


def main():
    parser = argparse.ArgumentParser(
        prog="neurospark",
        description="Ambient electric signal pulse animation",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--max-frames", type=int, default=None,
        help="Close the window after N frames",
    )
    args = parser.parse_args()

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.background is not None and not args.background.exists():
        print(f"Error: Background image not found: {args.background}", file=sys.stderr)
        sys.exit(1)

    # Imported late so --help works without a display
    from neurospark.host import PygameHost

    logging.info("--- neurospark starting ---")
    host = PygameHost(config, background_path=args.background, max_frames=args.max_frames)
    frames = host.run(host.create_scheduler())
    logging.info(f"--- neurospark finished after {frames} frames ---")


if __name__ == "__main__":
    main()
