"""
CLI entry point for offline export.

Usage:
    neurospark-render -o out.mp4 [options]
    neurospark-render -o frames/ [options]
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from neurospark.cli import add_common_arguments, build_config
from neurospark.config import PROFILES
from neurospark.host import HeadlessHost
from neurospark.io.encoder import encode_video, ffmpeg_available, write_frames
from neurospark.visualizers.colorgrade import load_background


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def main():
    parser = argparse.ArgumentParser(
        prog="neurospark-render",
        description="Render the signal pulse animation to MP4 or PNG frames",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        required=True,
        help="Output .mp4 path, or a directory for a PNG sequence",
    )
    add_common_arguments(parser, default_profile="medium")
    parser.add_argument(
        "-d", "--duration", type=float, default=10.0,
        help="Length in seconds (default: 10)",
    )
    parser.add_argument(
        "--audio", type=Path, default=None,
        help="Optional audio track to mux into the MP4",
    )
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    args = parser.parse_args()

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for label, path in (("Background image", args.background), ("Audio file", args.audio)):
        if path is not None and not path.exists():
            print(f"Error: {label} not found: {path}", file=sys.stderr)
            sys.exit(1)

    as_video = args.output.suffix.lower() == ".mp4"
    if as_video and not ffmpeg_available():
        print("Error: ffmpeg not found on PATH", file=sys.stderr)
        sys.exit(1)

    quality = args.quality or PROFILES[args.profile or "medium"]["quality"]
    total_frames = max(1, int(args.duration * config.fps))

    background = None
    if args.background is not None:
        background = load_background(args.background, config.width, config.height)

    host = HeadlessHost(config, background=background)
    frame_gen = host.frames(host.create_scheduler(), total_frames)

    print(f"Rendering {total_frames} frames at {config.width}x{config.height} @ {config.fps}fps")
    t0 = time.time()

    if as_video:
        encode_video(
            frame_iterator=frame_gen,
            output_path=args.output,
            width=config.width,
            height=config.height,
            fps=config.fps,
            quality=quality,
            audio_path=args.audio,
            duration=args.duration,
            total_frames=total_frames,
            progress_callback=_progress_bar,
        )
    else:
        write_frames(
            frame_gen,
            args.output,
            total_frames=total_frames,
            progress_callback=_progress_bar,
        )

    elapsed = time.time() - t0
    logging.info(f"Render took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"\nDone! Output: {args.output}")


if __name__ == "__main__":
    main()
