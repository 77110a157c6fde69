#!/usr/bin/env python3
import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from prompt_chunker.app import format_result, load_config, process_input
from prompt_chunker.format.styling import format_output, optimize_code_blocks
from prompt_chunker.logging_utils import setup_logging
from prompt_chunker.schema import SegmenterSettings
from prompt_chunker.utils.output import write_output

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="ignore")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt-chunker",
        description="Split large prompts into bounded segments, keeping code fences intact.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    # Global logging flags
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable DEBUG logs (to stderr)."
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Reduce logs to WARN and above.")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines (stderr).")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")

    # -----------------------
    # segment
    # -----------------------
    p_seg = sub.add_parser("segment", help="Normalize or segment a text")
    p_seg.add_argument("path", nargs="?", default="-", help="Input file ('-' for stdin)")
    p_seg.add_argument(
        "--max-size", type=int, default=None, help="Override the segment budget in characters"
    )
    p_seg.add_argument(
        "--no-preserve-code", action="store_true", help="Treat code fences as ordinary prose"
    )
    p_seg.add_argument(
        "--no-smart", action="store_true", help="Do not carry context between segments"
    )
    p_seg.add_argument(
        "--raw", action="store_true", help="Leave short input untouched (no normalization)"
    )
    p_seg.add_argument(
        "--style", action="store_true", help="Run the output styling stage on the result"
    )
    p_seg.add_argument(
        "--out",
        type=str,
        default=None,
        help="Write result to a file (infers format from extension)",
    )
    p_seg.add_argument(
        "--format",
        type=str,
        default=None,
        choices=["json", "md", "txt", "html"],
        help="Output file format (overrides --out extension)",
    )
    p_seg.add_argument(
        "--save", type=str, default=None, help="Directory to auto-save result (default outputs/)"
    )

    # -----------------------
    # format
    # -----------------------
    p_fmt = sub.add_parser("format", help="Apply output styling to a text")
    p_fmt.add_argument("path", nargs="?", default="-", help="Input file ('-' for stdin)")
    p_fmt.add_argument(
        "--output-format",
        default=None,
        choices=["default", "enhanced", "markdown", "html"],
        help="Styling mode (overrides config)",
    )
    p_fmt.add_argument(
        "--theme",
        default=None,
        choices=["default", "github", "monokai", "dracula", "nord"],
        help="Theme for html output (overrides config)",
    )
    p_fmt.add_argument(
        "--optimize-code",
        action="store_true",
        help="Tidy fenced code first (language tags, tabs, blank-line runs)",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose and args.quiet:
        print("Cannot use --verbose and --quiet together.", file=sys.stderr)
        return 2

    try:
        cfg = load_config(args.config)
    except (OSError, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        setup_logging(level="DEBUG", json_logs=args.log_json or cfg.logging.json_logs)
    elif args.quiet:
        setup_logging(level="WARNING", json_logs=args.log_json or cfg.logging.json_logs)
    else:
        setup_logging(level=cfg.logging.level, json_logs=args.log_json or cfg.logging.json_logs)

    logger.debug("CLI args parsed: %s", vars(args))

    try:
        text = _read_source(args.path)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.path, e)
        return 2

    if args.cmd == "segment":
        overrides = {}
        if args.max_size is not None:
            overrides["max_input_size"] = args.max_size
        if args.no_preserve_code:
            overrides["preserve_code_blocks"] = False
        if args.no_smart:
            overrides["smart_chunking"] = False
        if args.raw:
            overrides["normalize_short_input"] = False
        try:
            settings = SegmenterSettings.model_validate({**cfg.segmenter.model_dump(), **overrides})
        except ValidationError as e:
            print(f"Invalid segmenter settings: {e}", file=sys.stderr)
            return 2

        res = process_input(text, settings)
        if not res.ok:
            logger.warning("Segmentation failed, passing input through unchanged: %s", res.error)

        if args.out or args.save:
            stem = Path(args.path).stem if args.path != "-" else "stdin"
            target = write_output(res, out_path=args.out, fmt=args.format, save_dir=args.save, stem=stem)
            logger.info("Saved %d segments to %s", len(res.segments), target)
            return 0

        print(format_result(res, cfg) if args.style else res.text)
        return 0

    # format
    out_cfg = cfg.output.model_copy(
        update={
            k: v
            for k, v in (("format", args.output_format), ("syntax_theme", args.theme))
            if v is not None
        }
    )
    if args.optimize_code:
        text = optimize_code_blocks(text)
    print(format_output(text, out_cfg))
    return 0


if __name__ == "__main__":
    sys.exit(main())
