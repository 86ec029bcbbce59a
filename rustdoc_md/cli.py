"""Convert rustdoc JSON output into Markdown documentation.

Three output modes are supported: a single document printed to stdout, a
single document written to a file, or a directory tree with one page per item
(`--multi-file`). Several input files may be given; each is converted on its
own and a failing input does not stop the others.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from rustdoc_md.load_config import ConfigError, load_config
from rustdoc_md.load_crate import load_crate
from rustdoc_md.render_single import render_crate, write_single_file
from rustdoc_md.write_pages import write_pages

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    ap = argparse.ArgumentParser(
        prog="rustdoc-md",
        description="Convert rustdoc JSON output into Markdown documentation.",
    )
    ap.add_argument(
        "input_json",
        type=Path,
        nargs="+",
        help="Path(s) to rustdoc JSON files (`--output-format json` output)",
    )
    ap.add_argument(
        "-o",
        "--output",
        type=Path,
        help=(
            "Output path. Omitted: print to stdout. Without --multi-file: a single "
            "Markdown file. With --multi-file: a directory of Markdown files"
        ),
    )
    ap.add_argument(
        "--multi-file",
        action="store_true",
        help="Generate a directory of Markdown files instead of a single document",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return ap


def _check_output_mode(ap: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    output: Path | None = args.output
    if output is None:
        if args.multi_file:
            ap.error("--multi-file mode requires an --output path to be specified.")
        return
    if args.multi_file:
        if output.exists() and not output.is_dir():
            ap.error(
                f"For multi-file output, the output path '{output}' must be a "
                "directory, but it's a file."
            )
        return
    if output.is_dir():
        ap.error(
            f"For single-file output, the output path '{output}' must be a file, "
            "but it's a directory."
        )
    if len(args.input_json) > 1:
        ap.error("Several inputs need --multi-file or stdout output.")


def convert(input_json: Path, args: argparse.Namespace, config: dict[str, Any]) -> None:
    """Convert a single rustdoc JSON file in the selected output mode."""
    krate = load_crate(input_json)
    if args.output is None:
        sys.stdout.write(render_crate(krate, config))
        print("Generated single-document Markdown to stdout.", file=sys.stderr)
    elif args.multi_file:
        write_pages(krate, args.output, config)
    else:
        write_single_file(krate, args.output, config)


def main(argv: list[str] | None = None) -> int:
    """Run the conversion for every input; return the process exit status."""
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _check_output_mode(ap, args)

    try:
        config = load_config(args.config)
    except (OSError, ConfigError):
        logger.exception("Could not load configuration from %s", args.config)
        return 1

    failed = 0
    for input_json in args.input_json:
        try:
            convert(input_json, args, config)
        except Exception:
            # One broken input must not stop the remaining ones.
            logger.exception("Failed to convert %s", input_json)
            failed += 1

    if failed:
        logger.error("%d of %d inputs failed", failed, len(args.input_json))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
