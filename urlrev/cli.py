"""
Command-line interface for css-urlrev.

Provides argument parsing and main execution flow.
"""

import argparse
import asyncio
import sys
from pathlib import Path

try:
    from tqdm import tqdm as _tqdm
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False

from urlrev.config import (
    DEFAULT_ABSOLUTE_PATH, DEFAULT_HASH_LENGTH, DEFAULT_HASH_LENGTH_ENV,
    DEFAULT_INCLUDE_REMOTE,
)
from urlrev.errors import OptionsError
from urlrev.logging_setup import _setup_logging, log
from urlrev.models import WarningSink
from urlrev.options import Options
from urlrev.scheduler import BatchScheduler
from urlrev.stylesheet import Stylesheet


def _default_hash_length() -> int:
    try:
        return int(DEFAULT_HASH_LENGTH_ENV)
    except ValueError:
        return DEFAULT_HASH_LENGTH


def parse_args(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="css-urlrev",
        description="Append a content hash to every url() in CSS files "
                    "so browsers refetch assets only when they change.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Defaults can also be set with the URLREV_ABSOLUTE_PATH,\n"
            "URLREV_INCLUDE_REMOTE and URLREV_HASH_LENGTH env vars."
        ),
    )
    parser.add_argument(
        "inputs", nargs="+", metavar="INPUT",
        help="CSS file(s) to revise",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-o", "--output",
        help="Write the result here (single input only; default: stdout)",
    )
    target.add_argument(
        "-i", "--in-place", action="store_true",
        help="Overwrite each input file with its revised version",
    )
    parser.add_argument(
        "--include-remote", action="store_true", default=DEFAULT_INCLUDE_REMOTE,
        help="Also hash http(s):// and // references by fetching them",
    )
    parser.add_argument(
        "--absolute-path", default=DEFAULT_ABSOLUTE_PATH, metavar="DIR",
        help="Site root for /... references (default: skip them)",
    )
    parser.add_argument(
        "--hash-length", type=int, default=_default_hash_length(), metavar="N",
        help=f"Digest characters kept in the v= parameter (default: {DEFAULT_HASH_LENGTH})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification for remote fetches",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    args = parser.parse_args(argv)
    if args.output and len(args.inputs) > 1:
        parser.error("--output accepts a single INPUT; use --in-place for several")
    return args


def revise_file(path: Path, options: Options, verify_ssl: bool = True) -> tuple[str, WarningSink]:
    """Revise one CSS file and return ``(css, warnings)``."""
    text = path.read_text(encoding="utf-8")
    sheet = Stylesheet.parse(text, path)
    sink = WarningSink()
    scheduler = BatchScheduler(options, source_path=path, verify_ssl=verify_ssl)
    asyncio.run(scheduler.run(sheet, sink))
    return sheet.serialize(), sink


def main(argv=None) -> int:
    """
    Main entry point for the css-urlrev CLI.
    """
    args = parse_args(argv)

    _setup_logging(debug=args.debug)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    try:
        options = Options(
            include_remote=args.include_remote,
            absolute_path=args.absolute_path,
            hash_length=args.hash_length,
        )
    except OptionsError as exc:
        log.error("%s", exc)
        return 2

    paths = [Path(p) for p in args.inputs]
    if _TQDM_AVAILABLE and len(paths) > 1:
        paths_iter = _tqdm(paths, desc="Revising", unit="file", dynamic_ncols=True)
    else:
        paths_iter = paths

    status = 0
    total_warnings = 0
    for path in paths_iter:
        try:
            css, sink = revise_file(path, options, verify_ssl=args.verify_ssl)
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Can't read %s: %s", path, exc)
            status = 1
            continue
        total_warnings += len(sink)

        try:
            if args.in_place:
                path.write_text(css, encoding="utf-8")
            elif args.output:
                out = Path(args.output)
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(css, encoding="utf-8")
            else:
                sys.stdout.write(css)
        except OSError as exc:
            log.error("Can't write result for %s: %s", path, exc)
            status = 1

    log.info("Revised %d file(s), %d warning(s)", len(paths), total_warnings)
    return status


if __name__ == "__main__":
    sys.exit(main())
