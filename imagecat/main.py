"""
imagecat - Organize and distribute photos to directories

Reads all images from the --from directory and catalogs them into the --to
directory based on creation date, as <to>/YYYY/YYYY_MM_DD/<file>.

The creation date comes from the embedded metadata (EXIF CreateDate for
images, the container's creation date for videos). Files without it are dated
from their name when it follows a common camera or messenger convention
(IMG-YYYYMMDD, PANO_YYYYMMDD_HHMMSS, IMG_YYYYMMDD_HHMMSS, YYYYMMDD_HHMMSS,
VID-YYYYMMDD, YYYYMMDD). Files with no date are skipped.

A file whose content is already in the catalog is not stored again; when
moving, the redundant source is deleted. A different file with the same name
is stored as name_1.ext, name_2.ext, and so on.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .core import Cataloger
from .exceptions import ImageCatError
from .reporting import CatalogReporter


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"depth must be >= 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="imagecat",
        description="Organize and distribute photos to directories",
    )

    p.add_argument("--from", dest="src", type=Path, help="Directory from where to get images")
    p.add_argument("--to", dest="dest", type=Path, help="Directory to catalog images")

    p.add_argument("--copy", action="store_true", help="Copy instead of moving images")
    p.add_argument("--dry-run", action="store_true", help="Dry run without touching anything")
    p.add_argument("--recursive", action="store_true", help="Descend into subdirectories")
    p.add_argument("--max-depth", type=non_negative_int, default=None,
                   help="Descend at most N levels below --from (implies --recursive)")
    p.add_argument("-v", "--verbose", action="store_true", help="Increase verbosity")

    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file action report (CSV)")
    p.add_argument("--man", action="store_true", help="Prints the manual page and exits")

    return p


def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.man:
        parser.print_help()
        print(__doc__)
        parser.exit(0)

    if not args.src:
        parser.error("--from option is mandatory.")
    if not args.dest:
        parser.error("--to option is mandatory.")
    if not args.src.is_dir():
        parser.error(f"--from {args.src} is not a directory.")

    return args


def main(argv=None):
    args = parse_args(argv)

    src_root = args.src.resolve()
    dest_root = args.dest.resolve()

    setup_logging(args.verbose, args.log_file)

    logging.info("=== imagecat Started ===")
    logging.info(f"Source: {src_root}")
    logging.info(f"Dest:   {dest_root}")

    reporter = CatalogReporter(verbose=args.verbose, report_csv=args.report_csv)
    cataloger = Cataloger(
        dest_root=dest_root,
        copy=args.copy,
        dry_run=args.dry_run,
        recursive=args.recursive,
        max_depth=args.max_depth,
        reporter=reporter,
    )

    try:
        stats = cataloger.run(src_root)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except ImageCatError:
        logging.exception("Fatal error during cataloging.")
        sys.exit(1)

    reporter.summarize(stats, cataloger.outcomes)


if __name__ == "__main__":
    main()
