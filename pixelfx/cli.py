# -*- coding: utf-8 -*-
"""
pixelfx Command Line - List filters and apply one to a NumPy image file.

Images are exchanged as ``.npy`` files holding a ``(height, width, 3)``
``uint8`` array; decoding other raster formats is left to the caller.

Usage
-----
    pixelfx list --category morphology
    pixelfx apply gaussian in.npy out.npy --param radius=2 --param sigma=1.5

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# Third-party
import numpy as np

# pixelfx internal
from pixelfx.buffer import PixelBuffer
from pixelfx.exceptions import PixelfxError
from pixelfx.processing.catalog import FilterCatalog
from pixelfx.progress import CANCELLED
from pixelfx.vocabulary import FilterCategory

logger = logging.getLogger(__name__)


# ── CLI ──────────────────────────────────────────────────────────────


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog='pixelfx',
        description="Apply pixelfx image filters to NumPy RGB images.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List available filters.")
    list_parser.add_argument(
        "--category",
        choices=[c.value for c in FilterCategory],
        help="Only list filters in this category.",
    )

    apply_parser = sub.add_parser("apply", help="Apply a filter to an image.")
    apply_parser.add_argument("name", help="Catalog name of the filter.")
    apply_parser.add_argument(
        "input", type=Path,
        help="Input .npy file with a (height, width, 3) uint8 array.",
    )
    apply_parser.add_argument("output", type=Path, help="Output .npy file.")
    apply_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Filter parameter; may be repeated.",
    )
    apply_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print progress.",
    )
    return parser.parse_args(argv)


def parse_params(pairs: List[str]) -> Dict[str, Any]:
    """Turn ``KEY=VALUE`` strings into a parameter dict.

    Values are parsed as ``int``, then ``float``, else kept as strings.

    Raises
    ------
    ValueError
        If a pair has no ``=``.
    """
    params: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        value: Any = raw
        for convert in (int, float):
            try:
                value = convert(raw)
                break
            except ValueError:
                continue
        params[key.strip()] = value
    return params


def _print_progress(percent: int) -> None:
    sys.stderr.write(f"\r  {percent:3d}%")
    sys.stderr.flush()


# ── Commands ─────────────────────────────────────────────────────────


def list_filters(category: Optional[str] = None) -> List[str]:
    """Print one line per catalogued filter and return the names."""
    cat = FilterCategory(category) if category else None
    names = FilterCatalog.names(cat)
    for name in names:
        cls = FilterCatalog.get(name)
        tags = getattr(cls, '__processor_tags__', {})
        group = tags['category'].value if tags.get('category') else '-'
        print(f"{name:<20} {group:<12} {tags.get('description') or ''}")
    return names


def apply_filter(
    name: str,
    input_path: Path,
    output_path: Path,
    params: Dict[str, Any],
    show_progress: bool = True,
) -> int:
    """Load *input_path*, run the named filter, save to *output_path*.

    Returns
    -------
    int
        Process exit status.
    """
    filter_ = FilterCatalog.create(name, **params)
    source = PixelBuffer.from_array(np.load(input_path, allow_pickle=False))
    logger.info("Applying %r to %s (%dx%d)", filter_, input_path,
                source.width, source.height)

    result = filter_.process(
        source, progress_callback=_print_progress if show_progress else None
    )
    if show_progress:
        sys.stderr.write("\n")
    if result is CANCELLED:
        logger.warning("Run was cancelled; nothing written")
        return 1

    np.save(output_path, result.to_array(), allow_pickle=False)
    logger.info("Wrote %s", output_path)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list":
            list_filters(args.category)
            return 0
        return apply_filter(
            args.name, args.input, args.output,
            parse_params(args.param), show_progress=not args.quiet,
        )
    except (PixelfxError, TypeError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
