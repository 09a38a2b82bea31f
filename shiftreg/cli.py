# -*- coding: utf-8 -*-
"""
Command Line Interface - Register one image onto another.

Reads a reference (left) image and a moving (right) image, estimates the
integer translation that aligns right onto left, and writes the
translated right image. Each search level is reported on stderr as
``<width>x<height>: <dx> <dy>``.

Usage:
  shiftreg left.png right.png right_registered.png
  python -m shiftreg left.tif right.tif right_registered.tif

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# shiftreg internal
from shiftreg.IO import read_image, write
from shiftreg.coregistration import register

logger = logging.getLogger(__name__)

PROG = 'shiftreg'


class _UsageError(Exception):
    """Wrong command-line arguments."""


class _Parser(argparse.ArgumentParser):
    """Parser that reports errors to the caller instead of exiting."""

    def error(self, message: str):
        raise _UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the positional-only argument parser.

    Returns
    -------
    argparse.ArgumentParser
    """
    parser = _Parser(
        prog=PROG,
        description="Register the right image onto the left image by an "
                    "integer translation.",
        add_help=False,
    )
    parser.add_argument("left", type=Path, help="Reference image.")
    parser.add_argument("right", type=Path, help="Image to register.")
    parser.add_argument(
        "Tright",
        type=Path,
        help="Output path for the registered right image.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the registration pipeline.

    Parameters
    ----------
    argv : List[str], optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        0 on success, 1 on a usage error.
    """
    parser = build_parser()
    try:
        # Every argument is a path, even one starting with '-'.
        args = parser.parse_args(
            ["--", *(sys.argv[1:] if argv is None else argv)]
        )
    except _UsageError:
        sys.stderr.write(parser.format_usage())
        return 1

    logging.basicConfig(stream=sys.stderr, level=logging.INFO,
                        format='%(message)s')

    # Both inputs are assumed to share (rows, cols, bands).
    left = read_image(args.left)
    right = read_image(args.right)

    out = register(left, right)

    write(out, args.Tright)
    logger.debug("Wrote registered image to %s", args.Tright)
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
