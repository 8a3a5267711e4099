#!/usr/bin/env python3
"""
Generate docs/figma-gallery.html entirely from local PNG exports.

Usage:
  python scripts/build_local_gallery.py [--open] [--verbose]

Same flags as `build-local-gallery`; see gallery/cli.py.
"""
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gallery.cli import main  # noqa: E402


if __name__ == '__main__':
    sys.exit(main())
