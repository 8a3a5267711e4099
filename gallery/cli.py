"""
Generate the screen gallery page from local exports. No Figma API needed.

Usage:
  build-local-gallery \
    --images-dir docs/figma-images \
    --figma-json-dir docs/figma-json \
    --out docs/figma-gallery.html
"""
import argparse
import logging
import os
import pathlib
import sys
from typing import List, Optional

from .builder import build_gallery_model, log_summary
from .config import DEFAULT_CONFIG_PATH, ROOT, load_config
from .errors import GalleryError
from .figma_index import build_figma_index
from .render import render_gallery
from .resolver import FigmaUrlResolver
from .utils import get_logger, open_in_browser, write_text

logger = get_logger()

DOCS_DIR = ROOT / 'docs'
IMAGES_DIR_DEFAULT = DOCS_DIR / 'figma-images'
FIGMA_JSON_DIR_DEFAULT = DOCS_DIR / 'figma-json'
OUT_DEFAULT = DOCS_DIR / 'figma-gallery.html'


def relative_root(images_dir: pathlib.Path, out_path: pathlib.Path) -> str:
    """The images folder as referenced from the output page, with '/' separators."""
    rel = os.path.relpath(images_dir.resolve(), out_path.resolve().parent)
    rel = pathlib.Path(rel).as_posix()
    return '' if rel == '.' else rel


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Build a searchable HTML gallery from exported Figma screens')
    parser.add_argument('--config', type=pathlib.Path, default=DEFAULT_CONFIG_PATH,
                        help='Gallery configuration JSON (sections, Figma document keys)')
    parser.add_argument('--images-dir', type=pathlib.Path, default=IMAGES_DIR_DEFAULT,
                        help='Folder holding one subfolder of exported images per subsection')
    parser.add_argument('--figma-json-dir', type=pathlib.Path, default=FIGMA_JSON_DIR_DEFAULT,
                        help='Folder holding <document key>.json Figma file exports')
    parser.add_argument('--out', type=pathlib.Path, default=OUT_DEFAULT, help='Output HTML file')
    parser.add_argument('--lenient-metadata', action='store_true',
                        help='Skip Figma exports that fail to parse instead of aborting')
    parser.add_argument('--no-dimensions', action='store_true',
                        help='Do not read image headers for pixel dimensions')
    parser.add_argument('--open', action='store_true', help='Open the gallery in the default browser when done')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging')
    return parser.parse_args(argv)


def build(args: argparse.Namespace) -> pathlib.Path:
    config = load_config(args.config)
    for doc_key in config.unmapped_documents():
        logger.warning(f'Folder mapped to unknown Figma document {doc_key!r}; its screens get no deep links')

    index = build_figma_index(config.figma.documents, args.figma_json_dir, strict=not args.lenient_metadata)
    resolver = FigmaUrlResolver(config.figma.folders, config.figma.documents, index)

    model = build_gallery_model(
        config.sections,
        args.images_dir,
        relative_root(args.images_dir, args.out),
        probe=not args.no_dimensions,
    )
    log_summary(model)

    html = render_gallery(model, resolver, config.site)
    size = write_text(args.out, html)
    logger.info(f'Gallery written: {args.out}')
    logger.info(f'Size: {size / 1024:.1f} KB')
    logger.info(f'Screens: {model.total_screens}')
    return args.out


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    try:
        out = build(args)
    except GalleryError as e:
        logger.error(str(e))
        return 1
    if args.open:
        open_in_browser(out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
