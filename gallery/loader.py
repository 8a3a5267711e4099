"""
Image catalog loader: scan one exported-screens folder into an ordered catalog.
"""
import pathlib
import posixpath
import re
import unicodedata
from typing import Iterable, List, Optional, Pattern, Tuple

from .models import NameStyle, ScreenImage
from .utils import get_logger, probe_dimensions

logger = get_logger()

IMAGE_EXTS = {'.png', '.jpg', '.jpeg', '.webp', '.gif'}

# "3", "4-1", "2.5": auto-numbered exports with no real frame name
_NUMERIC_STEM = re.compile(r'^\d+(\.\d+)?(-\d+)?$')
_NODE_ID_SUFFIX = re.compile(r'_\d+-\d+$')


def is_numeric_name(filename: str) -> bool:
    return bool(_NUMERIC_STEM.match(pathlib.PurePath(filename).stem))


def display_name(filename: str, style: NameStyle) -> str:
    stem = pathlib.PurePath(filename).stem
    if style == NameStyle.NODE_ID:
        stem = _NODE_ID_SUFFIX.sub('', stem)
    return stem.replace('_', ' ').strip()


def sort_key(name: str) -> str:
    """Case- and accent-insensitive collation key for display names."""
    decomposed = unicodedata.normalize('NFKD', name.casefold())
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def _list_files(folder: pathlib.Path) -> List[str]:
    try:
        entries = [p for p in folder.iterdir() if p.is_file()]
    except OSError as e:
        # missing or unreadable folder counts as empty
        logger.debug(f'Skipping {folder}: {e}')
        return []
    return sorted(p.name for p in entries)


def _skipped(filename: str, skip_numeric: bool, skip_patterns: Iterable[Pattern]) -> bool:
    if skip_numeric and is_numeric_name(filename):
        return True
    return any(pat.search(filename) for pat in skip_patterns)


def load_images(folder: pathlib.Path,
                relative_folder: str,
                name_style: NameStyle,
                skip_numeric: bool = False,
                skip_patterns: Iterable[Pattern] = (),
                probe: bool = True,
                source_folder: Optional[str] = None) -> Tuple[ScreenImage, ...]:
    """Return the screens in ``folder`` ordered by display name.

    Args:
        folder: Directory holding the exported images.
        relative_folder: The same directory as seen from the output page.
        name_style: How display names are derived from filenames.
        skip_numeric: Drop auto-numbered exports like ``3.png`` or ``4-1.png``.
        skip_patterns: Regexes searched against each filename, applied in order.
        probe: Read pixel dimensions from each image header.
        source_folder: Folder key used for Figma lookups (defaults to the folder name).
    """
    patterns = tuple(skip_patterns)
    source = source_folder if source_folder is not None else folder.name
    images: List[ScreenImage] = []
    for filename in _list_files(folder):
        if pathlib.PurePath(filename).suffix.lower() not in IMAGE_EXTS:
            continue
        if _skipped(filename, skip_numeric, patterns):
            continue
        name = display_name(filename, name_style)
        if not name:
            continue
        width, height = probe_dimensions(folder / filename) if probe else (None, None)
        images.append(ScreenImage(
            filename=filename,
            display_name=name,
            relative_path=posixpath.join(relative_folder, filename),
            source_folder=source,
            width=width,
            height=height,
        ))
    return tuple(sorted(images, key=lambda img: sort_key(img.display_name)))
