"""
Utility functions shared across the gallery build.
"""
import logging
import pathlib
import platform
import re
import subprocess
from typing import Optional, Tuple
from urllib.parse import quote, urlparse

from PIL import Image, UnidentifiedImageError

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(message)s'

_NON_ALNUM = re.compile(r'[^a-z0-9]')
_JS_ESCAPES = {
    '\\': '\\\\',
    "'": "\\'",
    '\n': '\\n',
    '\r': '\\r',
    '\u2028': '\\u2028',
    '\u2029': '\\u2029',
}


def get_logger(name: str = 'gallery') -> logging.Logger:
    """Return the package logger, attaching a stream handler on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        ch = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        ch.setFormatter(formatter)
        logger.addHandler(ch)
        logger.setLevel(logging.INFO)
    return logger


def normalize_name(s: str) -> str:
    """Reduce a frame or screen name to its matching key.

    Lowercases and drops everything outside ``[a-z0-9]``. Used both when
    indexing Figma documents and when looking names up.
    """
    return _NON_ALNUM.sub('', (s or '').lower())


def encode_uri_component(value: str) -> str:
    return quote(value, safe="!'()*")


def encode_asset_path(rel_path: str) -> str:
    """Percent-encode each segment of a relative path and re-join with '/'."""
    return '/'.join(encode_uri_component(seg) for seg in rel_path.split('/'))


def escape_js_arg(value: Optional[str]) -> str:
    """Escape a value for use inside a single-quoted JavaScript literal.

    The result is still plain text; markup escaping happens afterwards.
    """
    return ''.join(_JS_ESCAPES.get(ch, ch) for ch in (value or ''))


def extract_file_key(figma_url_or_key: str) -> str:
    """Return the Figma file key from a file URL, or the value itself when it is already a key."""
    value = (figma_url_or_key or '').strip()
    if '/' not in value:
        return value
    parsed = urlparse(value)
    parts = [p for p in parsed.path.split('/') if p]
    for token in ('design', 'file'):
        if token in parts:
            idx = parts.index(token)
            if idx + 1 < len(parts):
                return parts[idx + 1]
    raise ValueError(f'Could not parse Figma file key from URL: {value}')


def probe_dimensions(path: pathlib.Path) -> Tuple[Optional[int], Optional[int]]:
    """Read pixel dimensions from the image header. (None, None) when unreadable."""
    try:
        with Image.open(path) as img:
            w, h = img.size
        return int(w), int(h)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        get_logger().debug(f'Could not read dimensions of {path}: {e}')
        return None, None


def write_text(path: pathlib.Path, content: str) -> int:
    """Write text as UTF-8, creating parent folders. Returns bytes written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode('utf-8')
    path.write_bytes(data)
    return len(data)


def open_in_browser(path: pathlib.Path) -> None:
    link = path.resolve().as_uri()
    system = platform.system().lower()
    try:
        if system == 'darwin':
            subprocess.check_call(['open', link])
        elif system == 'windows':
            subprocess.check_call(['cmd', '/c', 'start', '', link])
        else:
            subprocess.check_call(['xdg-open', link])
        get_logger().info('Opened gallery in your default browser.')
    except (OSError, subprocess.CalledProcessError):
        get_logger().info(f'Gallery: {link}')
