"""
Build name -> node id lookup tables from exported Figma file JSON.

Expects the shape returned by GET /v1/files/{key}, saved as
``<json_dir>/<document key>.json``:

    {"document": {"children": [            # pages
        {"children": [                     # top-level frames and sections
            {"id": "12:34", "name": "Login", "type": "FRAME"},
            {"id": "56:78", "type": "SECTION", "children": [...]}
        ]}
    ]}}

Frames nested one level inside a SECTION node are indexed too.
"""
import json
import pathlib
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from .errors import MetadataError
from .utils import get_logger, normalize_name

logger = get_logger()

FigmaIndex = Dict[str, Dict[str, str]]


def _children(node: Dict[str, Any]) -> List[Any]:
    children = node.get('children')
    return children if isinstance(children, list) else []


def _named_nodes(page: Dict[str, Any]) -> Iterator[Tuple[str, str]]:
    for node in _children(page):
        if not isinstance(node, dict):
            continue
        if node.get('name') and node.get('id'):
            yield str(node['name']), str(node['id'])
        if node.get('type') == 'SECTION':
            for child in _children(node):
                if isinstance(child, dict) and child.get('name') and child.get('id'):
                    yield str(child['name']), str(child['id'])


def index_document(file_json: Any) -> Dict[str, str]:
    """Map normalized frame name -> node id for one exported file.

    Later entries overwrite earlier ones with the same normalized name.
    Anything that is not the page -> children shape yields an empty index.
    """
    idx: Dict[str, str] = {}
    if not isinstance(file_json, dict):
        return idx
    document = file_json.get('document') or {}
    if not isinstance(document, dict):
        return idx
    for page in _children(document):
        if not isinstance(page, dict):
            continue
        for name, node_id in _named_nodes(page):
            key = normalize_name(name)
            if key:
                idx[key] = node_id
    return idx


def read_document(path: pathlib.Path) -> Any:
    """Load one exported file. Raises MetadataError when the JSON does not parse."""
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise MetadataError(path, str(e)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MetadataError(path, str(e)) from e


def build_figma_index(documents: Mapping[str, str], json_dir: pathlib.Path, strict: bool = True) -> FigmaIndex:
    """Build the per-file index for every configured document.

    Args:
        documents: document key -> Figma file key.
        json_dir: Folder holding ``<document key>.json`` exports.
        strict: Raise on malformed JSON. When False the document is skipped
            with a warning and its links resolve to nothing.

    Returns:
        file key -> (normalized name -> node id). Documents without an export
        are simply absent.
    """
    index: FigmaIndex = {}
    for doc_key, file_key in documents.items():
        path = json_dir / f'{doc_key}.json'
        if not path.is_file():
            logger.info(f'No Figma export for {doc_key} ({path.name}); deep links disabled for it')
            continue
        logger.info(f'Loading Figma index from {path.name}...')
        try:
            data = read_document(path)
        except MetadataError as e:
            if strict:
                raise
            logger.warning(f'{e}; skipping')
            continue
        except OSError as e:
            logger.warning(f'Could not read {path}: {e}; skipping')
            continue
        idx = index_document(data)
        # several document keys may point at the same file
        index.setdefault(file_key, {}).update(idx)
        logger.info(f'  {len(idx)} entries')
    return index
