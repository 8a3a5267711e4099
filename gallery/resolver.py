"""
Resolve screen names to Figma deep links using the local index.
"""
from typing import Mapping, Optional

from .figma_index import FigmaIndex
from .utils import encode_uri_component, normalize_name

FIGMA_NODE_URL = 'https://www.figma.com/design/{file_key}/?node-id={node_id}'


class FigmaUrlResolver:
    """Maps (display name, source folder) to a node URL, or None.

    A miss at any step (folder not mapped, document without a file key, no
    index for the file, name not indexed) means no deep link is available.
    """

    def __init__(self,
                 folder_documents: Mapping[str, str],
                 documents: Mapping[str, str],
                 index: FigmaIndex):
        self.folder_documents = dict(folder_documents)
        self.documents = dict(documents)
        self.index = index

    def node_id(self, name: str, folder: str) -> Optional[str]:
        doc_key = self.folder_documents.get(folder)
        if not doc_key:
            return None
        file_key = self.documents.get(doc_key)
        if not file_key:
            return None
        key = normalize_name(name)
        if not key:
            return None
        return self.index.get(file_key, {}).get(key)

    def resolve(self, name: str, folder: str) -> Optional[str]:
        node_id = self.node_id(name, folder)
        if not node_id:
            return None
        file_key = self.documents[self.folder_documents[folder]]
        return FIGMA_NODE_URL.format(
            file_key=encode_uri_component(file_key),
            node_id=encode_uri_component(node_id),
        )

    @classmethod
    def disabled(cls) -> 'FigmaUrlResolver':
        return cls({}, {}, {})
