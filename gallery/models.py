"""
Domain types for the screen catalog.

Everything here is immutable and built once per run.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Platform(str, Enum):
    WEB = 'WEB'
    MOBILE = 'MOBILE'


class NameStyle(str, Enum):
    # Figma exports named "<Frame_Name>_<page>-<node>.png"
    NODE_ID = 'node-id'
    PLAIN = 'plain'


@dataclass(frozen=True)
class ScreenImage:
    filename: str
    display_name: str
    relative_path: str
    source_folder: str
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def dimensions(self) -> Optional[str]:
        if self.width is None or self.height is None:
            return None
        return f'{self.width}×{self.height}'


@dataclass(frozen=True)
class Subsection:
    label: str
    images: Tuple[ScreenImage, ...] = ()

    @property
    def count(self) -> int:
        return len(self.images)


@dataclass(frozen=True)
class Section:
    id: str
    label: str
    codebase: str
    platform: Platform
    color: str
    subsections: Tuple[Subsection, ...] = ()

    @property
    def total(self) -> int:
        return sum(sub.count for sub in self.subsections)

    def subsection_id(self, index: int) -> str:
        """DOM id shared by the content block and its sidebar link."""
        return f'{self.id}--sub{index}'


@dataclass(frozen=True)
class GalleryModel:
    sections: Tuple[Section, ...] = ()
    total_screens: int = 0
    total_subsections: int = 0
    platform_counts: Dict[Platform, int] = field(default_factory=dict)

    def count_for(self, platform: Platform) -> int:
        return self.platform_counts.get(platform, 0)
