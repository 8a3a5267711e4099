"""
State model of the in-page gallery controller.

``static/gallery.js`` implements these transitions against the DOM; this
module holds the same rules over plain data. The renderer uses it to emit the
initial state, and the tests use it to pin the visibility rules down:

- a card is shown iff it matches the search query AND the platform filter
- subsections and sections are shown iff any of their cards is shown
- the page-level empty state is shown iff no card is shown
- grid mode and sidebar collapse never change visibility
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .models import GalleryModel, Platform

ALL = 'ALL'
PLATFORM_FILTERS = (ALL,) + tuple(p.value for p in Platform)


class GridMode(str, Enum):
    COMFORTABLE = 'comfortable'
    COMPACT = 'compact'
    LIST = 'list'


@dataclass(frozen=True)
class CardState:
    search_key: str
    platform: str
    subsection_id: str
    section_id: str


@dataclass(frozen=True)
class Viewer:
    src: str
    name: str
    url: Optional[str] = None


@dataclass(frozen=True)
class Visibility:
    cards: Tuple[bool, ...]
    subsections: Dict[str, bool]
    sections: Dict[str, bool]

    @property
    def visible_count(self) -> int:
        return sum(self.cards)

    @property
    def empty(self) -> bool:
        return not any(self.cards)


class GalleryState:
    """Controller state: search query, platform filter, grid mode, sidebar and viewer."""

    def __init__(self, cards: Iterable[CardState], platform_totals: Dict[str, int],
                 subsection_ids: Iterable[str] = ()):
        self.cards: Tuple[CardState, ...] = tuple(cards)
        self.platform_totals = dict(platform_totals)
        self.subsection_ids: List[str] = list(dict.fromkeys(
            list(subsection_ids) + [c.subsection_id for c in self.cards]))
        self.section_ids: List[str] = list(dict.fromkeys(c.section_id for c in self.cards))
        self.platform = ALL
        self.query = ''
        self.grid_mode = GridMode.COMFORTABLE
        self.collapsed: Set[str] = set()
        self.active_link: Optional[str] = None
        self.viewer: Optional[Viewer] = None
        self.visibility = self.recompute_visibility()

    @classmethod
    def from_model(cls, model: GalleryModel) -> 'GalleryState':
        cards: List[CardState] = []
        sub_ids: List[str] = []
        for sec in model.sections:
            for i, sub in enumerate(sec.subsections):
                sub_id = sec.subsection_id(i)
                sub_ids.append(sub_id)
                for img in sub.images:
                    cards.append(CardState(img.display_name.lower(), sec.platform.value, sub_id, sec.id))
        totals = {ALL: model.total_screens}
        totals.update({p.value: model.count_for(p) for p in Platform})
        return cls(cards, totals, sub_ids)

    # --- predicates ---

    def _needle(self) -> str:
        return self.query.strip().lower()

    def matches_query(self, card: CardState) -> bool:
        needle = self._needle()
        return not needle or needle in card.search_key

    def matches_platform(self, card: CardState) -> bool:
        return self.platform == ALL or card.platform == self.platform

    def is_visible(self, card: CardState) -> bool:
        return self.matches_query(card) and self.matches_platform(card)

    def recompute_visibility(self) -> Visibility:
        shown = tuple(self.is_visible(c) for c in self.cards)
        subs = {sid: False for sid in self.subsection_ids}
        secs = {sid: False for sid in self.section_ids}
        for card, ok in zip(self.cards, shown):
            if ok:
                subs[card.subsection_id] = True
                secs[card.section_id] = True
        self.visibility = Visibility(shown, subs, secs)
        return self.visibility

    # --- transitions ---

    def search(self, query: str) -> Visibility:
        self.query = query or ''
        return self.recompute_visibility()

    def filter_platform(self, platform: str) -> Visibility:
        if platform not in PLATFORM_FILTERS:
            raise ValueError(f'unknown platform filter: {platform}')
        self.platform = platform
        return self.recompute_visibility()

    def reset_filters(self) -> Visibility:
        self.query = ''
        self.platform = ALL
        return self.recompute_visibility()

    def set_grid_mode(self, mode: str) -> None:
        self.grid_mode = GridMode(mode)

    def toggle_group(self, section_id: str) -> bool:
        """Collapse or expand a sidebar group. Returns the new collapsed flag."""
        if section_id in self.collapsed:
            self.collapsed.discard(section_id)
            return False
        self.collapsed.add(section_id)
        return True

    def nav_to(self, target_id: str) -> None:
        self.active_link = target_id if target_id in self.subsection_ids else None

    def on_intersect(self, subsection_id: str) -> None:
        if subsection_id in self.subsection_ids:
            self.active_link = subsection_id

    def open_viewer(self, src: str, name: str, url: Optional[str] = None) -> None:
        self.viewer = Viewer(src, name, url or None)

    def close_viewer(self) -> None:
        self.viewer = None

    # --- derived ---

    def counter_text(self) -> str:
        if not self._needle():
            return ''
        total = self.platform_totals.get(self.platform, self.platform_totals.get(ALL, 0))
        ctx = '' if self.platform == ALL else ' ' + self.platform.lower()
        return f'{self.visibility.visible_count} of {total}{ctx} match'

    def bootstrap(self) -> Dict[str, object]:
        """Initial state handed to the page script."""
        return {
            'platform': self.platform,
            'query': self.query,
            'gridMode': self.grid_mode.value,
            'platformTotals': self.platform_totals,
        }
