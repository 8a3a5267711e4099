"""
Render the gallery model into one self-contained HTML page.

All markup comes from templates/gallery.html through a Jinja2 environment
with autoescaping on, so every interpolated value is escaped by markupsafe.
Two filters cover the non-markup contexts:

- ``asset_url``: percent-encodes each path segment of an image path
- ``js_arg``: escapes a value for a single-quoted inline JS argument
  (autoescaping still runs on the result)
"""
from dataclasses import dataclass
from importlib import resources
from typing import List, Optional

from jinja2 import Environment, PackageLoader
from markupsafe import Markup

from .config import SiteConfig
from .models import GalleryModel, Platform, ScreenImage, Section
from .resolver import FigmaUrlResolver
from .runtime import GalleryState
from .utils import encode_asset_path, escape_js_arg

PLATFORM_COLORS = {
    Platform.WEB: '#60a5fa',
    Platform.MOBILE: '#22c55e',
}


@dataclass(frozen=True)
class CardView:
    name: str
    search_key: str
    path: str
    figma_url: Optional[str]
    dimensions: Optional[str]


@dataclass(frozen=True)
class SubsectionView:
    id: str
    label: str
    cards: List[CardView]


@dataclass(frozen=True)
class SectionView:
    section: Section
    platform_color: str
    subsections: List[SubsectionView]


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader('gallery', 'templates'),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters['asset_url'] = encode_asset_path
    env.filters['js_arg'] = escape_js_arg
    return env


_ENV = _environment()


def _static(name: str) -> Markup:
    return Markup(resources.files('gallery').joinpath('static', name).read_text(encoding='utf-8'))


def _card(img: ScreenImage, resolver: FigmaUrlResolver) -> CardView:
    return CardView(
        name=img.display_name,
        search_key=img.display_name.lower(),
        path=img.relative_path,
        figma_url=resolver.resolve(img.display_name, img.source_folder),
        dimensions=img.dimensions,
    )


def section_views(model: GalleryModel, resolver: FigmaUrlResolver) -> List[SectionView]:
    views: List[SectionView] = []
    for sec in model.sections:
        subs = [
            SubsectionView(
                id=sec.subsection_id(i),
                label=sub.label,
                cards=[_card(img, resolver) for img in sub.images],
            )
            for i, sub in enumerate(sec.subsections)
        ]
        views.append(SectionView(sec, PLATFORM_COLORS[sec.platform], subs))
    return views


def render_gallery(model: GalleryModel, resolver: Optional[FigmaUrlResolver] = None,
                   site: Optional[SiteConfig] = None) -> str:
    """Return the page markup. Identical inputs give byte-identical output."""
    resolver = resolver or FigmaUrlResolver.disabled()
    site = site or SiteConfig()
    state = GalleryState.from_model(model)
    template = _ENV.get_template('gallery.html')
    return template.render(
        site=site,
        model=model,
        sections=section_views(model, resolver),
        bootstrap=state.bootstrap(),
        css=_static('gallery.css'),
        js=_static('gallery.js'),
    )
