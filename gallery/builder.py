"""
Compose the gallery model from configured sections.

Each subsection is loaded independently; sections and aggregate counts are
derived from the loaded tuples, never accumulated in shared counters.
"""
import pathlib
import posixpath
from functools import reduce
from typing import Dict, Iterable, Tuple

from .config import SectionConfig, SubsectionConfig
from .loader import load_images
from .models import GalleryModel, Platform, Section, Subsection
from .utils import get_logger

logger = get_logger()


def build_subsection(sub: SubsectionConfig, images_dir: pathlib.Path, relative_root: str,
                     probe: bool = True) -> Subsection:
    images = load_images(
        images_dir / sub.folder,
        posixpath.join(relative_root, sub.folder),
        sub.name_style,
        skip_numeric=sub.skip_numeric,
        skip_patterns=sub.compiled_patterns(),
        probe=probe,
        source_folder=sub.folder,
    )
    return Subsection(label=sub.label, images=images)


def build_section(sec: SectionConfig, images_dir: pathlib.Path, relative_root: str,
                  probe: bool = True) -> Section:
    return Section(
        id=sec.id,
        label=sec.label,
        codebase=sec.codebase,
        platform=sec.platform,
        color=sec.color,
        subsections=tuple(build_subsection(sub, images_dir, relative_root, probe) for sub in sec.subsections),
    )


def _count_platforms(acc: Dict[Platform, int], sec: Section) -> Dict[Platform, int]:
    return {**acc, sec.platform: acc.get(sec.platform, 0) + sec.total}


def summarize(sections: Tuple[Section, ...]) -> GalleryModel:
    platform_counts = reduce(_count_platforms, sections, {p: 0 for p in Platform})
    return GalleryModel(
        sections=sections,
        total_screens=sum(sec.total for sec in sections),
        total_subsections=sum(len(sec.subsections) for sec in sections),
        platform_counts=platform_counts,
    )


def build_gallery_model(sections: Iterable[SectionConfig], images_dir: pathlib.Path,
                        relative_root: str = '', probe: bool = True) -> GalleryModel:
    """Load every configured subsection and return the catalog with its totals.

    ``relative_root`` is ``images_dir`` as seen from the output page, with
    '/' separators; image paths in the model are built from it.
    """
    built = tuple(build_section(sec, images_dir, relative_root, probe) for sec in sections)
    return summarize(built)


def log_summary(model: GalleryModel) -> None:
    logger.info(f'Total screens: {model.total_screens}')
    for sec in model.sections:
        logger.info(f'  {sec.label}: {sec.total}')
        for sub in sec.subsections:
            logger.info(f'    • {sub.label}: {sub.count}')
