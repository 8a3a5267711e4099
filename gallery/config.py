"""
Build-time configuration for the gallery.

The configuration is a JSON document (see config/gallery.config.json) that is
validated once, before any folder is scanned:

- section ids are unique and usable as DOM ids
- every subsection names a non-empty folder
- accent colors are hex colors
- skip patterns compile as regular expressions
- Figma document values are file keys or Figma file URLs
"""
import json
import pathlib
import re
from typing import Dict, List, Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .models import NameStyle, Platform
from .utils import extract_file_key

ROOT = pathlib.Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = ROOT / 'config' / 'gallery.config.json'


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='forbid')


class SubsectionConfig(_Model):
    label: str
    folder: str
    name_style: NameStyle = Field(default=NameStyle.PLAIN, alias='nameStyle')
    skip_numeric: bool = Field(default=False, alias='skipNumeric')
    skip_patterns: Tuple[str, ...] = Field(default=(), alias='skipPatterns')

    @field_validator('folder')
    @classmethod
    def _folder_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('folder must not be empty')
        return v

    @field_validator('skip_patterns')
    @classmethod
    def _patterns_compile(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for pat in v:
            try:
                re.compile(pat)
            except re.error as e:
                raise ValueError(f'invalid skip pattern {pat!r}: {e}') from e
        return v

    def compiled_patterns(self) -> Tuple[Pattern, ...]:
        return tuple(re.compile(p) for p in self.skip_patterns)


class SectionConfig(_Model):
    id: str = Field(pattern=r'^[A-Za-z0-9]+(?:[-_][A-Za-z0-9]+)*$')
    label: str
    codebase: str = ''
    platform: Platform
    color: str = Field(default='#3b82f6', pattern=r'^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$')
    subsections: Tuple[SubsectionConfig, ...] = Field(min_length=1)


class FigmaConfig(_Model):
    # document key -> Figma file key (or file URL)
    documents: Dict[str, str] = Field(default_factory=dict)
    # image folder -> document key
    folders: Dict[str, str] = Field(default_factory=dict)

    @field_validator('documents')
    @classmethod
    def _file_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for doc_key, value in v.items():
            file_key = extract_file_key(value)
            if not file_key:
                raise ValueError(f'document {doc_key!r} has an empty file key')
            out[doc_key] = file_key
        return out


class SiteConfig(_Model):
    title: str = 'Design Gallery'
    heading: str = 'Design Gallery'
    hero_title: str = Field(default='Design Gallery', alias='heroTitle')
    hero_subtitle: str = Field(default='All screens from Figma, served locally', alias='heroSubtitle')
    description: str = ''
    search_placeholder: str = Field(default='Search screens…', alias='searchPlaceholder')


class GalleryConfig(_Model):
    site: SiteConfig = Field(default_factory=SiteConfig)
    sections: Tuple[SectionConfig, ...] = Field(min_length=1)
    figma: FigmaConfig = Field(default_factory=FigmaConfig)

    @model_validator(mode='after')
    def _unique_section_ids(self) -> 'GalleryConfig':
        seen = set()
        for sec in self.sections:
            if sec.id in seen:
                raise ValueError(f'duplicate section id: {sec.id}')
            seen.add(sec.id)
        return self

    def unmapped_documents(self) -> List[str]:
        """Document keys referenced by a folder but missing from the document table."""
        return sorted({k for k in self.figma.folders.values() if k not in self.figma.documents})


def parse_config(data: dict, source: Optional[str] = None) -> GalleryConfig:
    try:
        return GalleryConfig.model_validate(data)
    except ValidationError as e:
        where = f' in {source}' if source else ''
        raise ConfigError(f'Invalid gallery configuration{where}:\n{e}') from e


def load_config(path: pathlib.Path = DEFAULT_CONFIG_PATH) -> GalleryConfig:
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise ConfigError(f'Could not read configuration {path}: {e}') from e
    except json.JSONDecodeError as e:
        raise ConfigError(f'Configuration {path} is not valid JSON: {e}') from e
    return parse_config(data, str(path))
