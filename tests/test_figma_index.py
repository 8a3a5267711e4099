import json

import pytest

from gallery.errors import MetadataError
from gallery.figma_index import build_figma_index, index_document
from gallery.utils import normalize_name

from conftest import figma_export


def test_normalize_name_is_case_and_punctuation_insensitive():
    assert normalize_name('Active Offices') == normalize_name('active_offices!!') == 'activeoffices'
    assert normalize_name(normalize_name('Loan-Summary (v2)')) == normalize_name('Loan-Summary (v2)')
    assert normalize_name('👉 Start') == 'start'
    assert normalize_name('') == ''


def test_frames_and_section_children_are_indexed():
    doc = figma_export([
        {'id': '0:1', 'name': 'Page 1', 'children': [
            {'id': '1:2', 'name': 'Login Screen', 'type': 'FRAME'},
            {'id': '1:3', 'name': 'Onboarding', 'type': 'SECTION', 'children': [
                {'id': '1:4', 'name': 'Welcome', 'type': 'FRAME'},
                {'id': '1:5', 'type': 'FRAME'},
            ]},
            {'id': '1:6', 'type': 'FRAME'},
        ]},
    ])
    idx = index_document(doc)
    assert idx == {'loginscreen': '1:2', 'onboarding': '1:3', 'welcome': '1:4'}


def test_nested_groups_only_one_level_deep():
    doc = figma_export([
        {'id': '0:1', 'children': [
            {'id': '2:1', 'name': 'Group', 'type': 'GROUP', 'children': [
                {'id': '2:2', 'name': 'Hidden Frame', 'type': 'FRAME'},
            ]},
        ]},
    ])
    assert index_document(doc) == {'group': '2:1'}


def test_last_write_wins_across_pages():
    doc = figma_export([
        {'id': '0:1', 'children': [{'id': '1:1', 'name': 'Home', 'type': 'FRAME'}]},
        {'id': '0:2', 'children': [{'id': '9:9', 'name': 'home!', 'type': 'FRAME'}]},
    ])
    assert index_document(doc) == {'home': '9:9'}


def test_unexpected_shapes_give_empty_index():
    assert index_document([]) == {}
    assert index_document({'document': None}) == {}
    assert index_document({'document': {'children': ['x', None]}}) == {}
    assert index_document({'document': {'children': 5}}) == {}
    assert index_document({'document': {'children': [{'children': 7}]}}) == {}
    assert index_document({'document': {'children': [{'children': {'id': '1:1', 'name': 'Home'}}]}}) == {}


def test_section_with_non_list_children_keeps_the_section():
    doc = figma_export([{'id': '0:1', 'children': [
        {'id': '3:1', 'name': 'Flows', 'type': 'SECTION', 'children': 3},
        {'id': '3:2', 'name': 'Home', 'type': 'FRAME'},
    ]}])
    assert index_document(doc) == {'flows': '3:1', 'home': '3:2'}


def test_wrong_shape_document_builds_empty_index(tmp_path):
    (tmp_path / 'odd.json').write_text(json.dumps({'document': {'children': 5}}), encoding='utf-8')
    assert build_figma_index({'odd': 'K'}, tmp_path, strict=False) == {'K': {}}
    assert build_figma_index({'odd': 'K'}, tmp_path) == {'K': {}}


def test_names_without_alphanumerics_are_not_indexed():
    doc = figma_export([{'id': '0:1', 'children': [{'id': '1:1', 'name': '👉', 'type': 'FRAME'}]}])
    assert index_document(doc) == {}


def test_build_index_per_file_key(tmp_path):
    (tmp_path / 'a.json').write_text(json.dumps(figma_export([
        {'id': '0:1', 'children': [{'id': '123:45', 'name': 'Login', 'type': 'FRAME'}]},
    ])), encoding='utf-8')

    index = build_figma_index({'a': 'KEY_A', 'missing': 'KEY_B'}, tmp_path)
    assert index == {'KEY_A': {'login': '123:45'}}


def test_malformed_document_is_fatal(tmp_path):
    (tmp_path / 'broken.json').write_text('{"document": ', encoding='utf-8')
    with pytest.raises(MetadataError) as excinfo:
        build_figma_index({'broken': 'KEY'}, tmp_path)
    assert 'broken.json' in str(excinfo.value)


def test_malformed_document_skipped_when_lenient(tmp_path):
    (tmp_path / 'broken.json').write_text('not json', encoding='utf-8')
    (tmp_path / 'ok.json').write_text(json.dumps(figma_export([
        {'id': '0:1', 'children': [{'id': '1:1', 'name': 'Home', 'type': 'FRAME'}]},
    ])), encoding='utf-8')
    index = build_figma_index({'broken': 'K1', 'ok': 'K2'}, tmp_path, strict=False)
    assert index == {'K2': {'home': '1:1'}}
