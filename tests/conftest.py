import json
import pathlib

import pytest
from PIL import Image


def make_png(path: pathlib.Path, size=(8, 6)) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', size, 'white').save(path, format='PNG')
    return path


def figma_export(pages) -> dict:
    return {'name': 'Test file', 'document': {'id': '0:0', 'type': 'DOCUMENT', 'children': pages}}


@pytest.fixture
def png():
    return make_png


@pytest.fixture
def images_root(tmp_path):
    root = tmp_path / 'docs' / 'figma-images'
    make_png(root / 'web' / 'Login_Screen_12-34.png', (1440, 900))
    make_png(root / 'web' / 'Active_Offices_2659-3065.png', (1440, 900))
    make_png(root / 'mobile' / 'Login_OTP.png', (360, 800))
    make_png(root / 'mobile' / 'Dashboard.png', (360, 800))
    make_png(root / 'mobile' / '3.png')
    return root


@pytest.fixture
def json_dir(tmp_path):
    d = tmp_path / 'docs' / 'figma-json'
    d.mkdir(parents=True)
    doc = figma_export([
        {'id': '1:1', 'name': 'Page 1', 'type': 'CANVAS', 'children': [
            {'id': '12:34', 'name': 'Login Screen', 'type': 'FRAME'},
            {'id': '2659:3065', 'name': 'Active Offices', 'type': 'FRAME'},
        ]},
    ])
    (d / 'web-doc.json').write_text(json.dumps(doc), encoding='utf-8')
    return d


@pytest.fixture
def config_data():
    return {
        'site': {'title': 'Test Gallery', 'heading': 'Test'},
        'sections': [
            {
                'id': 'web',
                'label': 'Web App',
                'codebase': 'web repo',
                'platform': 'WEB',
                'color': '#1F497D',
                'subsections': [{'label': 'All Screens', 'folder': 'web', 'nameStyle': 'node-id'}],
            },
            {
                'id': 'mobile',
                'label': 'Mobile App',
                'platform': 'MOBILE',
                'color': '#22c55e',
                'subsections': [{'label': 'All Screens', 'folder': 'mobile', 'skipNumeric': True}],
            },
        ],
        'figma': {
            'documents': {'web-doc': 'FILEKEY123'},
            'folders': {'web': 'web-doc'},
        },
    }
