import json
import pathlib

from gallery import cli


def run(tmp_path, images_root, json_dir, config_data, *extra):
    config_path = tmp_path / 'gallery.config.json'
    config_path.write_text(json.dumps(config_data), encoding='utf-8')
    out = tmp_path / 'docs' / 'figma-gallery.html'
    code = cli.main([
        '--config', str(config_path),
        '--images-dir', str(images_root),
        '--figma-json-dir', str(json_dir),
        '--out', str(out),
        *extra,
    ])
    return code, out


def test_end_to_end(tmp_path, images_root, json_dir, config_data):
    code, out = run(tmp_path, images_root, json_dir, config_data)
    assert code == 0
    page = out.read_text(encoding='utf-8')
    assert 'href="https://www.figma.com/design/FILEKEY123/?node-id=12%3A34"' in page
    assert 'href="https://www.figma.com/design/FILEKEY123/?node-id=2659%3A3065"' in page
    assert 'src="figma-images/web/Login_Screen_12-34.png"' in page
    assert 'figma-images/mobile/3.png' not in page
    assert '1440×900' in page


def test_no_dimensions_flag(tmp_path, images_root, json_dir, config_data):
    code, out = run(tmp_path, images_root, json_dir, config_data, '--no-dimensions')
    assert code == 0
    assert '1440×900' not in out.read_text(encoding='utf-8')


def test_missing_exports_build_without_links(tmp_path, images_root, config_data):
    code, out = run(tmp_path, images_root, tmp_path / 'no-json', config_data)
    assert code == 0
    assert 'node-id=' not in out.read_text(encoding='utf-8')


def test_malformed_metadata_fails(tmp_path, images_root, json_dir, config_data, caplog):
    (json_dir / 'web-doc.json').write_text('{"document": [', encoding='utf-8')
    code, out = run(tmp_path, images_root, json_dir, config_data)
    assert code == 1
    assert not out.exists()
    assert 'web-doc.json' in caplog.text


def test_malformed_metadata_lenient(tmp_path, images_root, json_dir, config_data):
    (json_dir / 'web-doc.json').write_text('{"document": [', encoding='utf-8')
    code, out = run(tmp_path, images_root, json_dir, config_data, '--lenient-metadata')
    assert code == 0
    page = out.read_text(encoding='utf-8')
    assert 'node-id=' not in page
    assert 'Login Screen' in page


def test_wrong_shape_metadata_builds_without_links(tmp_path, images_root, json_dir, config_data):
    (json_dir / 'web-doc.json').write_text('{"document": {"children": 5}}', encoding='utf-8')
    code, out = run(tmp_path, images_root, json_dir, config_data)
    assert code == 0
    assert 'node-id=' not in out.read_text(encoding='utf-8')


def test_invalid_config_fails(tmp_path, images_root, json_dir, config_data):
    config_data['sections'][0]['color'] = 'red'
    code, out = run(tmp_path, images_root, json_dir, config_data)
    assert code == 1
    assert not out.exists()


def test_open_flag(tmp_path, images_root, json_dir, config_data, monkeypatch):
    opened = []
    monkeypatch.setattr(cli, 'open_in_browser', opened.append)
    code, out = run(tmp_path, images_root, json_dir, config_data, '--open')
    assert code == 0
    assert opened == [out]


def test_relative_root(tmp_path):
    docs = tmp_path / 'docs'
    assert cli.relative_root(docs / 'figma-images', docs / 'gallery.html') == 'figma-images'
    assert cli.relative_root(docs, docs / 'gallery.html') == ''
    assert cli.relative_root(tmp_path / 'shots', docs / 'site' / 'index.html') == '../../shots'
    assert '\\' not in cli.relative_root(pathlib.Path('a') / 'b', pathlib.Path('out.html'))
