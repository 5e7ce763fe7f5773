"""
Tests for the command-line interface.
"""

import json

import pytest

from template_helper import ADVANCED_IMG_CSS, __version__
from template_helper.cli import RENDER_MODES, create_parser, main


@pytest.fixture
def data_file(tmp_path):
    """Data bag on disk."""
    path = tmp_path / 'page.json'
    path.write_text(json.dumps({
        'card': {'title': 'Hello <b>world</b>', 'link': 'example.com/a b'},
        'hero': {
            'sizing': 'full-width',
            'base_img': 12,
            'focal_x': 30,
        },
        'hero_id': 12,
        'photo': {'url': 'https://cdn.example/p.jpg', 'alt': 'Photo'},
    }), encoding='utf-8')
    return path


@pytest.fixture
def media_file(tmp_path):
    """Attachment registry on disk."""
    path = tmp_path / 'media.json'
    path.write_text(json.dumps({
        'attachments': [
            {
                'id': 12,
                'url': 'https://cdn.example/hero.jpg',
                'width': 1600,
                'height': 900,
                'alt': 'Hero',
                'sizes': {
                    'medium': {'url': 'https://cdn.example/hero-800.jpg', 'width': 800, 'height': 450},
                },
            },
        ],
    }), encoding='utf-8')
    return path


class TestParser:
    """Test argument parsing."""

    def test_render_defaults(self):
        args = create_parser().parse_args(['render', 'page.json', 'card.title'])
        assert args.command == 'render'
        assert args.mode == 'html'
        assert args.separator == '.'
        assert args.media is None
        assert args.log_level == 'WARNING'

    def test_modes(self):
        assert set(RENDER_MODES) == {
            'img', 'responsive', 'advanced', 'html', 'safe-html', 'attr', 'url', 'js', 'xml', 'raw',
        }

    def test_unknown_mode(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['render', 'page.json', 'x', '--mode', 'bogus'])


class TestRenderCommand:
    """Test the render command."""

    def test_html(self, data_file, capsys):
        assert main(['render', str(data_file), 'card.title']) == 0
        assert capsys.readouterr().out == 'Hello &lt;b&gt;world&lt;/b&gt;\n'

    @pytest.mark.parametrize('mode,expected', [
        ('raw', 'Hello <b>world</b>'),
        ('attr', 'Hello &lt;b&gt;world&lt;/b&gt;'),
    ])
    def test_modes(self, data_file, capsys, mode, expected):
        assert main(['render', str(data_file), 'card.title', '--mode', mode]) == 0
        assert capsys.readouterr().out == expected + '\n'

    def test_url(self, data_file, capsys):
        assert main(['render', str(data_file), 'card.link', '-m', 'url']) == 0
        assert capsys.readouterr().out == 'http://example.com/a%20b\n'

    def test_separator(self, data_file, capsys):
        assert main(['render', str(data_file), 'card/title', '--mode', 'raw', '--separator', '/']) == 0
        assert capsys.readouterr().out == 'Hello <b>world</b>\n'

    def test_img_without_media(self, data_file, capsys):
        assert main(['render', str(data_file), 'photo', '--mode', 'img']) == 0
        assert capsys.readouterr().out == '<img src="https://cdn.example/p.jpg" alt="Photo">\n'

    def test_img_with_media_and_size(self, data_file, media_file, capsys):
        argv = ['render', str(data_file), 'hero_id', '--mode', 'img', '--media', str(media_file), '--size', 'medium']
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert 'src="https://cdn.example/hero-800.jpg"' in out
        assert 'class="attachment-medium size-medium"' in out

    def test_advanced(self, data_file, media_file, capsys):
        argv = ['render', str(data_file), 'hero', '--mode', 'advanced', '--media', str(media_file)]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert out.startswith('<div class="lx-img lx-img--full-width lx-img--has-focal"')
        assert '--focal-x: 30%;' in out
        assert 'https://cdn.example/hero.jpg' in out

    def test_output_file(self, data_file, tmp_path, capsys):
        target = tmp_path / 'out.html'
        assert main(['render', str(data_file), 'photo', '-m', 'img', '-o', str(target)]) == 0
        assert target.read_text(encoding='utf-8') == '<img src="https://cdn.example/p.jpg" alt="Photo">'
        assert capsys.readouterr().out == ''

    def test_missing_value_renders_empty_line(self, data_file, capsys):
        assert main(['--log-level', 'ERROR', 'render', str(data_file), 'card.missing']) == 0
        assert capsys.readouterr().out == '\n'

    def test_missing_data_file(self, tmp_path, capsys):
        assert main(['render', str(tmp_path / 'nope.json'), 'x']) == 1
        assert 'File not found' in capsys.readouterr().err

    def test_missing_media_file(self, data_file, tmp_path, capsys):
        assert main(['render', str(data_file), 'hero_id', '-m', 'img', '--media', str(tmp_path / 'nope.json')]) == 1
        assert 'File not found' in capsys.readouterr().err

    def test_data_must_be_object(self, tmp_path, capsys):
        path = tmp_path / 'list.json'
        path.write_text('[1, 2]', encoding='utf-8')
        assert main(['render', str(path), '0']) == 1
        assert 'must contain a JSON object' in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / 'broken.json'
        path.write_text('{"a": ', encoding='utf-8')
        assert main(['render', str(path), 'a']) == 1
        assert 'Invalid JSON' in capsys.readouterr().err

    def test_invalid_media(self, data_file, tmp_path, capsys):
        """Test registration errors are reported instead of raised."""
        path = tmp_path / 'media.json'
        path.write_text(json.dumps({'attachments': [{'id': 1, 'url': '', 'width': 1, 'height': 1}]}), encoding='utf-8')
        assert main(['render', str(data_file), 'hero_id', '-m', 'img', '--media', str(path)]) == 1
        assert 'Attachment url must be a non-empty string' in capsys.readouterr().err


class TestOtherCommands:
    """Test css, version and the bare invocation."""

    def test_css(self, capsys):
        assert main(['css']) == 0
        assert capsys.readouterr().out == ADVANCED_IMG_CSS

    def test_css_prefix(self, capsys):
        assert main(['css', '--prefix', 'pic']) == 0
        out = capsys.readouterr().out
        assert '.pic.pic--cover img' in out
        assert 'lx-img' not in out

    def test_version(self, capsys):
        assert main(['version']) == 0
        assert capsys.readouterr().out == f'template-helper v{__version__}\n'

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert 'usage: template-helper' in capsys.readouterr().out

    def test_plain_log_flag(self, capsys):
        assert main(['--plain-log', '--log-level', 'DEBUG', 'version']) == 0
        assert 'template-helper v' in capsys.readouterr().out
