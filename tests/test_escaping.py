"""
Tests for escaping functions and the escape-and-echo accessors.
"""

import pytest

from template_helper import Escapers, HelperConfig, TemplateHelper
from template_helper.escaping.escapers import (
    esc_attr,
    esc_html,
    esc_js,
    esc_url,
    esc_xml,
    sanitize_html,
)


class TestEscapers:
    """Test the default escaping functions."""

    def test_esc_attr_quotes(self):
        """Test attribute escaping covers both quote styles."""
        assert esc_attr('"a" & <b>') == '&quot;a&quot; &amp; &lt;b&gt;'
        assert esc_attr("it's") == 'it&#x27;s'

    def test_esc_html(self):
        assert esc_html('<script>alert(1)</script>') == '&lt;script&gt;alert(1)&lt;/script&gt;'
        assert esc_html('plain') == 'plain'

    @pytest.mark.parametrize('escape', [esc_attr, esc_html])
    @pytest.mark.parametrize('raw,expected', [
        ('Tom &amp; Jerry', 'Tom &amp; Jerry'),
        ('a &lt;b&gt;', 'a &lt;b&gt;'),
        ('&#169; &#xA9; &copy;', '&#169; &#xA9; &copy;'),
        ('&bogus; & &', '&amp;bogus; &amp; &amp;'),
        ('AT&T', 'AT&amp;T'),
        ('&amp <b>', '&amp;amp &lt;b&gt;'),
    ])
    def test_existing_entities_are_not_double_encoded(self, escape, raw, expected):
        """Test valid entities pass through while bare ampersands are encoded."""
        assert escape(raw) == expected

    @pytest.mark.parametrize('raw,expected', [
        ('https://example.com/a b', 'https://example.com/a%20b'),
        ('example.com/page', 'http://example.com/page'),
        ('/relative/path', '/relative/path'),
        ('#anchor', '#anchor'),
        ('?page=2', '?page=2'),
        ('index.php?x=1', 'index.php?x=1'),
        ('/search?a=1&b=2', '/search?a=1&#038;b=2'),
        ('/search?a=1&amp;b=2', '/search?a=1&#038;b=2'),
        ("/it's", '/it&#039;s'),
        ('mailto:someone@example.com', 'mailto:someone@example.com'),
        ('  https://example.com  ', 'https://example.com'),
        ('https://example.com/<x>', 'https://example.com/x'),
    ])
    def test_esc_url(self, raw, expected):
        """Test URL cleanup and scheme handling."""
        assert esc_url(raw) == expected

    @pytest.mark.parametrize('raw', [
        'javascript:alert(1)',
        'JavaScript:alert(1)',
        'data:text/html;base64,AAAA',
        'vbscript:msgbox',
        '',
        '   ',
    ])
    def test_esc_url_rejects(self, raw):
        """Test disallowed schemes and empty input produce an empty string."""
        assert esc_url(raw) == ''

    def test_esc_url_custom_protocols(self):
        """Test restricting the allowed schemes."""
        assert esc_url('ftp://files.example/x', protocols=['https']) == ''
        assert esc_url('https://example.com', protocols=['https']) == 'https://example.com'

    def test_esc_js(self):
        """Test escaping for inline JavaScript strings."""
        assert esc_js('It\'s "x"\n<b>') == 'It\\\'s &quot;x&quot;\\n&lt;b&gt;'
        assert esc_js('a\\b') == 'a\\\\b'
        assert esc_js('line\r\nbreak') == 'line\\nbreak'

    def test_esc_xml(self):
        assert esc_xml("Tom & Jerry's <show>") == 'Tom &amp; Jerry&apos;s &lt;show&gt;'

    def test_sanitize_html_keeps_post_markup(self):
        """Test that allowed tags survive sanitizing."""
        markup = '<p class="lead">Hello <strong>world</strong> <a href="https://example.com">link</a></p>'
        assert sanitize_html(markup) == markup

    def test_sanitize_html_strips_unsafe(self):
        """Test that scripts, handlers and unsafe links are removed."""
        result = sanitize_html(
            '<p onclick="steal()">Hi<script>bad()</script> <a href="javascript:x()">go</a></p>'
        )
        assert '<script' not in result
        assert 'onclick' not in result
        assert 'javascript' not in result
        assert result.startswith('<p>Hi')


class TestEscapingFacade:
    """Test escape-and-echo accessors on the helper."""

    def test_html(self, helper):
        assert helper.html('subtitle') == 'Subtitle with &lt;special&gt; chars'
        assert helper.html('missing') == ''
        assert helper.html('count') == '3'
        assert helper.html('false_value') == ''

    def test_attr(self, helper):
        helper.set('quote', 'say "hi"')
        assert helper.attr('quote') == 'say &quot;hi&quot;'

    def test_pre_encoded_value(self, helper):
        helper.set('show', 'Tom &amp; Jerry & friends')
        assert helper.html('show') == 'Tom &amp; Jerry &amp; friends'
        assert helper.attr('show') == 'Tom &amp; Jerry &amp; friends'

    def test_url(self, helper):
        helper.set('link', 'example.com/a b')
        assert helper.url('link') == 'http://example.com/a%20b'
        assert helper.url('missing') == ''

    def test_js_xml_and_raw(self, helper):
        """Test the remaining contexts."""
        helper.set('snippet', "it's <b>")
        assert helper.js('snippet') == "it\\'s &lt;b&gt;"
        assert helper.xml('snippet') == 'it&apos;s &lt;b&gt;'
        assert helper.raw('snippet') == "it's <b>"

    def test_safe_html(self, helper):
        helper.set('body', '<p>ok</p><script>x()</script>')
        result = helper.safe_html('body')
        assert result.startswith('<p>ok</p>')
        assert '<script' not in result

    def test_collections_print_nothing(self, helper):
        """Test that lists and mappings have no text form."""
        assert helper.html('items') == ''
        assert helper.html('nested') == ''

    def test_echo_writes_to_sink(self, helper, output):
        """Test echo variants write the same string the getters return."""
        helper.echo_html('subtitle')
        helper.echo_attr('title')
        helper.echo_raw('subtitle')
        assert output.getvalue() == (
            'Subtitle with &lt;special&gt; chars'
            'Main Title'
            'Subtitle with <special> chars'
        )

    def test_call_echoes_html(self, helper, output):
        """Test that calling the helper prints the HTML-escaped value."""
        helper('subtitle')
        assert output.getvalue() == 'Subtitle with &lt;special&gt; chars'

    def test_custom_escapers(self, sample_data, output):
        """Test injecting a different escaping function."""
        helper = TemplateHelper(sample_data, escapers=Escapers(html=str.upper), out=output)
        assert helper.html('title') == 'MAIN TITLE'
        assert helper.attr('subtitle') == 'Subtitle with &lt;special&gt; chars'


class TestFormatting:
    """Test printf-style output."""

    def test_sprintf_numeric(self, helper):
        assert helper.sprintf('%.2f EUR', 'price') == '12.50 EUR'
        assert helper.sprintf('%d items', 'count') == '3 items'

    def test_sprintf_text(self, helper):
        assert helper.sprintf('[%s]', 'title') == '[Main Title]'
        assert helper.sprintf('[%s]', 'missing') == '[]'
        assert helper.sprintf('[%s]', 'false_value') == '[]'

    def test_sprintf_without_conversion(self, helper):
        """Test a template without placeholders ignores the value."""
        assert helper.sprintf('Hello', 'title') == 'Hello'
        assert helper.sprintf('100%%', 'count') == '100%'
        assert helper.sprintf('Hello', 'missing') == 'Hello'

    @pytest.mark.parametrize('value,expected', [
        ('Main Title', '0'),
        ('12abc', '12'),
        (' 7 items', '7'),
        ('2.5kg', '2'),
        (True, '1'),
        (None, '0'),
    ])
    def test_sprintf_numeric_conversion_of_text(self, helper, value, expected):
        """Test numeric conversions use the numeric prefix of text values."""
        helper.set('value', value)
        assert helper.sprintf('%d', 'value') == expected

    def test_sprintf_float_conversion_of_text(self, helper):
        helper.set('value', '3.5 EUR')
        assert helper.sprintf('%.2f', 'value') == '3.50'

    def test_sprintf_needs_one_value(self, helper):
        with pytest.raises(TypeError):
            helper.sprintf('%s and %s', 'title')

    def test_printf(self, helper, output):
        helper.printf('<h2>%s</h2>', 'nested.heading')
        assert output.getvalue() == '<h2>Nested Heading</h2>'


class TestElementIds:
    """Test per-instance element ids."""

    def test_element_id_uses_prefix(self, helper, output):
        assert helper.element_id('title') == 'abcde-title'
        helper.echo_id('panel')
        assert output.getvalue() == 'abcde-panel'

    def test_element_id_is_escaped(self, helper):
        assert helper.element_id('"x"') == 'abcde-&quot;x&quot;'

    def test_random_prefix(self):
        """Test generated prefixes follow the configured length."""
        helper = TemplateHelper()
        assert len(helper.id_prefix) == 6
        assert helper.id_prefix.endswith('-')

        long_helper = TemplateHelper(config=HelperConfig(id_prefix_length=12))
        assert len(long_helper.id_prefix) == 13

    def test_regenerate_prefix(self):
        helper = TemplateHelper(config=HelperConfig(id_prefix_length=32))
        before = helper.id_prefix
        helper.regenerate_id_prefix()
        assert helper.id_prefix != before
        assert len(helper.id_prefix) == 33
