"""
Pytest configuration for template_helper
"""

import io
import logging
import sys
from unittest.mock import Mock

import pytest

from template_helper import ImageSource, MediaLibrary, TemplateHelper
from template_helper.media.host import ImageHost


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an end-to-end rendering test"
    )


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to keep output quiet."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()
    package_logger = logging.getLogger("template_helper")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_data():
    """Data bag covering scalars, falsy values and nesting."""
    return {
        'title': 'Main Title',
        'subtitle': 'Subtitle with <special> chars',
        'nested': {
            'heading': 'Nested Heading',
            'deep': {'value': 'deep value'},
        },
        'items': ['first', 'second', {'name': 'third'}],
        'null_value': None,
        'false_value': False,
        'zero': 0,
        'zero_string': '0',
        'empty_string': '',
        'empty_list': [],
        'price': 12.5,
        'count': 3,
    }


@pytest.fixture
def output():
    """In-memory output sink."""
    return io.StringIO()


@pytest.fixture
def helper(sample_data, output):
    """Helper over the sample data writing to an in-memory sink."""
    return TemplateHelper(sample_data, out=output, id_prefix="abcde-")


@pytest.fixture
def media_library():
    """Library with one landscape attachment (with sizes) and one portrait attachment."""
    library = MediaLibrary()
    library.add(
        12, "https://cdn.example/hero.jpg", 1600, 900, alt="Hero image",
        sizes={
            "medium": ("https://cdn.example/hero-800.jpg", 800, 450),
            "thumbnail": ("https://cdn.example/hero-150.jpg", 150, 150),
            "large": ("https://cdn.example/hero-1200.jpg", 1200, 675),
        },
    )
    library.add(34, "https://cdn.example/tall.jpg", 600, 1200, alt="Tall image")
    return library


@pytest.fixture
def mock_host():
    """Image host double returning fixed values for every attachment."""
    host = Mock(spec=ImageHost)
    host.render_attachment.return_value = '<img src="https://cdn.example/a.jpg" alt="">'
    host.get_image_src.return_value = ImageSource("https://cdn.example/a.jpg", 800, 600)
    host.get_metadata.return_value = {"width": 800, "height": 600}
    host.calculate_srcset.return_value = "https://cdn.example/a-400.jpg 400w, https://cdn.example/a.jpg 800w"
    host.calculate_sizes.return_value = "(max-width: 800px) 100vw, 800px"
    host.hwstring.return_value = 'width="800" height="600"'
    return host
