"""Test configuration and fixtures for icnskit test suite"""

import os
import pytest
from pathlib import Path
from unittest.mock import Mock, patch

from PIL import Image as PILImage

PROJECT_ROOT = Path(__file__).parent.parent

SVG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">
  <rect x="0" y="0" width="{width}" height="{height}" fill="#3366cc"/>
  <circle cx="{cx}" cy="{cy}" r="{r}" fill="#ffcc00"/>
</svg>
"""


def make_image(width, height, color=(200, 40, 40, 255)):
    """Create a Pillow RGBA image with a contrasting top-left quarter"""
    image = PILImage.new('RGBA', (width, height), color)
    marker = PILImage.new('RGBA', (max(width // 2, 1), max(height // 2, 1)), (20, 160, 60, 255))
    image.paste(marker, (0, 0))
    return image


@pytest.fixture
def project_root():
    """Fixture providing path to project root directory"""
    return PROJECT_ROOT


@pytest.fixture
def image_factory(tmp_path):
    """Write sample images of any size and format into a temporary directory"""
    def create(name, width, height, format=None, mode="RGBA", **save_args):
        path = tmp_path / name
        make_image(width, height).convert(mode).save(path, format=format, **save_args)
        return path
    return create


@pytest.fixture
def square_png(image_factory):
    return image_factory('square.png', 64, 64)


@pytest.fixture
def non_square_png(image_factory):
    return image_factory('wide.png', 64, 32)


@pytest.fixture
def svg_factory(tmp_path):
    def create(name, width, height):
        path = tmp_path / name
        path.write_text(SVG_TEMPLATE.format(
            width=width, height=height,
            cx=width / 2, cy=height / 2, r=min(width, height) / 4,
        ))
        return path
    return create


@pytest.fixture
def square_svg(svg_factory):
    return svg_factory('logo.svg', 64, 64)


@pytest.fixture
def square_pdf(tmp_path):
    """A single page 256x256 point PDF written by Pillow"""
    path = tmp_path / 'document.pdf'
    # 64 pixels at 18 dpi is 256 points
    make_image(64, 64).convert('RGB').save(path, format='PDF', resolution=18)
    return path


@pytest.fixture
def output_dir(tmp_path):
    """A directory for outputs that does not yet contain anything"""
    path = tmp_path / 'out'
    path.mkdir()
    return path


@pytest.fixture
def mock_iconutil():
    """
    Replace the iconutil invocation with one that writes a placeholder icns
    file into the working directory. The mock records every call.
    """
    def fake_run_command(command, cwd=None, env=None, timeout=None):
        iconset_dir = Path(cwd) / command[-1]
        assert iconset_dir.is_dir()
        (Path(cwd) / 'icon.icns').write_bytes(b'icns' + b'\x00' * 4)
        return (True, '', '')

    with patch('icnskit.iconutil.run_command', side_effect=fake_run_command) as mock_run:
        yield mock_run


@pytest.fixture
def mock_subprocess():
    """Mock subprocess for testing system commands"""
    with patch('subprocess.run') as mock_run:
        mock_result = Mock()
        mock_result.returncode = 0
        mock_result.stdout = "success"
        mock_result.stderr = ""
        mock_run.return_value = mock_result
        yield mock_run


@pytest.fixture
def clean_environment():
    """Remove ICNSKIT_* variables for the duration of a test"""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith('ICNSKIT_'):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# Pytest hooks for better test organization
def pytest_configure(config):
    """Configure pytest with custom markers and settings"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically"""
    for item in items:
        # Add markers based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
