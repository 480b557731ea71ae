"""Tests for icnskit/iconutil.py"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from icnskit.errors import DestinationExistsError, PackagingError
from icnskit.iconset import Iconset
from icnskit.iconutil import ICON_NAME, ICONSET_NAME, IconUtil
from icnskit.image import Image


@pytest.fixture
def iconset(square_png):
    return Iconset(Image.open(square_png))


def workspace_of(mock_run):
    return Path(mock_run.call_args.kwargs['cwd'])


class TestIconUtil:
    """Test cases for IconUtil"""

    def test_packages_iconset(self, iconset, output_dir, mock_iconutil):
        output = output_dir / 'App.icns'

        result = IconUtil().write(iconset, output)

        assert result == output
        assert output.read_bytes().startswith(b'icns')
        command = mock_iconutil.call_args.args[0]
        assert command == ['iconutil', '-c', 'icns', ICONSET_NAME]

    def test_custom_executable(self, iconset, output_dir, mock_iconutil):
        IconUtil('/opt/bin/iconutil').write(iconset, output_dir / 'App.icns')
        assert mock_iconutil.call_args.args[0][0] == '/opt/bin/iconutil'

    def test_workspace_holds_complete_iconset(self, iconset, output_dir):
        seen = {}

        def fake_run_command(command, cwd=None, env=None, timeout=None):
            seen['files'] = sorted(p.name for p in (Path(cwd) / ICONSET_NAME).iterdir())
            (Path(cwd) / ICON_NAME).write_bytes(b'icns')
            return (True, '', '')

        with patch('icnskit.iconutil.run_command', side_effect=fake_run_command):
            IconUtil().write(iconset, output_dir / 'App.icns')

        assert len(seen['files']) == 10

    def test_workspace_removed_on_success(self, iconset, output_dir, mock_iconutil):
        IconUtil().write(iconset, output_dir / 'App.icns')
        assert not workspace_of(mock_iconutil).exists()

    def test_diagnostics_raise_packaging_error(self, iconset, output_dir):
        with patch('icnskit.iconutil.run_command',
                   return_value=(False, '', 'App.iconset:error: Failed to generate ICNS.')) as mock_run:
            with pytest.raises(PackagingError) as exc_info:
                IconUtil().write(iconset, output_dir / 'App.icns')

        assert 'Failed to generate ICNS' in exc_info.value.diagnostic_text
        assert not workspace_of(mock_run).exists()
        assert not (output_dir / 'App.icns').exists()

    def test_stdout_output_is_a_failure(self, iconset, output_dir):
        def chatty_run_command(command, cwd=None, env=None, timeout=None):
            (Path(cwd) / ICON_NAME).write_bytes(b'icns')
            return (True, 'something unexpected', '')

        with patch('icnskit.iconutil.run_command', side_effect=chatty_run_command):
            with pytest.raises(PackagingError):
                IconUtil().write(iconset, output_dir / 'App.icns')

        assert not (output_dir / 'App.icns').exists()

    def test_missing_executable(self, iconset, output_dir):
        created = []
        real_mkdtemp = tempfile.mkdtemp

        def recording_mkdtemp(**kwargs):
            created.append(real_mkdtemp(**kwargs))
            return created[-1]

        with patch('icnskit.iconutil.tempfile.mkdtemp', side_effect=recording_mkdtemp):
            with pytest.raises(PackagingError) as exc_info:
                IconUtil('icnskit-no-such-iconutil').write(iconset, output_dir / 'App.icns')

        assert 'Command not found' in exc_info.value.message
        assert len(created) == 1
        assert not Path(created[0]).exists()

    def test_no_icon_produced(self, iconset, output_dir):
        with patch('icnskit.iconutil.run_command', return_value=(True, '', '')) as mock_run:
            with pytest.raises(PackagingError):
                IconUtil().write(iconset, output_dir / 'App.icns')
        assert not workspace_of(mock_run).exists()

    def test_existing_output_is_not_replaced(self, iconset, output_dir, mock_iconutil):
        output = output_dir / 'App.icns'
        output.write_bytes(b'original')

        with pytest.raises(DestinationExistsError):
            IconUtil().write(iconset, output)

        assert output.read_bytes() == b'original'
        assert not workspace_of(mock_iconutil).exists()
