"""
iconutil Wrapper

Packages an iconset into a single icns file with the `iconutil` command line
utility. The work happens in a temporary directory that is always removed
before control returns to the caller.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Union

from .errors import DestinationExistsError, PackagingError, WriteIOError
from .logger import get_logger
from .utils import run_command

logger = get_logger(__name__)

ICONSET_NAME = 'icon.iconset'
ICON_NAME = 'icon.icns'


class IconUtil:
    """Runs `iconutil -c icns` against an iconset"""

    def __init__(self, executable: str = 'iconutil'):
        self.executable = executable

    def write(self, iconset, output_path: Union[str, Path]) -> Path:
        """
        Package `iconset` into an icns file at `output_path`

        Raises PackagingError if iconutil prints anything; it reports problems
        on its output streams rather than through its exit status.
        """
        output_path = Path(output_path)
        temp_dir = Path(tempfile.mkdtemp(prefix='icnskit-'))
        logger.debug(f"Created temporary workspace {temp_dir}")

        try:
            self._package(iconset, temp_dir, output_path)
        finally:
            shutil.rmtree(temp_dir)
            logger.debug(f"Removed temporary workspace {temp_dir}")

        return output_path

    def _package(self, iconset, temp_dir: Path, output_path: Path) -> None:
        iconset.write(temp_dir / ICONSET_NAME)

        command = [self.executable, '-c', 'icns', ICONSET_NAME]
        logger.debug(f"Running {' '.join(command)}")
        _, stdout, stderr = run_command(command, cwd=temp_dir)

        diagnostics = (stdout or '') + (stderr or '')
        if diagnostics:
            raise PackagingError(diagnostics.strip() or diagnostics)

        icon_path = temp_dir / ICON_NAME
        if not icon_path.is_file():
            raise PackagingError(f"{self.executable} did not produce {ICON_NAME}")

        if output_path.exists():
            raise DestinationExistsError(str(output_path))
        try:
            shutil.copyfile(icon_path, output_path)
        except OSError as e:
            raise WriteIOError(str(output_path), e.strerror or str(e)) from e
