"""
Iconset Module

An iconset is a directory holding one PNG per required icon size. The sizes
are fixed: lengths 16, 32, 128, 256 and 512 points, each at 1x and 2x scale.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from . import file_type as types
from .iconutil import IconUtil
from .image import Image
from .logger import get_logger
from .utils import ensure_directory

logger = get_logger(__name__)


@dataclass(frozen=True)
class Dimension:
    """Sizing and scaling information for one icon in an iconset"""
    length: int
    scale: int

    @property
    def size(self) -> int:
        """Pixel length of each side: `length` multiplied by `scale`"""
        return self.length * self.scale

    @property
    def scale_description(self) -> str:
        return "" if self.scale == 1 else f"@{self.scale}x"

    def __str__(self) -> str:
        return f"{self.length}x{self.length}{self.scale_description}"


Dimension.ALL = [
    Dimension(length, scale)
    for length in (16, 32, 128, 256, 512)
    for scale in (1, 2)
]


class Icon:
    """A single icon in an iconset"""

    def __init__(self, image: Image, dimension: Dimension):
        self.image = image
        self.dimension = dimension

    @property
    def filename(self) -> str:
        return f"icon_{self.dimension}.png"

    def output_path(self, directory: Union[str, Path]) -> Path:
        return Path(directory) / self.filename

    def validate_dimensions(self) -> None:
        self.image.validate_square()

    def write_into(self, directory: Union[str, Path]) -> Path:
        """Resize the image for this icon and write it into `directory`"""
        path = self.output_path(directory)
        self.image.resized(self.dimension.size).write(path, types.PNG)
        logger.debug(f"Wrote {path.name} ({self.dimension.size}x{self.dimension.size})")
        return path


class Iconset:
    """The full set of icons generated from one image"""

    def __init__(self, image: Image):
        self.image = image
        self.icons = [Icon(image, dimension) for dimension in Dimension.ALL]

    def validate_dimensions(self) -> None:
        """Ensure every icon's image has equal width and height"""
        for icon in self.icons:
            icon.validate_dimensions()

    def write(self, directory: Union[str, Path]) -> List[Path]:
        """
        Write every icon into `directory`, creating it if necessary.

        Stops at the first failure. Icons already written are left in place.
        """
        directory = ensure_directory(directory)
        written = []
        for icon in self.icons:
            written.append(icon.write_into(directory))
        return written


class IconsetWriter(Enum):
    """How an iconset reaches its output path"""

    # The iconset directory itself is the output
    DIRECT = 'direct'
    # The iconset is packaged into an icns file with iconutil
    ICONUTIL = 'iconutil'

    def write(self, iconset: Iconset, output_path: Union[str, Path],
              iconutil: Optional[IconUtil] = None) -> None:
        if self is IconsetWriter.DIRECT:
            iconset.write(output_path)
        else:
            (iconutil or IconUtil()).write(iconset, output_path)

