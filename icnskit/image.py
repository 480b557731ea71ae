"""
Image Module

Decodes an input file into an RGBA raster image and produces resized copies.

Three decode strategies exist: raster files go straight through Pillow, PDF
documents have their first page rendered with pypdfium2, and SVG documents are
rasterized with cairosvg. PDF and SVG inputs are rendered at a scale chosen so
the result is large enough for the biggest icon without being wastefully large.
"""

import io
import math
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union

import cairosvg
import pypdfium2 as pdfium
from cairosvg.parser import Tree
from cairosvg.surface import SVGSurface
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from . import file_type as types
from .errors import (
    DecodeFailureError,
    DestinationExistsError,
    DocumentError,
    NonSquareDimensionsError,
    RenderFailureError,
    UnsupportedFormatError,
    WriteIOError,
)
from .file_type import FileType
from .logger import get_logger
from .output_handle import STANDARD_ERROR

logger = get_logger(__name__)

# 1024x1024 is the largest icon we need to produce
LARGEST_ICON_DIMENSION = 1024
MAX_RENDER_DIMENSION = LARGEST_ICON_DIMENSION * 4
# CSS pixels per inch, used to resolve physical SVG units
SVG_DPI = 96


def get_scale_factor(width: float, height: float,
                     min_dimension: float = 0,
                     max_dimension: float = MAX_RENDER_DIMENSION) -> float:
    """
    Return the scale factor for rendering a document of the given size.

    The shorter side (raised to `min_dimension` if smaller) is scaled towards
    `max_dimension`. Factors above 2 are floored to an even number, factors
    between 1 and 2 are rounded to a whole number, and smaller factors are
    rounded to one decimal place.
    """
    side = max(min(width, height), min_dimension)
    if side <= 0:
        raise DocumentError(f"invalid document size {width}x{height}")

    scale_factor = max_dimension / side
    if scale_factor > 2:
        return float(math.floor(scale_factor / 2) * 2)
    if scale_factor > 1:
        return float(math.floor(scale_factor + 0.5))
    return max(math.floor(scale_factor * 10 + 0.5) / 10, 0.1)


class DecodeStrategy(Enum):
    RASTER = 'raster'
    PAGED_DOCUMENT = 'paged-document'
    VECTOR_DOCUMENT = 'vector-document'

    @classmethod
    def for_file_type(cls, file_type: FileType) -> 'DecodeStrategy':
        if file_type == types.PDF:
            return cls.PAGED_DOCUMENT
        if file_type == types.SVG:
            return cls.VECTOR_DOCUMENT
        return cls.RASTER


def _open_raster(source: Union[Path, io.BytesIO], hint: Optional[str]) -> PILImage.Image:
    PILImage.init()
    formats = None
    if hint and hint in PILImage.OPEN:
        # Try the hinted format first, then let Pillow sniff the rest
        formats = [hint] + [fmt for fmt in PILImage.ID if fmt != hint]

    try:
        with PILImage.open(source, formats=formats) as opened:
            opened.load()
            return opened.convert('RGBA')
    except PILImage.DecompressionBombError as e:
        raise DecodeFailureError(f"image too large to decode: {e}") from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeFailureError(str(e)) from e


def decode_raster(path: Path, file_type: FileType) -> PILImage.Image:
    logger.debug(f"Decoding raster image {path} ({file_type})")
    return _open_raster(path, file_type.pillow_format)


def decode_paged_document(path: Path, file_type: FileType) -> PILImage.Image:
    """Render the first page of a PDF document"""
    try:
        document = pdfium.PdfDocument(str(path))
    except pdfium.PdfiumError as e:
        raise DocumentError(str(e)) from e

    try:
        if len(document) == 0:
            raise DocumentError("document has no pages")
        try:
            page = document[0]
            # Rendered size: the crop box, with the page rotation applied
            width, height = page.get_size()
        except pdfium.PdfiumError as e:
            raise DocumentError(str(e)) from e

        try:
            scale_factor = get_scale_factor(width, height)
            logger.debug(f"Rendering PDF page {width}x{height} at scale {scale_factor}")
            bitmap = page.render(scale=scale_factor, fill_color=(0, 0, 0, 0))
            return bitmap.to_pil().convert('RGBA')
        except pdfium.PdfiumError as e:
            raise RenderFailureError(str(e)) from e
        finally:
            page.close()
    finally:
        document.close()


def _read_svg(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise DecodeFailureError(e.strerror or str(e)) from e


def _svg_size(data: bytes, path: Path) -> Tuple[float, float]:
    """Measure an SVG document on a vector surface, allocating no pixels"""
    try:
        # The path is only the base for relative references
        tree = Tree(bytestring=data, url=str(path))
        surface = SVGSurface(tree, None, SVG_DPI)
        surface.finish()
    except Exception as e:
        # cairosvg surfaces parser, cairo and value errors alike
        raise RenderFailureError(str(e) or type(e).__name__) from e
    return surface.width, surface.height


def _rasterize_svg(data: bytes, path: Path, scale: float) -> bytes:
    try:
        return cairosvg.svg2png(bytestring=data, url=str(path), dpi=SVG_DPI, scale=scale)
    except Exception as e:
        raise RenderFailureError(str(e) or type(e).__name__) from e


def decode_vector_document(path: Path, file_type: FileType) -> PILImage.Image:
    """Rasterize an SVG document, keeping renderer diagnostics off the terminal"""
    data = _read_svg(path)

    def render() -> bytes:
        width, height = _svg_size(data, path)
        scale_factor = get_scale_factor(
            width, height,
            min_dimension=LARGEST_ICON_DIMENSION,
            max_dimension=MAX_RENDER_DIMENSION,
        )
        logger.debug(f"Rendering SVG {width}x{height} at scale {scale_factor}")
        return _rasterize_svg(data, path, scale_factor)

    png = STANDARD_ERROR.redirect(render)
    return _open_raster(io.BytesIO(png), 'PNG')


DECODERS: Dict[DecodeStrategy, Callable[[Path, FileType], PILImage.Image]] = {
    DecodeStrategy.RASTER: decode_raster,
    DecodeStrategy.PAGED_DOCUMENT: decode_paged_document,
    DecodeStrategy.VECTOR_DOCUMENT: decode_vector_document,
}


class Image:
    """An RGBA raster image"""

    def __init__(self, pil_image: PILImage.Image):
        if pil_image.mode != 'RGBA':
            pil_image = pil_image.convert('RGBA')
        self._pil_image = pil_image

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"

    @property
    def width(self) -> int:
        return self._pil_image.width

    @property
    def height(self) -> int:
        return self._pil_image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._pil_image.size

    def to_pil(self) -> PILImage.Image:
        """Return a copy of the underlying Pillow image"""
        return self._pil_image.copy()

    @classmethod
    def open(cls, path: Union[str, Path]) -> 'Image':
        """Decode the file at `path` using the strategy for its file type"""
        path = Path(path)
        file_type = FileType.from_path(path) or types.IMAGE
        if file_type != types.IMAGE and file_type not in types.valid_types():
            raise UnsupportedFormatError(file_type.identifier)

        strategy = DecodeStrategy.for_file_type(file_type)
        logger.debug(f"Using {strategy.value} decoder for {path}")
        return cls(DECODERS[strategy](path, file_type))

    def validate_square(self) -> None:
        if self.width != self.height:
            raise NonSquareDimensionsError(self.width, self.height)

    def resized(self, size: Union[int, float]) -> 'Image':
        """Return a copy of this image drawn into a new `size` x `size` canvas"""
        canvas = PILImage.new('RGBA', (int(size), int(size)), (0, 0, 0, 0))
        # Use the canvas's own dimensions so nothing is clipped
        width, height = canvas.size
        drawn = self._pil_image.resize((width, height), PILImage.Resampling.LANCZOS)
        canvas.paste(drawn, (0, 0))
        return Image(canvas)

    def png_data(self) -> bytes:
        buffer = io.BytesIO()
        self._pil_image.save(buffer, format='PNG')
        return buffer.getvalue()

    def write(self, path: Union[str, Path], file_type: FileType = types.PNG) -> None:
        """Write the image to a new file; an existing file is never replaced"""
        path = Path(path)
        pillow_format = file_type.pillow_format or 'PNG'
        try:
            with open(path, 'xb') as f:
                self._pil_image.save(f, format=pillow_format)
        except FileExistsError as e:
            raise DestinationExistsError(str(path)) from e
        except OSError as e:
            raise WriteIOError(str(path), e.strerror or str(e)) from e


class ImageFile:
    """An input file whose image is decoded on first access and kept"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def file_type(self) -> FileType:
        return FileType.from_path(self.path) or types.IMAGE

    @cached_property
    def image(self) -> Image:
        return Image.open(self.path)
