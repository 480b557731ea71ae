"""
icnskit

Creates 'icns' and 'iconset' files from standard images including:
- Input format detection and decoding (raster, PDF, SVG)
- Iconset generation at the fixed set of icon sizes
- Packaging through the iconutil command line utility
"""

from .env import ICNSKIT_VERSION

__version__ = ICNSKIT_VERSION
__all__ = [
    'run',
    'valid_formats',
    'OutputType',
    'IcnsKitError',
]

from .errors import IcnsKitError
from .runner import OutputType, run, valid_formats
