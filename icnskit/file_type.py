"""
File Type Module

Maps path extensions to reverse-DNS type identifiers (such as `public.png` or
`com.adobe.pdf`), and answers which types icnskit can read.

The registry combines a table of declared types with every format Pillow can
open that the table does not already cover.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from PIL import Image as PILImage


@dataclass(frozen=True)
class TypeDeclaration:
    """A registered type with its filename extensions and parent types"""
    identifier: str
    extensions: Tuple[str, ...] = ()
    conforms_to: Tuple[str, ...] = ()
    pillow_format: Optional[str] = None


_IMAGE_PARENTS = ('public.image',)

DECLARED_TYPES: Tuple[TypeDeclaration, ...] = (
    TypeDeclaration('public.item'),
    TypeDeclaration('public.content'),
    TypeDeclaration('public.data', conforms_to=('public.item',)),
    TypeDeclaration('public.directory', conforms_to=('public.item',)),
    TypeDeclaration('public.image', conforms_to=('public.data', 'public.content')),
    TypeDeclaration('public.text', conforms_to=('public.data', 'public.content')),
    TypeDeclaration('public.plain-text', ('txt', 'text'), ('public.text',)),
    TypeDeclaration('public.xml', ('xml',), ('public.text',)),
    TypeDeclaration('public.png', ('png',), _IMAGE_PARENTS, 'PNG'),
    TypeDeclaration('public.jpeg', ('jpeg', 'jpg', 'jpe', 'jfif'), _IMAGE_PARENTS, 'JPEG'),
    TypeDeclaration('public.jpeg-2000', ('jp2', 'j2k', 'jpf', 'jpx'), _IMAGE_PARENTS, 'JPEG2000'),
    TypeDeclaration('public.tiff', ('tiff', 'tif'), _IMAGE_PARENTS, 'TIFF'),
    TypeDeclaration('com.compuserve.gif', ('gif',), _IMAGE_PARENTS, 'GIF'),
    TypeDeclaration('com.microsoft.bmp', ('bmp', 'dib'), _IMAGE_PARENTS, 'BMP'),
    TypeDeclaration('com.microsoft.ico', ('ico',), _IMAGE_PARENTS, 'ICO'),
    TypeDeclaration('com.apple.icns', ('icns',), _IMAGE_PARENTS, 'ICNS'),
    TypeDeclaration('org.webmproject.webp', ('webp',), _IMAGE_PARENTS, 'WEBP'),
    TypeDeclaration('com.truevision.tga-image', ('tga',), _IMAGE_PARENTS, 'TGA'),
    TypeDeclaration('com.adobe.photoshop-image', ('psd',), _IMAGE_PARENTS, 'PSD'),
    TypeDeclaration('com.adobe.pdf', ('pdf',), ('public.data', 'public.content')),
    TypeDeclaration('public.svg-image', ('svg',), ('public.image', 'public.xml')),
    TypeDeclaration('com.apple.iconset', ('iconset',), ('public.directory',)),
)


class TypeRegistry:
    """Lookup tables built from the declared types and Pillow's plugin registry"""

    _declarations: Optional[Dict[str, TypeDeclaration]] = None
    _extensions: Optional[Dict[str, str]] = None

    @classmethod
    def _load(cls) -> None:
        if cls._declarations is not None:
            return

        declarations = {decl.identifier: decl for decl in DECLARED_TYPES}
        extensions: Dict[str, str] = {}
        for decl in DECLARED_TYPES:
            for ext in decl.extensions:
                extensions.setdefault(ext, decl.identifier)

        declared_formats = {
            decl.pillow_format: decl.identifier
            for decl in DECLARED_TYPES if decl.pillow_format
        }

        # Formats Pillow knows about that have no declared type get a generated one
        generated: Dict[str, List[str]] = {}
        for ext, pillow_format in PILImage.registered_extensions().items():
            ext = ext.lstrip('.').lower()
            if ext in extensions:
                continue
            if pillow_format in declared_formats:
                extensions[ext] = declared_formats[pillow_format]
                continue
            generated.setdefault(pillow_format, []).append(ext)

        for pillow_format, format_extensions in generated.items():
            identifier = f"org.python-pillow.{pillow_format.lower()}"
            declarations[identifier] = TypeDeclaration(
                identifier, tuple(format_extensions), _IMAGE_PARENTS, pillow_format
            )
            for ext in format_extensions:
                extensions.setdefault(ext, identifier)

        cls._declarations = declarations
        cls._extensions = extensions

    @classmethod
    def declaration(cls, identifier: str) -> Optional[TypeDeclaration]:
        cls._load()
        return cls._declarations.get(identifier)

    @classmethod
    def identifier_for_extension(cls, extension: str) -> Optional[str]:
        cls._load()
        return cls._extensions.get(extension)

    @classmethod
    def all_declarations(cls) -> List[TypeDeclaration]:
        cls._load()
        return list(cls._declarations.values())


@dataclass(frozen=True, order=True)
class FileType:
    """A file type identified by a reverse-DNS string such as `public.jpeg`"""
    identifier: str

    def __str__(self) -> str:
        return self.identifier

    @property
    def declaration(self) -> Optional[TypeDeclaration]:
        return TypeRegistry.declaration(self.identifier)

    @property
    def preferred_filename_extension(self) -> Optional[str]:
        decl = self.declaration
        if decl and decl.extensions:
            return decl.extensions[0]
        return None

    @property
    def pillow_format(self) -> Optional[str]:
        decl = self.declaration
        return decl.pillow_format if decl else None

    def supertypes(self) -> FrozenSet[str]:
        """Identifiers of every type this one conforms to, itself included"""
        seen = set()
        pending = [self.identifier]
        while pending:
            identifier = pending.pop()
            if identifier in seen:
                continue
            seen.add(identifier)
            decl = TypeRegistry.declaration(identifier)
            if decl:
                pending.extend(decl.conforms_to)
        return frozenset(seen)

    def conforms_to(self, other: 'FileType') -> bool:
        return other.identifier in self.supertypes()

    @classmethod
    def from_extension(cls, extension: str,
                       conforming_to: Optional['FileType'] = None) -> Optional['FileType']:
        """
        Create a file type from a filename extension

        Returns None if the extension is unknown, or if the type it maps to does
        not conform to `conforming_to` (when given).
        """
        extension = extension.lstrip('.').lower()
        if not extension:
            return None

        identifier = TypeRegistry.identifier_for_extension(extension)
        if identifier is None:
            return None

        file_type = cls(identifier)
        if conforming_to is not None and not file_type.conforms_to(conforming_to):
            return None
        return file_type

    @classmethod
    def from_path(cls, path: Union[str, Path],
                  conforming_to: Optional['FileType'] = None) -> Optional['FileType']:
        """Create a file type from the extension of the given path"""
        return cls.from_extension(Path(path).suffix, conforming_to)


# Constants

IMAGE = FileType('public.image')
BMP = FileType('com.microsoft.bmp')
GIF = FileType('com.compuserve.gif')
ICNS = FileType('com.apple.icns')
ICONSET = FileType('com.apple.iconset')
ICO = FileType('com.microsoft.ico')
JPEG = FileType('public.jpeg')
PDF = FileType('com.adobe.pdf')
PNG = FileType('public.png')
SVG = FileType('public.svg-image')
TIFF = FileType('public.tiff')
WEBP = FileType('org.webmproject.webp')

_valid_types: Optional[FrozenSet[FileType]] = None


def valid_types() -> FrozenSet[FileType]:
    """Types icnskit can decode: PDF, SVG and everything Pillow can open"""
    global _valid_types
    if _valid_types is None:
        PILImage.init()
        readable = {
            FileType(decl.identifier)
            for decl in TypeRegistry.all_declarations()
            if decl.pillow_format and decl.pillow_format in PILImage.OPEN
        }
        _valid_types = frozenset({PDF, SVG} | readable)
    return _valid_types
