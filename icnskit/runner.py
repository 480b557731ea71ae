"""
Runner Module

Entry points that tie the pipeline together:
- Create: verify paths, decode the input, write an iconset or icns file
- valid_formats: the input formats icnskit accepts
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from . import file_type as types
from .file_type import FileType
from .file_verifier import FileVerifier, PathCheck
from .iconset import Iconset, IconsetWriter
from .iconutil import IconUtil
from .image import ImageFile
from .logger import get_logger

logger = get_logger(__name__)


class OutputType(Enum):
    """The kind of output to produce"""
    ICNS = 'icns'
    ICONSET = 'iconset'
    # Decide from the output path extension
    INFER = 'infer'


def _with_extension(path: Path, file_type: FileType) -> Path:
    """Replace the extension of `path` with the preferred one for `file_type`"""
    extension = file_type.preferred_filename_extension
    if not extension:
        return path
    return path.with_suffix(f".{extension}")


class Create:
    """Creates an icns file or iconset directory from an input image"""

    def __init__(self, input: Union[str, Path], output: Optional[Union[str, Path]] = None,
                 output_type: OutputType = OutputType.INFER,
                 iconutil: Optional[IconUtil] = None):
        if output_type is OutputType.INFER:
            is_iconset = output is not None and FileType.from_path(output) == types.ICONSET
        else:
            is_iconset = output_type is OutputType.ICONSET

        if is_iconset:
            self.file_type = types.ICONSET
            self.action_message = "Creating iconset..."
            self.success_message = "Iconset successfully created."
            self.writer = IconsetWriter.DIRECT
        else:
            self.file_type = types.ICNS
            self.action_message = "Creating icon..."
            self.success_message = "Icon successfully created."
            self.writer = IconsetWriter.ICONUTIL

        self.input_path = Path(input)
        if output is None:
            self.output_path = _with_extension(self.input_path, self.file_type)
        else:
            output_path = Path(output)
            if not is_iconset and output_path.is_dir():
                output_path = _with_extension(output_path / self.input_path.name, self.file_type)
            self.output_path = output_path

        self.iconutil = iconutil

    def validate(self) -> None:
        """Verify the input and output paths before anything is read or written"""
        input_verifier = FileVerifier([
            PathCheck.file_exists(),
            ~PathCheck.is_directory(),
        ])
        output_verifier = FileVerifier([
            ~PathCheck.file_exists(),
            ~PathCheck.is_directory(),
            PathCheck.is_file_type(self.file_type),
        ])
        input_verifier.verify(self.input_path)
        output_verifier.verify(self.output_path)

    def run(self) -> Path:
        logger.info(self.action_message)

        image_file = ImageFile(self.input_path)
        iconset = Iconset(image_file.image)
        iconset.validate_dimensions()
        self.writer.write(iconset, self.output_path, self.iconutil)

        logger.info(self.success_message)
        logger.debug(f"Output written to {self.output_path}")
        return self.output_path


def run(input: Union[str, Path], output: Optional[Union[str, Path]] = None,
        kind: OutputType = OutputType.INFER,
        iconutil: Optional[IconUtil] = None) -> Path:
    """
    Create an icns file or iconset from `input`

    Args:
        input: Path to the source image
        output: Destination path, derived from `input` when omitted
        kind: Output type, or INFER to decide from the output extension
        iconutil: Packager to use for icns output

    Returns:
        Path of the created icns file or iconset directory
    """
    create = Create(input, output, kind, iconutil)
    create.validate()
    return create.run()


def valid_formats() -> List[Tuple[str, str]]:
    """
    All accepted input formats as (identifier, preferred extension) pairs,
    sorted by identifier. Types without a known extension show '--'.
    """
    return [
        (file_type.identifier, file_type.preferred_filename_extension or '--')
        for file_type in sorted(types.valid_types())
    ]
