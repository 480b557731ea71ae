"""
File Verification

Checks paths against an ordered list of conditions before any work is done,
raising a specific error for the first condition that fails.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .errors import (
    AlreadyExistsError,
    DoesNotExistError,
    IsDirectoryError,
    IsNotDirectoryError,
    WrongExtensionError,
)
from .file_type import FileType


class CheckKind(Enum):
    FILE_EXISTS = 'file-exists'
    IS_DIRECTORY = 'is-directory'
    IS_FILE_TYPE = 'is-file-type'


@dataclass(frozen=True)
class PathCheck:
    """
    A single condition to verify. `~check` verifies the opposite condition,
    so `~PathCheck.file_exists()` requires that nothing exists at the path.
    """
    kind: CheckKind
    inverted: bool = False
    file_type: Optional[FileType] = None

    def __invert__(self) -> 'PathCheck':
        return replace(self, inverted=not self.inverted)

    @classmethod
    def file_exists(cls) -> 'PathCheck':
        return cls(CheckKind.FILE_EXISTS)

    @classmethod
    def is_directory(cls) -> 'PathCheck':
        return cls(CheckKind.IS_DIRECTORY)

    @classmethod
    def is_file_type(cls, file_type: FileType) -> 'PathCheck':
        return cls(CheckKind.IS_FILE_TYPE, file_type=file_type)


class FileVerifier:
    """Verifies paths using an ordered list of checks"""

    def __init__(self, checks: List[PathCheck]):
        self.checks = list(checks)

    def verify(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        display = str(path)

        for check in self.checks:
            if check.kind is CheckKind.FILE_EXISTS:
                exists = path.exists()
                if check.inverted and exists:
                    raise AlreadyExistsError(display)
                if not check.inverted and not exists:
                    raise DoesNotExistError(display)

            elif check.kind is CheckKind.IS_DIRECTORY:
                is_dir = path.is_dir()
                if check.inverted and is_dir:
                    raise IsDirectoryError(display)
                if not check.inverted and not is_dir:
                    raise IsNotDirectoryError(display)

            elif check.kind is CheckKind.IS_FILE_TYPE:
                matches = FileType.from_path(path) == check.file_type
                extension = path.suffix.lstrip('.')
                if check.inverted and matches:
                    raise WrongExtensionError(display, extension, None)
                if not check.inverted and not matches:
                    raise WrongExtensionError(display, extension, check.file_type)

        return path
