"""
Error Types

Every failure raised by icnskit derives from IcnsKitError and carries a
user-facing message plus an optional hint describing how to fix it.
"""

from typing import Optional


class IcnsKitError(Exception):
    """Base class for icnskit errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def fix(self) -> Optional[str]:
        return None


# Path verification

class PathError(IcnsKitError):
    """A path failed verification"""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DoesNotExistError(PathError):
    def __init__(self, path: str):
        super().__init__(path, f"No such file or directory '{path}'")


class AlreadyExistsError(PathError):
    def __init__(self, path: str):
        super().__init__(path, f"'{path}' already exists")


class IsDirectoryError(PathError):
    def __init__(self, path: str):
        super().__init__(path, f"'{path}' is a directory")


class IsNotDirectoryError(PathError):
    def __init__(self, path: str):
        super().__init__(path, f"'{path}' is not a directory")


class WrongExtensionError(PathError):
    """The path extension does not match the expected file type"""

    def __init__(self, path: str, path_extension: str, expected=None):
        message = f"Invalid path extension '{path_extension}'"
        if expected is not None:
            preferred = expected.preferred_filename_extension
            if preferred:
                message += f" for expected output type '{preferred}'"
            else:
                message += " for unknown output type"
        super().__init__(path, message)
        self.path_extension = path_extension
        self.expected = expected

    @property
    def fix(self) -> Optional[str]:
        if self.expected is None:
            return None
        preferred = self.expected.preferred_filename_extension
        if preferred:
            return f"Use path extension '{preferred}'"
        return None


# Image decoding

class DecodeError(IcnsKitError):
    """The input could not be turned into a usable image"""

    def __init__(self, reason: str):
        super().__init__(f"Could not process image - {reason}")
        self.reason = reason


class UnsupportedFormatError(DecodeError):
    def __init__(self, identifier: Optional[str] = None):
        super().__init__("File is not a valid image format.")
        self.identifier = identifier

    @property
    def fix(self) -> Optional[str]:
        return "Run with '--list-formats' to see the valid input formats"


class DecodeFailureError(DecodeError):
    def __init__(self, detail: str = ""):
        super().__init__("Invalid image source." + (f" ({detail})" if detail else ""))
        self.detail = detail


class DocumentError(DecodeError):
    def __init__(self, detail: str = ""):
        super().__init__("Error with PDF document." + (f" ({detail})" if detail else ""))
        self.detail = detail


class RenderFailureError(DecodeError):
    def __init__(self, detail: str = ""):
        super().__init__("Error rendering image data." + (f" ({detail})" if detail else ""))
        self.detail = detail


class NonSquareDimensionsError(DecodeError):
    def __init__(self, width: int, height: int):
        super().__init__(f"Image width and height must be equal (got {width}x{height}).")
        self.width = width
        self.height = height


# Writing

class WriteError(IcnsKitError):
    """An output file could not be written"""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DestinationExistsError(WriteError):
    def __init__(self, path: str):
        super().__init__(path, f"'{path}' already exists")


class WriteIOError(WriteError):
    def __init__(self, path: str, reason: str):
        super().__init__(path, f"Could not write '{path}': {reason}")
        self.reason = reason


# Packaging

class PackagingError(IcnsKitError):
    """iconutil reported a problem while packaging an iconset"""

    def __init__(self, diagnostic_text: str):
        super().__init__(f"iconutil failed: {diagnostic_text}")
        self.diagnostic_text = diagnostic_text
