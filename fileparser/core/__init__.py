from .config import settings, Settings
from .errors import (
    FileParserError,
    DocumentInputError,
    NoReadableDocumentsError,
    FileAccessError,
    DocumentParseError,
)

__all__ = [
    "settings",
    "Settings",
    "FileParserError",
    "DocumentInputError",
    "NoReadableDocumentsError",
    "FileAccessError",
    "DocumentParseError",
]
