"""csfkit - read, edit and rewrite CSF string table files."""
from .errors import (
    CsfError, CsfFormatError, CsfTruncatedError, CsfLimitError, CsfEncodingError,
)
from .formats.csf import CsfFile, EntryStore, Entry, Label, Value, CsfHeader, merge

__version__ = "1.0.0"

__all__ = [
    'CsfError', 'CsfFormatError', 'CsfTruncatedError', 'CsfLimitError', 'CsfEncodingError',
    'CsfFile', 'EntryStore', 'Entry', 'Label', 'Value', 'CsfHeader', 'merge',
]
