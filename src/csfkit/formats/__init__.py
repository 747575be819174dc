"""csfkit formats package - file format parsers."""
from .csf import CsfFile, EntryStore, Entry, Label, Value, CsfHeader

__all__ = [
    # CSF
    'CsfFile', 'EntryStore', 'Entry', 'Label', 'Value', 'CsfHeader',
]
