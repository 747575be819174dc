"""CSF string table format package."""
from .encoding import complement_bytes, encode_utf16, decode_utf16, encode_value, decode_value
from .sections import (
    CsfHeader, Label, Value, Entry, LANGUAGES, language_name,
    CSF_FILE_IDENTIFIER, LABEL_IDENTIFIER, VALUE_IDENTIFIER, VALUE_WITH_EXTRA_IDENTIFIER,
)
from .store import EntryStore, merge, category_name
from .csf_file import CsfFile, MAX_ENTRIES, TEMP_PREFIX

__all__ = [
    # Codec
    'complement_bytes', 'encode_utf16', 'decode_utf16', 'encode_value', 'decode_value',
    # Sections
    'CsfHeader', 'Label', 'Value', 'Entry', 'LANGUAGES', 'language_name',
    'CSF_FILE_IDENTIFIER', 'LABEL_IDENTIFIER', 'VALUE_IDENTIFIER', 'VALUE_WITH_EXTRA_IDENTIFIER',
    # Store
    'EntryStore', 'merge', 'category_name',
    'CsfFile', 'MAX_ENTRIES', 'TEMP_PREFIX',
]
