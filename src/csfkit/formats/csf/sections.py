"""
CSF sections - header, label and value records.

Format (little-endian throughout):
- Header: " FSC" | version | numLabels | numStrings | unused | language
- Label:  " LBL" | pairCount | nameLength | name
- Value:  " RTS" | charCount | text (charCount * 2 bytes, complemented UTF-16LE)
          "WRTS" | charCount | text | extraLength | extra

The label name and the extra string are raw bytes. Only the value text
goes through the complement transform.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...errors import CsfFormatError, CsfTruncatedError
from ...utils.binary import IoBuffer, IoWriter
from .encoding import encode_value, decode_value

logger = logging.getLogger(__name__)


CSF_FILE_IDENTIFIER = " FSC"
LABEL_IDENTIFIER = " LBL"
VALUE_IDENTIFIER = " RTS"
VALUE_WITH_EXTRA_IDENTIFIER = "WRTS"

UINT32_MAX = 0xFFFFFFFF

# Language names according to ModEnc. Index 10 is the fallback.
LANGUAGES = [
    "US (English)", "UK (English)", "German", "French", "Spanish",
    "Italian", "Japanese", "Jabberwockie", "Korean", "Chinese", "Unknown",
]


def language_name(code: int) -> str:
    """Resolve a header language code, anything above 9 is "Unknown"."""
    if code < 0 or code > 9:
        return LANGUAGES[10]
    return LANGUAGES[code]


def check_identifier(io: IoBuffer, *ids: str, section: str = "section",
                     magic: Optional[bytes] = None) -> bytes:
    """
    Make sure the next 4-byte identifier is one of ids.

    If magic is given it has already been consumed from io.
    """
    if magic is None:
        offset = io.position
        magic = io.read_bytes(4)
    else:
        offset = io.position - len(magic)
    for ident in ids:
        if magic == ident.encode('ascii'):
            return magic
    raise CsfFormatError(ids, magic, offset, section)


@dataclass
class CsfHeader:
    """The 24-byte file header."""
    version: int = 3
    num_labels: int = 0
    num_strings: int = 0
    unused: int = 0
    language: int = 0

    def __post_init__(self):
        for name in ("version", "num_labels", "num_strings", "unused", "language"):
            value = getattr(self, name)
            if not 0 <= value <= UINT32_MAX:
                raise ValueError(f"header {name} must be in 0~{UINT32_MAX}, got {value}")

    @classmethod
    def read(cls, io: IoBuffer) -> 'CsfHeader':
        check_identifier(io, CSF_FILE_IDENTIFIER, section="CSF file")
        header = cls(
            version=io.read_uint32(),
            num_labels=io.read_uint32(),
            num_strings=io.read_uint32(),
            unused=io.read_uint32(),
            language=io.read_uint32(),
        )
        logger.debug(f"CSF header: version={header.version}, labels={header.num_labels}, "
                     f"strings={header.num_strings}, language={header.language}")
        return header

    def write(self, io: IoWriter):
        io.write_bytes(CSF_FILE_IDENTIFIER.encode('ascii'))
        io.write_uint32(self.version)
        io.write_uint32(self.num_labels)
        io.write_uint32(self.num_strings)
        io.write_uint32(self.unused)
        io.write_uint32(self.language)


@dataclass
class Label:
    """
    One label section.

    Attributes:
        offset: Position of the record in the source file (diagnostic only)
        pair_count: Declared string pair count; always written as 1
        name: Raw label name bytes
    """
    offset: int = 0
    pair_count: int = 1
    name: bytes = b""

    @property
    def name_string(self) -> str:
        return self.name.decode('utf-8', errors='replace')

    def write(self, name: str):
        """Replace the label name."""
        self.name = name.encode('utf-8')

    @classmethod
    def read(cls, io: IoBuffer, magic: Optional[bytes] = None) -> 'Label':
        offset = io.position - (len(magic) if magic else 0)
        check_identifier(io, LABEL_IDENTIFIER, section="label", magic=magic)
        pairs = io.read_uint32()
        length = io.read_uint32()
        name = io.read_bytes(length)
        if pairs != 1:
            logger.debug(f"Label at {offset:#x} declares {pairs} string pairs")
        return cls(offset=offset, pair_count=pairs, name=name)

    def to_bytes(self) -> bytes:
        io = IoWriter()
        io.write_bytes(LABEL_IDENTIFIER.encode('ascii'))
        io.write_uint32(1)
        io.write_uint32(len(self.name))
        io.write_bytes(self.name)
        return io.getvalue()


@dataclass
class Value:
    """
    One value section.

    `data` holds the text exactly as stored on disk (complemented UTF-16LE);
    use `text` and `write()` to work with plain strings.
    """
    offset: int = 0
    has_extra: bool = False
    data: bytes = b""
    extra: bytes = b""

    @property
    def text(self) -> str:
        return decode_value(self.data)

    @property
    def extra_string(self) -> str:
        if not self.has_extra:
            return ""
        return self.extra.decode('utf-8', errors='replace')

    def write(self, text: str):
        """Replace the value text."""
        self.data = encode_value(text)

    def write_extra(self, extra: str):
        self.has_extra = True
        self.extra = extra.encode('utf-8')

    def clear_extra(self):
        self.has_extra = False
        self.extra = b""

    @classmethod
    def read(cls, io: IoBuffer) -> 'Value':
        offset = io.position
        magic = check_identifier(io, VALUE_IDENTIFIER, VALUE_WITH_EXTRA_IDENTIFIER, section="value")
        has_extra = magic == VALUE_WITH_EXTRA_IDENTIFIER.encode('ascii')

        length = io.read_uint32()
        data = io.read_bytes(length * 2)

        extra = b""
        if has_extra:
            extra_length = io.read_uint32()
            extra = io.read_bytes(extra_length)

        return cls(offset=offset, has_extra=has_extra, data=data, extra=extra)

    def to_bytes(self) -> bytes:
        io = IoWriter()
        if self.has_extra:
            io.write_bytes(VALUE_WITH_EXTRA_IDENTIFIER.encode('ascii'))
        else:
            io.write_bytes(VALUE_IDENTIFIER.encode('ascii'))
        io.write_uint32(len(self.data) // 2)
        io.write_bytes(self.data)
        if self.has_extra:
            io.write_uint32(len(self.extra))
            io.write_bytes(self.extra)
        return io.getvalue()


@dataclass
class Entry:
    """A label and the value bound to it."""
    label: Label = field(default_factory=Label)
    value: Value = field(default_factory=Value)

    @classmethod
    def create(cls, label: str, value: str, extra: Optional[str] = None) -> 'Entry':
        """Build an entry from plain strings."""
        return cls.create_with_offsets(label, 0, value, 0, extra)

    @classmethod
    def create_with_offsets(cls, label: str, label_offset: int, value: str,
                            value_offset: int, extra: Optional[str] = None) -> 'Entry':
        lbl = Label(offset=label_offset, pair_count=1)
        lbl.write(label)
        val = Value(offset=value_offset)
        val.write(value)
        if extra is not None:
            val.write_extra(extra)
        return cls(label=lbl, value=val)

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.label.name_string.upper()

    @classmethod
    def read(cls, io: IoBuffer) -> Optional['Entry']:
        """
        Read the next label/value pair.

        Returns None on a clean end of stream at a record boundary.
        """
        offset = io.position
        magic = io.read_available(4)
        if not magic:
            return None
        if len(magic) < 4:
            raise CsfTruncatedError(offset, 4, len(magic))
        label = Label.read(io, magic)
        value = Value.read(io)
        return cls(label=label, value=value)

    def to_bytes(self) -> bytes:
        return self.label.to_bytes() + self.value.to_bytes()

    def __str__(self) -> str:
        s = f"{self.label.name_string} -> {self.value.text}"
        if self.value.has_extra:
            s += f" , {self.value.extra_string}"
        return s
