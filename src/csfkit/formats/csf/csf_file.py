"""
CSF File - open, create and atomically save CSF string tables.

A CsfFile is an EntryStore bound to a path. The file is only held open
while it is being parsed or saved.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from ...errors import CsfError, CsfLimitError
from ...utils.binary import IoBuffer, IoWriter, ByteOrder
from .sections import CsfHeader, Entry
from .store import EntryStore

logger = logging.getLogger(__name__)


# Safety bound against malformed or hostile input.
MAX_ENTRIES = 20000

# Prefix of the sibling file a save is written to before the rename.
TEMP_PREFIX = "$tmp_"

DEFAULT_VERSION = 3

PathLike = Union[str, os.PathLike]


class CsfFile(EntryStore):
    """
    A CSF string table on disk.

    Use CsfFile.open() to load an existing file, or CsfFile.new() to
    start an empty one. Nothing is written until save() is called.
    """

    def __init__(self, path: Optional[PathLike], header: Optional[CsfHeader] = None):
        super().__init__(header)
        self.path = Path(path) if path else None

    @classmethod
    def open(cls, path: PathLike) -> 'CsfFile':
        """
        Open and parse a CSF file.

        Raises:
            CsfFormatError: a section has the wrong identifier
            CsfTruncatedError: the file ends inside a record
            CsfLimitError: more than MAX_ENTRIES entries
            OSError: the file cannot be read
        """
        with open(path, 'rb') as f:
            data = f.read()
        csf = cls.from_bytes(data, path)
        logger.info(f"Loaded {path}: {len(csf)} labels, language {csf.language_name()}")
        return csf

    @classmethod
    def try_open(cls, path: PathLike) -> Tuple[Optional['CsfFile'], str]:
        """Open a CSF file without raising. Returns (csf, reason)."""
        try:
            return cls.open(path), ""
        except (CsfError, OSError) as e:
            logger.debug(f"Failed to open {path}: {e}")
            return None, f"{path}: {e}"

    @classmethod
    def new(cls, path: PathLike, version: int = DEFAULT_VERSION, unused: int = 0,
            language: int = 0) -> 'CsfFile':
        """Create an empty table. Call save() to write it."""
        header = CsfHeader(version=version, num_labels=0, num_strings=0,
                           unused=unused, language=language)
        return cls(path, header)

    @classmethod
    def from_bytes(cls, data: bytes, path: Optional[PathLike] = None) -> 'CsfFile':
        """Parse a complete CSF image. Without a path, save() needs one."""
        io = IoBuffer.from_bytes(data, ByteOrder.LITTLE_ENDIAN)
        csf = cls(path, CsfHeader.read(io))
        csf._read_entries(io)
        return csf

    def _read_entries(self, io: IoBuffer):
        count = 0
        while True:
            entry = Entry.read(io)
            if entry is None:
                break
            self.ingest(entry)
            count += 1
            if count > MAX_ENTRIES:
                raise CsfLimitError(MAX_ENTRIES, entry.label.offset)
        logger.debug(f"Read {count} entries, {len(self.entries)} unique labels, "
                     f"{len(self.categories)} categories")

    def to_bytes(self) -> bytes:
        """Serialize the header and every entry in order."""
        io = IoWriter(byte_order=ByteOrder.LITTLE_ENDIAN)
        self.header.write(io)
        for key in self.order:
            io.write_bytes(self.entries[key].to_bytes())
        return io.getvalue()

    @property
    def temp_path(self) -> Path:
        if self.path is None:
            raise ValueError("table has no path, pass one to save()")
        return self.path.with_name(TEMP_PREFIX + self.path.name)

    def save(self, path: Optional[PathLike] = None):
        """
        Atomically write the table to disk.

        The data goes to a sibling "$tmp_<name>" file which is synced and
        then renamed over the target. If writing fails the temporary file
        is removed and the target is untouched. If only the rename fails
        the temporary file is left behind.

        Args:
            path: Save to a different file and rebind this table to it
        """
        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise ValueError("table has no path, pass one to save()")

        data = self.to_bytes()
        tmp = self.temp_path
        try:
            with open(tmp, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
        except OSError:
            if tmp.exists():
                tmp.unlink()
            raise

        try:
            os.replace(tmp, self.path)
        except OSError:
            logger.warning(f"Could not replace {self.path}, leftover temporary file {tmp}")
            raise

        logger.info(f"Saved {self.path}: {len(self)} labels, {len(data):,} bytes")
