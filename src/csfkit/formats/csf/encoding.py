"""
Value text codec.

CSF stores value text as UTF-16LE with every byte bitwise complemented.
The transform is its own inverse, so the same function both obfuscates
and recovers the bytes.
"""

from ...errors import CsfEncodingError


# Translation table mapping each byte to its complement.
_COMPLEMENT = bytes(0xFF - i for i in range(256))


def complement_bytes(data: bytes) -> bytes:
    """Return a new buffer with every byte of data inverted."""
    return bytes(data).translate(_COMPLEMENT)


def encode_utf16(text: str) -> bytes:
    """Encode text as UTF-16 little-endian code units (no BOM)."""
    return text.encode('utf-16-le', errors='surrogatepass')


def decode_utf16(data: bytes) -> str:
    """
    Decode UTF-16 little-endian bytes.

    Raises:
        CsfEncodingError: if the length is not a multiple of 2
    """
    if not data:
        return ""
    if len(data) % 2 != 0:
        raise CsfEncodingError(
            f"not valid UTF-16 bytes, length needs to be multiple of 2, got length: {len(data)}"
        )
    return bytes(data).decode('utf-16-le', errors='surrogatepass')


def encode_value(text: str) -> bytes:
    """Text to on-disk value bytes."""
    return complement_bytes(encode_utf16(text))


def decode_value(data: bytes) -> str:
    """On-disk value bytes to text."""
    return decode_utf16(complement_bytes(data))
