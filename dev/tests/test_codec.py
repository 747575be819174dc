"""
csfkit - Value Text Codec Tests

Checks the complement transform and the UTF-16 helpers used for value text.

Can be run standalone: python test_codec.py
Or via main runner: python tests.py
"""

import sys

from tracker import results, run_tests

from csfkit.errors import CsfEncodingError
from csfkit.formats.csf.encoding import (
    complement_bytes, encode_utf16, decode_utf16, encode_value, decode_value,
)


def test_complement_transform():
    """Complementing twice gives back the input."""
    with results.section("COMPLEMENT TRANSFORM"):
        every_byte = bytes(range(256))
        results.record(
            "Involution over all byte values",
            complement_bytes(complement_bytes(every_byte)) == every_byte,
            "complement(complement(b)) != b"
        )
        results.record(
            "0x00 <-> 0xFF",
            complement_bytes(b"\x00\xff\x0f") == b"\xff\x00\xf0",
            "wrong complement"
        )
        results.record("Empty input", complement_bytes(b"") == b"", "")

        source = bytearray(b"abc")
        out = complement_bytes(source)
        results.record("Input buffer not mutated", source == bytearray(b"abc"), f"got {source!r}")
        results.record("Returns bytes", isinstance(out, bytes), f"got {type(out)}")


def test_utf16_helpers():
    """UTF-16LE encode/decode including surrogate pairs."""
    with results.section("UTF-16 HELPERS"):
        results.record("ASCII encodes to 2 bytes per char", encode_utf16("Hi") == b"H\x00i\x00", "")
        results.record("No BOM", not encode_utf16("x").startswith(b"\xff\xfe"), "")

        emoji = "\U0001F600"
        results.record("Astral char uses a surrogate pair", len(encode_utf16(emoji)) == 4, "")
        results.record("Astral char decodes back", decode_utf16(encode_utf16(emoji)) == emoji, "")
        results.record("Empty decodes to empty", decode_utf16(b"") == "", "")

        try:
            decode_utf16(b"abc")
            results.record("Odd length rejected", False, "no error raised")
        except CsfEncodingError as e:
            results.record("Odd length rejected", "multiple of 2" in str(e), str(e))


def test_value_codec():
    """Value text goes through UTF-16LE and then the complement."""
    with results.section("VALUE CODEC"):
        wire = encode_value("A")
        results.record("'A' on the wire is ~0x41 ~0x00", wire == b"\xbe\xff", f"got {wire!r}")

        for text in ["Hello!", "", "Grüße", "日本語テキスト", "line\nbreak", "\U0001F680 launch"]:
            results.record(
                f"Round trip {text!r}",
                decode_value(encode_value(text)) == text,
                f"got {decode_value(encode_value(text))!r}"
            )

        try:
            decode_value(b"\x00")
            results.record("Odd value length rejected", False, "no error raised")
        except CsfEncodingError:
            results.record("Odd value length rejected", True)


TESTS = [test_complement_transform, test_utf16_helpers, test_value_codec]


if __name__ == "__main__":
    run_tests(TESTS)
    sys.exit(0 if results.summary("CODEC TEST SUMMARY") else 1)
