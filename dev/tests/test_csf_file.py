"""
csfkit - CSF File Tests

Opening, creating and atomically saving CSF files on disk.

Can be run standalone: python test_csf_file.py
Or via main runner: python tests.py
"""

import sys
import tempfile
from pathlib import Path
from unittest import mock

from tracker import results, run_tests, csf_bytes, header_bytes

from csfkit.errors import CsfFormatError
from csfkit.formats.csf import CsfFile, Entry, TEMP_PREFIX


SAMPLE = [
    ("GUI:Ok", "OK"),
    ("GUI:Cancel", "Cancel"),
    ("NAME:Tank", "Tank", "tank.wav"),
]


def test_open_and_save_round_trip():
    """A file opened and saved without changes is byte identical."""
    with results.section("OPEN / SAVE ROUND TRIP"):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "ra2.csf"
            data = csf_bytes(SAMPLE, version=3, language=1)
            path.write_bytes(data)

            csf = CsfFile.open(path)
            results.record("Path kept", csf.path == path, f"{csf.path}")
            results.record("Language", csf.language_name() == "UK (English)", csf.language_name())
            results.record("Labels", csf.names() == ["GUI:Ok", "GUI:Cancel", "NAME:Tank"], f"{csf.names()}")

            csf.save()
            results.record("Saved bytes identical", path.read_bytes() == data, "")
            results.record("No temp file left", not (Path(tmpdir) / (TEMP_PREFIX + "ra2.csf")).exists(), "")

            csf.write(Entry.create("GUI:Apply", "Apply"))
            csf.remove("gui:cancel")
            csf.save()
            reopened = CsfFile.open(path)
            results.record("Edits persisted", reopened.names() == ["GUI:Ok", "NAME:Tank", "GUI:Apply"],
                           f"{reopened.names()}")
            results.record("Header counts rewritten", reopened.num_labels == 3 and reopened.num_strings == 3, "")
            results.record("Extra persisted", reopened.lookup("name:tank").value.extra_string == "tank.wav", "")


def test_new_table():
    """New tables start empty and only exist on disk after save()."""
    with results.section("NEW TABLE"):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "new.csf"
            csf = CsfFile.new(path, version=3, unused=0, language=15)
            results.record("Nothing written yet", not path.exists(), "")
            results.record("Empty", len(csf) == 0 and csf.order == [] and csf.categories == {}, "")
            results.record("Unknown language", csf.language_name() == "Unknown", csf.language_name())

            csf.save()
            results.record("Empty file is header only", path.read_bytes() == header_bytes(3, 0, 0, 0, 15), "")

            csf.write(Entry.create("TXT:Greeting", "Hello!"))
            csf.save()
            reopened = CsfFile.open(path)
            results.record("Written entry reads back", reopened.lookup("TXT:Greeting").value.text == "Hello!", "")
            results.record("Category map", reopened.categories == {"TXT": ["TXT:Greeting"]},
                           f"{reopened.categories}")


def test_save_as():
    """save(path) writes elsewhere and rebinds the table."""
    with results.section("SAVE AS"):
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "a.csf"
            dst = Path(tmpdir) / "b.csf"
            src.write_bytes(csf_bytes(SAMPLE))
            csf = CsfFile.open(src)
            csf.save(dst)
            results.record("Copy written", dst.read_bytes() == src.read_bytes(), "")
            results.record("Rebound to new path", csf.path == dst, f"{csf.path}")


def test_save_needs_a_path():
    """Tables parsed from memory have no path until one is given."""
    with results.section("SAVE WITHOUT PATH"):
        csf = CsfFile.from_bytes(csf_bytes(SAMPLE))
        results.record("No path bound", csf.path is None, f"{csf.path}")
        try:
            csf.save()
            results.record("save() without a path rejected", False, "no error raised")
        except ValueError as e:
            results.record("save() without a path rejected", "no path" in str(e), str(e))

        with tempfile.TemporaryDirectory() as tmpdir:
            out = Path(tmpdir) / "memory.csf"
            csf.save(out)
            results.record("save(path) writes it", out.read_bytes() == csf_bytes(SAMPLE), "")
            results.record("Path bound after save", csf.path == out, f"{csf.path}")


def test_header_range():
    """Header fields must fit in an unsigned 32-bit word."""
    with results.section("HEADER RANGE"):
        for field, value in [("language", -1), ("language", 2 ** 32), ("version", -3), ("unused", 2 ** 40)]:
            try:
                CsfFile.new("x.csf", **{field: value})
                results.record(f"{field}={value} rejected", False, "no error raised")
            except ValueError as e:
                results.record(f"{field}={value} rejected", field in str(e), str(e))

        csf = CsfFile.new("x.csf", language=0xFFFFFFFF)
        results.record("Largest value accepted", csf.language == 0xFFFFFFFF, "")
        results.record("Out of range language is Unknown", csf.language_name() == "Unknown", "")


def test_failed_write_leaves_original():
    """A failure while writing keeps the original and removes the temp file."""
    with results.section("FAILED WRITE"):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "keep.csf"
            data = csf_bytes(SAMPLE)
            path.write_bytes(data)

            csf = CsfFile.open(path)
            csf.write(Entry.create("GUI:New", "new"))
            with mock.patch("os.fsync", side_effect=OSError("disk full")):
                try:
                    csf.save()
                    results.record("Error propagated", False, "no error raised")
                except OSError as e:
                    results.record("Error propagated", "disk full" in str(e), str(e))

            results.record("Original unchanged", path.read_bytes() == data, "")
            results.record("Temp file removed", not csf.temp_path.exists(), f"{csf.temp_path}")


def test_failed_rename_leaves_temp():
    """A failed rename keeps the original and leaves the synced temp file."""
    with results.section("FAILED RENAME"):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "keep.csf"
            data = csf_bytes(SAMPLE)
            path.write_bytes(data)

            csf = CsfFile.open(path)
            csf.remove("GUI:Ok")
            with mock.patch("os.replace", side_effect=OSError("rename failed")):
                try:
                    csf.save()
                    results.record("Error propagated", False, "no error raised")
                except OSError:
                    results.record("Error propagated", True)

            results.record("Original unchanged", path.read_bytes() == data, "")
            results.record("Temp file named $tmp_<name>", csf.temp_path.name == "$tmp_keep.csf", csf.temp_path.name)
            results.record("Temp file left behind", csf.temp_path.exists(), "")
            results.record("Temp file holds the new table",
                           csf.temp_path.exists() and csf.temp_path.read_bytes() == csf.to_bytes(), "")


def test_open_errors():
    """open() raises, try_open() reports."""
    with results.section("OPEN ERRORS"):
        with tempfile.TemporaryDirectory() as tmpdir:
            bad = Path(tmpdir) / "bad.csf"
            bad.write_bytes(b"NOPE" + bytes(20))
            try:
                CsfFile.open(bad)
                results.record("open() raises on bad magic", False, "no error raised")
            except CsfFormatError:
                results.record("open() raises on bad magic", True)

            csf, reason = CsfFile.try_open(bad)
            results.record("try_open() returns None", csf is None, "")
            results.record("try_open() gives a reason", "bad.csf" in reason and "FSC" in reason, reason)

            missing = Path(tmpdir) / "missing.csf"
            csf, reason = CsfFile.try_open(missing)
            results.record("Missing file reported", csf is None and reason != "", reason)
            try:
                CsfFile.open(missing)
                results.record("open() raises OSError", False, "no error raised")
            except OSError:
                results.record("open() raises OSError", True)

            good = Path(tmpdir) / "good.csf"
            good.write_bytes(csf_bytes(SAMPLE))
            csf, reason = CsfFile.try_open(good)
            results.record("try_open() on a good file", csf is not None and reason == "", reason)


TESTS = [
    test_open_and_save_round_trip, test_new_table, test_save_as, test_save_needs_a_path, test_header_range,
    test_failed_write_leaves_original, test_failed_rename_leaves_temp, test_open_errors,
]


if __name__ == "__main__":
    run_tests(TESTS)
    sys.exit(0 if results.summary("CSF FILE TEST SUMMARY") else 1)
