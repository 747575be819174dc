"""
File Operations - whole-file CSF actions.

Each action opens what it needs, applies its change and saves. Nothing is
written unless every earlier step succeeded, so a failed import or merge
leaves the destination file byte-for-byte unchanged.

Actions Implemented:
- ExportCSF (CSF -> xlsx)
- ImportCSF (xlsx -> existing CSF)
- MergeCSF (existing-only merge of one CSF into another)
- NewCSF (empty version 3 table)
- InspectCSF (header and category summary)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Any

from ...errors import CsfError
from ...formats.csf import CsfFile, merge
from .spreadsheet import export_xlsx, import_xlsx

logger = logging.getLogger(__name__)


DEFAULT_EXPORT_NAME = "output.xlsx"


# ═══════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class FileOpResult:
    """Result of a file operation."""
    success: bool
    message: str
    path: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[Exception] = None


def _failed(path, e: Exception) -> FileOpResult:
    logger.debug(f"Operation on {path} failed: {e!r}")
    return FileOpResult(False, f"{path}: {e}", str(path), error=e)


# ═══════════════════════════════════════════════════════════════════════════════
# ACTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def export_file(csf_path: str, xlsx_path: str = DEFAULT_EXPORT_NAME) -> FileOpResult:
    """Export every label of a CSF file into a spreadsheet."""
    try:
        csf = CsfFile.open(csf_path)
    except (CsfError, OSError) as e:
        return _failed(csf_path, e)

    try:
        rows = export_xlsx(csf, xlsx_path)
    except (CsfError, OSError) as e:
        return _failed(xlsx_path, e)
    return FileOpResult(True, f"Exported {rows} labels", xlsx_path, data=rows)


def import_file(xlsx_path: str, csf_path: str) -> FileOpResult:
    """
    Import spreadsheet rows into an existing CSF file.

    Existing labels are overwritten (casing kept), new labels appended.
    """
    try:
        csf = CsfFile.open(csf_path)
    except (CsfError, OSError) as e:
        return _failed(csf_path, e)

    try:
        rows = import_xlsx(xlsx_path, csf)
    except (CsfError, OSError) as e:
        return _failed(xlsx_path, e)

    try:
        csf.save()
    except OSError as e:
        return _failed(csf_path, e)
    return FileOpResult(True, f"Imported {rows} rows", csf_path, data=rows)


def merge_files(src_path: str, dst_path: str) -> FileOpResult:
    """Overwrite values in dst with those from src, for labels dst already has."""
    try:
        src = CsfFile.open(src_path)
    except (CsfError, OSError) as e:
        return _failed(src_path, e)
    try:
        dst = CsfFile.open(dst_path)
    except (CsfError, OSError) as e:
        return _failed(dst_path, e)

    updated = merge(src, into=dst)

    try:
        dst.save()
    except OSError as e:
        return _failed(dst_path, e)
    return FileOpResult(True, f"Updated {updated} labels", dst_path, data=updated)


def create_file(csf_path: str, language: int = 0) -> FileOpResult:
    """Write an empty version 3 CSF file."""
    try:
        csf = CsfFile.new(csf_path, version=3, unused=0, language=language)
    except ValueError as e:
        return _failed(csf_path, e)
    try:
        csf.save()
    except OSError as e:
        return _failed(csf_path, e)
    return FileOpResult(True, f"Created {csf.language_name()} table", csf_path, data=csf)


def inspect_file(csf_path: str) -> FileOpResult:
    """Summarize the header and categories of a CSF file."""
    try:
        csf = CsfFile.open(csf_path)
    except (CsfError, OSError) as e:
        return _failed(csf_path, e)

    summary = {
        "version": csf.version,
        "num_labels": csf.num_labels,
        "num_strings": csf.num_strings,
        "unused": csf.unused,
        "language": csf.language,
        "language_name": csf.language_name(),
        "labels": len(csf),
        "with_extra": sum(1 for e in csf if e.value.has_extra),
        "categories": {name: len(members) for name, members in sorted(csf.categories.items())},
    }
    return FileOpResult(True, f"{len(csf)} labels", csf_path, data=summary)
