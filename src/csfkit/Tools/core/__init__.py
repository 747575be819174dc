"""Core file operations and the spreadsheet bridge."""
from .spreadsheet import (
    SpreadsheetError, RowShapeError, export_rows, export_xlsx, read_rows, import_rows, import_xlsx,
)
from .file_operations import (
    FileOpResult, export_file, import_file, merge_files, create_file, inspect_file,
)

__all__ = [
    'SpreadsheetError', 'RowShapeError', 'export_rows', 'export_xlsx', 'read_rows',
    'import_rows', 'import_xlsx',
    'FileOpResult', 'export_file', 'import_file', 'merge_files', 'create_file', 'inspect_file',
]
