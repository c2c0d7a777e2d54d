"""Import and export pipelines for weld CSV files."""

from .export_service import (
    CSVExport,
    ExportNotFound,
    build_import_template,
    encode_csv,
    export_welds_to_csv,
    quote_csv_value,
)
from .import_service import (
    ImportReport,
    RowError,
    import_welds_from_csv,
    import_welds_from_path,
    import_welds_from_upload,
    resolve_alias_table,
)

__all__ = [
    "CSVExport",
    "ExportNotFound",
    "ImportReport",
    "RowError",
    "build_import_template",
    "encode_csv",
    "export_welds_to_csv",
    "import_welds_from_csv",
    "import_welds_from_path",
    "import_welds_from_upload",
    "quote_csv_value",
    "resolve_alias_table",
]
