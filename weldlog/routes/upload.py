# weldlog/routes/upload.py

"""
CSV import/export routes
"""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, current_app, jsonify, request

from weldlog.importer.adapters import CSVStreamError
from weldlog.importer.pipeline import (
    ExportNotFound,
    build_import_template,
    export_welds_to_csv,
    import_welds_from_upload,
)
from weldlog.importer.pipeline.export_service import CSV_MIMETYPE, TEMPLATE_FILENAME
from weldlog.services.weld_store import parse_date_bound
from weldlog.utils.uploads import upload_size

upload_blueprint = Blueprint("upload", __name__, url_prefix="/api/upload")


def _max_csv_bytes() -> int:
    mb_limit = current_app.config.get("UPLOAD_MAX_CSV_MB", 25)
    try:
        return int(mb_limit) * 1024 * 1024
    except (TypeError, ValueError):
        return 25 * 1024 * 1024


def _csv_attachment(content: str, filename: str) -> Response:
    response = Response(content, mimetype=CSV_MIMETYPE)
    response.headers["Content-Type"] = CSV_MIMETYPE
    response.headers["Content-Disposition"] = f"attachment; filename={filename}"
    return response


@upload_blueprint.post("/csv")
def upload_csv():
    """Import welds from a multipart CSV upload and return the import report."""
    file_storage = request.files.get("file")
    if file_storage is None or file_storage.filename == "":
        return jsonify({"error": "No file uploaded", "code": "validation_error"}), HTTPStatus.BAD_REQUEST
    if upload_size(file_storage) > _max_csv_bytes():
        return (
            jsonify({"error": "Upload exceeds maximum size limit.", "code": "request_entity_too_large"}),
            HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
        )

    current_app.logger.info(f"CSV import started for upload '{file_storage.filename}'")
    try:
        report = import_welds_from_upload(file_storage, current_app._get_current_object())
    except CSVStreamError as exc:
        current_app.logger.error(f"Error reading CSV '{file_storage.filename}': {exc.message}")
        return (
            jsonify({"error": "Failed to read CSV file", "detail": exc.message, "code": exc.code}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )

    return jsonify(report.as_dict())


@upload_blueprint.get("/export")
def export_csv():
    """Download welds within the optional inclusive date range as CSV."""
    date_from = parse_date_bound(request.args.get("date_from"), "date_from")
    date_to = parse_date_bound(request.args.get("date_to"), "date_to")

    try:
        export = export_welds_to_csv(date_from, date_to)
    except ExportNotFound as exc:
        return jsonify(exc.to_dict()), HTTPStatus.NOT_FOUND

    return _csv_attachment(export.content, export.filename)


@upload_blueprint.get("/template")
def download_template():
    """Download a header-only CSV showing the accepted import columns."""
    return _csv_attachment(build_import_template(), TEMPLATE_FILENAME)
