# weldlog/routes/welds.py

"""
Weld CRUD and image upload routes
"""

from http import HTTPStatus
from uuid import uuid4

from flask import current_app, jsonify, request, send_from_directory
from werkzeug.utils import secure_filename

from weldlog.errors import ValidationError
from weldlog.services import WeldStore
from weldlog.services.weld_store import parse_date_bound
from weldlog.utils.uploads import IMAGE_EXTENSIONS, allowed_file, resolve_upload_directory, upload_size


def _int_arg(name, default, minimum=1, maximum=None):
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None
    value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def _json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON data")
    return payload


def register_weld_routes(app):
    """Register weld routes"""

    store = WeldStore()

    @app.route("/api/welds", methods=["GET"])
    def list_welds():
        """
        List welds, newest first.

        Query parameters: page, limit, search, date_from, date_to.
        """
        page = _int_arg("page", 1)
        limit = _int_arg(
            "limit",
            app.config.get("WELDS_PAGE_SIZE_DEFAULT", 50),
            maximum=app.config.get("WELDS_PAGE_SIZE_MAX", 500),
        )
        result = store.search(
            search=(request.args.get("search") or "").strip() or None,
            date_from=parse_date_bound(request.args.get("date_from"), "date_from"),
            date_to=parse_date_bound(request.args.get("date_to"), "date_to"),
            page=page,
            limit=limit,
        )
        current_app.logger.debug(f"Returning {len(result.items)} welds (page {result.page})")
        return jsonify([weld.to_dict() for weld in result.items])

    @app.route("/api/welds/<int:weld_id>", methods=["GET"])
    def get_weld(weld_id):
        return jsonify(store.get(weld_id).to_dict())

    @app.route("/api/welds", methods=["POST"])
    def create_weld():
        weld = store.create(_json_body())
        current_app.logger.info(f"Created weld {weld.weld_number or '-'} (ID: {weld.id})")
        return jsonify(weld.to_dict()), HTTPStatus.CREATED

    @app.route("/api/welds/<int:weld_id>", methods=["PUT"])
    def update_weld(weld_id):
        weld = store.update(weld_id, _json_body())
        current_app.logger.info(f"Updated weld ID {weld_id}")
        return jsonify(weld.to_dict())

    @app.route("/api/welds/<int:weld_id>", methods=["DELETE"])
    def delete_weld(weld_id):
        store.delete(weld_id)
        current_app.logger.info(f"Deleted weld ID {weld_id}")
        return jsonify({"message": "Weld deleted successfully"})

    @app.route("/api/welds/upload-image", methods=["POST"])
    def upload_weld_image():
        """Store an image for a weld and return its public path"""
        file_storage = request.files.get("image")
        if file_storage is None or file_storage.filename == "":
            raise ValidationError("No image file provided")
        if not allowed_file(file_storage.filename, IMAGE_EXTENSIONS):
            raise ValidationError("Only image files are allowed (jpeg, jpg, png, gif)")

        max_bytes = int(app.config.get("UPLOAD_MAX_IMAGE_MB", 5)) * 1024 * 1024
        if upload_size(file_storage) > max_bytes:
            return (
                jsonify({"error": "Image exceeds maximum size limit.", "code": "request_entity_too_large"}),
                HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            )

        extension = secure_filename(file_storage.filename).rsplit(".", 1)[-1].lower()
        filename = f"weld-{uuid4().hex}.{extension}"
        upload_dir = resolve_upload_directory(app)
        file_storage.save(upload_dir / filename)
        current_app.logger.info(f"Stored weld image {filename}")

        return jsonify({"success": True, "imagePath": f"/uploads/{filename}", "filename": filename})

    @app.route("/uploads/<path:filename>", methods=["GET"])
    def serve_upload(filename):
        return send_from_directory(resolve_upload_directory(app), filename)
