# weldlog/routes/fields.py

"""
Field definition management routes
"""

from http import HTTPStatus

from flask import current_app, jsonify, request

from weldlog.errors import ValidationError
from weldlog.services import FieldRegistryService


def register_field_routes(app):
    """Register field definition routes"""

    registry = FieldRegistryService()

    def _json_body():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError("Invalid JSON data")
        return payload

    @app.route("/api/fields", methods=["GET"])
    def list_fields():
        return jsonify([field.to_dict() for field in registry.list_fields()])

    @app.route("/api/fields/<int:field_id>", methods=["GET"])
    def get_field(field_id):
        return jsonify(registry.get_field(field_id).to_dict())

    @app.route("/api/fields", methods=["POST"])
    def create_field():
        field = registry.create_field(_json_body())
        return jsonify(field.to_dict()), HTTPStatus.CREATED

    @app.route("/api/fields/reorder", methods=["PUT"])
    def reorder_fields():
        payload = _json_body()
        registry.reorder_fields(payload.get("fieldOrders"))
        return jsonify({"message": "Fields reordered successfully"})

    @app.route("/api/fields/<int:field_id>", methods=["PUT"])
    def update_field(field_id):
        field = registry.update_field(field_id, _json_body())
        return jsonify(field.to_dict())

    @app.route("/api/fields/<int:field_id>", methods=["DELETE"])
    def delete_field(field_id):
        registry.delete_field(field_id)
        current_app.logger.debug(f"Field {field_id} removed via API")
        return jsonify({"message": "Field deleted successfully"})
