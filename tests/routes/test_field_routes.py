def test_field_crud_flow(client):
    created = client.post("/api/fields", json={"field_name": "heat_input", "display_name": "Heat Input"})
    assert created.status_code == 201
    field_id = created.get_json()["id"]

    listed = client.get("/api/fields").get_json()
    assert [f["field_name"] for f in listed] == ["heat_input"]

    updated = client.put(f"/api/fields/{field_id}", json={"display_name": "Heat Input (kJ/mm)"})
    assert updated.get_json()["display_name"] == "Heat Input (kJ/mm)"

    fetched = client.get(f"/api/fields/{field_id}")
    assert fetched.get_json()["field_type"] == "text"

    deleted = client.delete(f"/api/fields/{field_id}")
    assert deleted.get_json() == {"message": "Field deleted successfully"}
    assert client.get(f"/api/fields/{field_id}").status_code == 404


def test_create_field_validation_error(client):
    response = client.post("/api/fields", json={"field_name": "heat_input"})

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "Field name and display name are required",
        "code": "validation_error",
    }


def test_create_duplicate_field_returns_conflict(client, field_factory):
    field_factory(field_name="heat_input")

    response = client.post("/api/fields", json={"field_name": "heat_input", "display_name": "Dup"})

    assert response.status_code == 409
    assert response.get_json()["code"] == "conflict"


def test_rename_field_is_rejected(client, field_factory):
    field = field_factory(field_name="heat_input")

    response = client.put(f"/api/fields/{field.id}", json={"field_name": "renamed"})

    assert response.status_code == 400


def test_reorder_fields(client, field_factory):
    first = field_factory(field_name="a_field", display_name="A")
    second = field_factory(field_name="b_field", display_name="B")

    response = client.put(
        "/api/fields/reorder",
        json={"fieldOrders": [{"id": first.id, "order": 1}, {"id": second.id, "order": 0}]},
    )

    assert response.status_code == 200
    assert response.get_json() == {"message": "Fields reordered successfully"}
    listed = client.get("/api/fields").get_json()
    assert [(f["field_name"], f["field_order"]) for f in listed] == [("b_field", 0), ("a_field", 1)]


def test_reorder_with_unknown_id_returns_404(client, field_factory):
    field = field_factory()

    response = client.put("/api/fields/reorder", json={"fieldOrders": [{"id": field.id + 100, "order": 0}]})

    assert response.status_code == 404
