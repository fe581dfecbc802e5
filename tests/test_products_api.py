from __future__ import annotations

import pytest

MISSING_ID = 900000


def _messages(response) -> list[str]:
    return [e["message"] for e in response.json()["errors"]]


class TestCreateProduct:
    def test_empty_body_reports_every_failed_rule(self, client):
        response = client.post("/api/products", json={})
        assert response.status_code == 400
        assert _messages(response) == [
            "Product name must be provided",
            "Price must be a number",
            "Price must be a positive number",
            "Product price must be provided",
        ]

    def test_zero_price_is_not_positive(self, client):
        response = client.post("/api/products", json={"name": "Mouse - Testing", "price": 0})
        assert response.status_code == 400
        assert _messages(response) == ["Price must be a positive number"]

    def test_text_price_fails_numeric_and_positive(self, client):
        response = client.post("/api/products", json={"name": "Mouse - Testing", "price": "Hello World"})
        assert response.status_code == 400
        errors = response.json()["errors"]
        assert len(errors) == 2
        assert {e["field"] for e in errors} == {"price"}
        assert all(e["location"] == "body" for e in errors)

    def test_malformed_json_counts_as_empty_body(self, client):
        response = client.post(
            "/api/products",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 4

    def test_creates_product_with_default_availability(self, client, repo):
        response = client.post("/api/products", json={"name": "Mouse - Testing", "price": 25})
        assert response.status_code == 201
        body = response.json()
        assert "errors" not in body
        assert body["data"] == {"id": 1, "name": "Mouse - Testing", "price": 25.0, "availability": True}
        assert 1 in repo.rows

    def test_price_too_large_for_a_float_is_not_a_number(self, client, repo):
        response = client.post(
            "/api/products",
            content=b'{"name": "x", "price": ' + b"9" * 400 + b"}",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert _messages(response) == ["Price must be a number"]
        assert repo.rows == {}

    def test_name_longer_than_100_characters(self, client, repo):
        response = client.post("/api/products", json={"name": "x" * 101, "price": 25})
        assert response.status_code == 400
        assert _messages(response) == ["Product name must be at most 100 characters"]
        assert repo.rows == {}

    def test_numeric_string_price_is_accepted(self, client):
        response = client.post("/api/products", json={"name": "Keyboard", "price": "49.90"})
        assert response.status_code == 201
        assert response.json()["data"]["price"] == pytest.approx(49.9)

    def test_duplicate_names_are_allowed(self, client):
        first = client.post("/api/products", json={"name": "Mouse", "price": 10})
        second = client.post("/api/products", json={"name": "Mouse", "price": 10})
        assert first.status_code == second.status_code == 201
        assert first.json()["data"]["id"] != second.json()["data"]["id"]


class TestListProducts:
    def test_returns_json_envelope(self, client, product):
        response = client.get("/api/products")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"data": [product]}

    def test_orders_by_id_descending(self, client):
        for name in ("A", "B", "C"):
            client.post("/api/products", json={"name": name, "price": 1})
        ids = [p["id"] for p in client.get("/api/products").json()["data"]]
        assert ids == [3, 2, 1]

    def test_records_carry_no_timestamps(self, client, product):
        record = client.get("/api/products").json()["data"][0]
        assert set(record) == {"id", "name", "price", "availability"}


class TestGetProduct:
    def test_missing_product_is_404(self, client):
        response = client.get(f"/api/products/{MISSING_ID}")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_non_integer_id_is_400(self, client):
        response = client.get("/api/products/not-valid-id")
        assert response.status_code == 400
        errors = response.json()["errors"]
        assert len(errors) == 1
        assert errors[0] == {"field": "id", "message": "Invalid ID", "location": "params"}

    def test_returns_single_product(self, client, product):
        response = client.get(f"/api/products/{product['id']}")
        assert response.status_code == 200
        assert response.json() == {"data": product}

    def test_id_with_leading_zeros(self, client, product):
        response = client.get("/api/products/01")
        assert response.status_code == 200
        assert response.json() == {"data": product}


class TestUpdateProduct:
    valid = {"name": "Curved Monitor", "availability": True, "price": 300}

    def test_invalid_id_only_reports_id(self, client):
        response = client.put("/api/products/not-valid-id", json=self.valid)
        assert response.status_code == 400
        assert _messages(response) == ["Invalid ID"]

    def test_empty_body_reports_five_errors(self, client, product):
        response = client.put(f"/api/products/{product['id']}", json={})
        assert response.status_code == 400
        assert "data" not in response.json()
        assert len(response.json()["errors"]) == 5
        assert _messages(response)[-1] == "Availability must be boolean"

    def test_negative_price(self, client, product):
        response = client.put(f"/api/products/{product['id']}", json={**self.valid, "price": -300})
        assert response.status_code == 400
        assert _messages(response) == ["Price must be a positive number"]

    def test_non_boolean_availability(self, client, product):
        response = client.put(f"/api/products/{product['id']}", json={**self.valid, "availability": "maybe"})
        assert response.status_code == 400
        assert _messages(response) == ["Availability must be boolean"]

    def test_missing_product_is_404(self, client):
        response = client.put(f"/api/products/{MISSING_ID}", json=self.valid)
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_validation_failure_does_not_mutate(self, client, repo, product):
        before = dict(repo.rows[product["id"]])
        client.put(f"/api/products/{product['id']}", json={"name": "", "price": 1, "availability": False})
        assert repo.rows[product["id"]] == before

    def test_put_then_get_round_trips(self, client, product):
        payload = {"name": "Curved Monitor", "price": 300, "availability": False}
        response = client.put(f"/api/products/{product['id']}", json=payload)
        assert response.status_code == 200
        assert "errors" not in response.json()

        fetched = client.get(f"/api/products/{product['id']}").json()["data"]
        assert {k: fetched[k] for k in payload} == payload

    def test_string_booleans_are_coerced(self, client, product):
        response = client.put(
            f"/api/products/{product['id']}",
            json={"name": "Curved Monitor", "price": "300", "availability": "false"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["availability"] is False


class TestToggleAvailability:
    def test_missing_product_is_404(self, client):
        response = client.patch(f"/api/products/{MISSING_ID}")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_invalid_id(self, client):
        response = client.patch("/api/products/1.5")
        assert response.status_code == 400
        assert _messages(response) == ["Invalid ID"]

    def test_flips_availability(self, client, product):
        response = client.patch(f"/api/products/{product['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["availability"] is False

    def test_double_toggle_restores_value(self, client, product):
        client.patch(f"/api/products/{product['id']}")
        response = client.patch(f"/api/products/{product['id']}")
        assert response.json()["data"]["availability"] is product["availability"]

    def test_only_availability_changes(self, client, product):
        data = client.patch(f"/api/products/{product['id']}").json()["data"]
        assert data["name"] == product["name"]
        assert data["price"] == product["price"]


class TestDeleteProduct:
    def test_invalid_id(self, client):
        response = client.delete("/api/products/not-valid-id")
        assert response.status_code == 400
        assert _messages(response)[0] == "Invalid ID"

    def test_missing_product_is_404(self, client):
        response = client.delete(f"/api/products/{MISSING_ID}")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_deletes_product(self, client, product):
        response = client.delete(f"/api/products/{product['id']}")
        assert response.status_code == 200
        assert response.json() == {"data": "Product was deleted"}

        assert client.get(f"/api/products/{product['id']}").status_code == 404
        assert client.delete(f"/api/products/{product['id']}").status_code == 404
