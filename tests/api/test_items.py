"""Tests for catalog item endpoints."""

import pytest
from fastapi.testclient import TestClient


def new_item(**overrides) -> dict:
    payload = {
        "name": "Azure Mug",
        "description": "Mug for cloud people",
        "price": 5.25,
        "pictureFileName": "13.png",
        "catalogTypeId": 1,
        "catalogBrandId": 1,
        "availableStock": 10,
    }
    payload.update(overrides)
    return payload


class TestListItems:
    """Tests for GET /catalog/items."""

    def test_default_page(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items")

        assert response.status_code == 200
        data = response.json()
        assert data["pageIndex"] == 0
        assert data["pageSize"] == 10
        assert data["count"] == 12
        assert len(data["data"]) == 10

    def test_paging(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"pageSize": 5, "pageIndex": 2})

        data = response.json()
        assert data["count"] == 12
        assert [item["id"] for item in data["data"]] == [11, 12]

    def test_item_shape(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"pageSize": 1})

        item = response.json()["data"][0]
        assert item["id"] == 1
        assert item["name"] == ".NET Bot Black Hoodie"
        assert item["price"] == 19.5
        assert item["pictureFileName"] == "1.png"
        assert item["pictureUrl"] == "http://pictures.test/assets/images/1.png"
        assert item["catalogBrand"] == {"id": 2, "brand": ".NET"}
        assert item["catalogType"] == {"id": 2, "type": "T-Shirt"}
        assert item["availableStock"] == 100

    def test_brand_filter(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"brandFilter": 2, "pageSize": 50})

        data = response.json()
        assert data["count"] == 6
        assert {item["catalogBrandId"] for item in data["data"]} == {2}

    def test_multiple_brand_filters(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items?brandFilter=2&brandFilter=5")

        assert response.json()["count"] == 12

    def test_brand_and_type_filter(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"brandFilter": 2, "typeFilter": 2})

        data = response.json()
        assert data["count"] == 3
        assert [item["id"] for item in data["data"]] == [1, 4, 6]

    def test_filter_without_matches(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"brandFilter": 1})

        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert response.json()["data"] == []

    def test_page_far_past_the_end(self, auth_client: TestClient) -> None:
        response = auth_client.get(
            "/catalog/items", params={"pageIndex": 10**18, "pageSize": 100}
        )

        assert response.status_code == 200
        assert response.json()["count"] == 12
        assert response.json()["data"] == []

    def test_huge_page_size(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"pageSize": 10**20})

        assert response.status_code == 200
        assert len(response.json()["data"]) == 12

    def test_unstorable_brand_filter(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"brandFilter": 10**20})

        assert response.status_code == 200
        assert response.json()["count"] == 0

    def test_bracketed_filters(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items?brandFilter[]=2&typeFilter[]=2")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["data"]] == [1, 4, 6]

    def test_bracketed_and_plain_filters_combine(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items?brandFilter=2&brandFilter[]=5")

        assert response.json()["count"] == 12

    def test_invalid_page_size(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"pageSize": 0})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "pageSize"

    def test_non_integer_filter(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"brandFilter": "abc"})

        assert response.status_code == 400

    def test_response_is_indented(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items", params={"pageSize": 1})

        assert response.text.startswith('{\n  "pageIndex"')


class TestGetItem:
    """Tests for single item lookups."""

    def test_get_by_id(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items/2")

        assert response.status_code == 200
        assert response.json()["name"] == ".NET Black & White Mug"

    def test_missing_item(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items/999")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "NOT_FOUND"
        assert data["message"] == "CatalogItem 999 not found"
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_with_name(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items/withname/hoodie")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [1, 6, 8]

    def test_with_name_without_matches(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items/withname/nothing")

        assert response.status_code == 200
        assert response.json() == []

    def test_unstorable_item_id(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/items/99999999999999999999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    @pytest.mark.parametrize("name", ["_", "%25"])
    def test_with_name_wildcards_match_literally(self, auth_client: TestClient, name: str) -> None:
        response = auth_client.get(f"/catalog/items/withname/{name}")

        assert response.status_code == 200
        assert response.json() == []

    def test_products(self, auth_client: TestClient) -> None:
        response = auth_client.get("/catalog/products")

        assert response.status_code == 200
        assert len(response.json()) == 12


class TestCreateItem:
    """Tests for POST /catalog/items."""

    def test_create(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json=new_item())

        assert response.status_code == 201
        new_id = response.json()["id"]
        assert new_id == 13

        item = auth_client.get(f"/catalog/items/{new_id}").json()
        assert item["name"] == "Azure Mug"
        assert item["price"] == 5.25
        assert item["catalogBrand"] == {"id": 1, "brand": "Azure"}

    def test_missing_fields(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json={"description": "nameless"})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert {detail["field"] for detail in data["details"]} == {
            "name",
            "price",
            "catalogBrandId",
            "catalogTypeId",
        }

    def test_negative_price(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json=new_item(price=-1))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "price"

    def test_unknown_brand(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json=new_item(catalogBrandId=999))

        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT"

    def test_description_longer_than_column(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json=new_item(description="x" * 1001))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "description"

    def test_price_beyond_column_precision(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json=new_item(price=100000000))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "price"

    def test_malformed_body(self, auth_client: TestClient) -> None:
        response = auth_client.post("/catalog/items", json=new_item(price="cheap"))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "price"


class TestUpdateItem:
    """Tests for PUT /catalog/items."""

    def test_update(self, auth_client: TestClient) -> None:
        response = auth_client.put(
            "/catalog/items",
            json=new_item(id=3, name="Prism White T-Shirt", price=14, catalogTypeId=2),
        )

        assert response.status_code == 200
        assert response.json() == {"id": 3}
        item = auth_client.get("/catalog/items/3").json()
        assert item["price"] == 14.0
        assert item["catalogBrandId"] == 1

    def test_update_missing(self, auth_client: TestClient) -> None:
        response = auth_client.put("/catalog/items", json=new_item(id=999))

        assert response.status_code == 404

    def test_update_without_id(self, auth_client: TestClient) -> None:
        response = auth_client.put("/catalog/items", json=new_item())

        assert response.status_code == 400
        assert response.json()["details"][0] == {
            "field": "id",
            "message": "You should specify the ID",
        }


class TestDeleteItem:
    """Tests for DELETE /catalog/items/{id}."""

    def test_delete(self, auth_client: TestClient) -> None:
        response = auth_client.delete("/catalog/items/12")

        assert response.status_code == 204
        assert response.content == b""
        assert auth_client.get("/catalog/items/12").status_code == 404

    def test_delete_missing(self, auth_client: TestClient) -> None:
        response = auth_client.delete("/catalog/items/999")

        assert response.status_code == 404
