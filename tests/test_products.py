"""Product catalogue API tests."""

import csv
import io
from unittest.mock import patch

from stockroom.config import Settings
from stockroom.services.product_service import EXPORT_HEADERS, profit_margin


def create_product(client, headers, **overrides):
    """Create a product through the API and return the response."""
    payload = {"name": "Widget", "category": "Electronics", "price": 20.0, "stock": 15}
    payload.update(overrides)
    return client.post("/api/v1/products", headers=headers, json=payload)


def test_create_product(client, auth_headers):
    """Test creating a product with a new category."""
    response = create_product(
        client, auth_headers, cost_price=12.5, min_stock=5, sku="WID-1", supplier="Acme"
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Widget"
    assert data["category"] == "Electronics"
    assert data["status"] == "In Stock"
    assert data["unit"] == "pcs"
    assert data["sku"] == "WID-1"

    categories = client.get("/api/v1/categories", headers=auth_headers).json()
    assert [c["name"] for c in categories] == ["Electronics"]


def test_create_product_reuses_category(client, auth_headers):
    """Test products with the same category share one category row."""
    create_product(client, auth_headers, name="A")
    create_product(client, auth_headers, name="B")

    categories = client.get("/api/v1/categories", headers=auth_headers).json()
    assert len(categories) == 1


def test_create_product_status_from_stock(client, auth_headers):
    """Test status is derived from stock on create, ignoring client input."""
    low = create_product(client, auth_headers, name="Low", stock=3, min_stock=5).json()
    out = create_product(client, auth_headers, name="Out", stock=0, min_stock=5).json()
    edge = create_product(client, auth_headers, name="Edge", stock=5, min_stock=5).json()
    forced = create_product(client, auth_headers, name="Forced", stock=0, status="In Stock")

    assert low["status"] == "Low Stock"
    assert out["status"] == "Out of Stock"
    assert edge["status"] == "Low Stock"
    assert forced.json()["status"] == "Out of Stock"


def test_create_product_uses_default_min_stock(client, auth_headers):
    """Test a missing minimum stock falls back to the configured default."""
    with patch(
        "stockroom.services.product_service.get_settings",
        return_value=Settings(default_min_stock=10),
    ):
        response = create_product(client, auth_headers, stock=8)

    assert response.json()["min_stock"] == 10
    assert response.json()["status"] == "Low Stock"


def test_create_product_missing_fields(client, auth_headers):
    """Test required fields are reported by name."""
    response = client.post("/api/v1/products", headers=auth_headers, json={"name": "Widget"})
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert {"category", "price", "stock"} <= errors.keys()


def test_create_product_stock_out_of_range(client, auth_headers):
    """Test stock beyond the integer column range is rejected."""
    response = create_product(client, auth_headers, stock=10**20)
    assert response.status_code == 400
    assert "stock" in response.json()["errors"]

    response = create_product(client, auth_headers, min_stock=2**31)
    assert response.status_code == 400
    assert "min_stock" in response.json()["errors"]


def test_create_product_blank_category(client, auth_headers):
    """Test whitespace-only names and categories are rejected."""
    response = create_product(client, auth_headers, category="   ")
    assert response.status_code == 400
    assert "category" in response.json()["errors"]

    response = create_product(client, auth_headers, name=" ")
    assert response.status_code == 400
    assert "name" in response.json()["errors"]

    assert client.get("/api/v1/categories", headers=auth_headers).json() == []


def test_create_product_strips_category(client, auth_headers):
    """Test surrounding whitespace is dropped from the category name."""
    response = create_product(client, auth_headers, category="  Office  ")
    assert response.json()["category"] == "Office"


def test_create_product_duplicate_sku(client, auth_headers):
    """Test a duplicate SKU is a conflict."""
    create_product(client, auth_headers, name="A", sku="DUP")
    response = create_product(client, auth_headers, name="B", sku="DUP")
    assert response.status_code == 409


def test_get_product(client, auth_headers):
    """Test getting a single product."""
    product_id = create_product(client, auth_headers).json()["id"]
    response = client.get(f"/api/v1/products/{product_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == product_id


def test_get_missing_product(client, auth_headers):
    """Test a missing product is a 404."""
    response = client.get("/api/v1/products/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


def test_update_product_recomputes_status(client, auth_headers):
    """Test stock changes move the product between statuses."""
    product_id = create_product(client, auth_headers, stock=15, min_stock=5).json()["id"]

    response = client.patch(
        f"/api/v1/products/{product_id}", headers=auth_headers, json={"stock": 2}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Low Stock"

    response = client.patch(
        f"/api/v1/products/{product_id}", headers=auth_headers, json={"stock": 0}
    )
    assert response.json()["status"] == "Out of Stock"

    response = client.patch(
        f"/api/v1/products/{product_id}", headers=auth_headers, json={"min_stock": 0, "stock": 1}
    )
    assert response.json()["status"] == "In Stock"


def test_update_product_rejects_bad_values(client, auth_headers):
    """Test out-of-range stock and blank categories are rejected on update."""
    product_id = create_product(client, auth_headers).json()["id"]

    response = client.patch(
        f"/api/v1/products/{product_id}", headers=auth_headers, json={"stock": 10**20}
    )
    assert response.status_code == 400
    assert "stock" in response.json()["errors"]

    response = client.patch(
        f"/api/v1/products/{product_id}", headers=auth_headers, json={"category": "  "}
    )
    assert response.status_code == 400
    assert "category" in response.json()["errors"]

    response = client.get(f"/api/v1/products/{product_id}", headers=auth_headers)
    assert response.json()["stock"] == 15
    assert response.json()["category"] == "Electronics"


def test_update_product_partial(client, auth_headers):
    """Test fields that are not sent are left alone."""
    product_id = create_product(
        client, auth_headers, supplier="Acme", description="Blue"
    ).json()["id"]

    response = client.patch(
        f"/api/v1/products/{product_id}",
        headers=auth_headers,
        json={"price": 25.0, "category": "Gadgets"},
    )
    data = response.json()
    assert data["price"] == 25.0
    assert data["category"] == "Gadgets"
    assert data["supplier"] == "Acme"
    assert data["description"] == "Blue"
    assert data["stock"] == 15


def test_update_product_clears_optional_text(client, auth_headers):
    """Test optional text fields can be cleared with null."""
    product_id = create_product(client, auth_headers, supplier="Acme").json()["id"]

    response = client.patch(
        f"/api/v1/products/{product_id}",
        headers=auth_headers,
        json={"supplier": None, "name": None},
    )
    assert response.json()["supplier"] is None
    assert response.json()["name"] == "Widget"


def test_delete_product(client, auth_headers):
    """Test deleting a product."""
    product_id = create_product(client, auth_headers).json()["id"]

    response = client.delete(f"/api/v1/products/{product_id}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get(f"/api/v1/products/{product_id}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_all_products(client, auth_headers, make_product):
    """Test deleting every product at once."""
    make_product(name="A")
    make_product(name="B")

    response = client.delete("/api/v1/products", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deleted"] == 2
    assert client.get("/api/v1/products", headers=auth_headers).json() == []


class TestListProducts:
    """Tests for searching, filtering and sorting the product list."""

    def names(self, client, headers, **params):
        response = client.get("/api/v1/products", headers=headers, params=params)
        assert response.status_code == 200
        return [p["name"] for p in response.json()]

    def test_newest_first_by_default(self, client, auth_headers, make_product):
        make_product(name="FIRST")
        make_product(name="SECOND")
        make_product(name="THIRD")

        assert self.names(client, auth_headers) == ["THIRD", "SECOND", "FIRST"]

    def test_search_matches_name_or_category(self, client, auth_headers, make_product):
        make_product(name="USB CABLE", category="Electronics")
        make_product(name="CABLE TIES", category="Maintenance")
        make_product(name="PAPER", category="Office Supplies")

        assert sorted(self.names(client, auth_headers, search="cable")) == [
            "CABLE TIES",
            "USB CABLE",
        ]
        assert self.names(client, auth_headers, search="office") == ["PAPER"]

    def test_filter_by_category_and_status(self, client, auth_headers, make_product):
        make_product(name="LOW", category="Electronics", stock=2, min_stock=5)
        make_product(name="OUT", category="Electronics", stock=0)
        make_product(name="FINE", category="Electronics", stock=50)
        make_product(name="OTHER", category="Maintenance", stock=0)

        assert self.names(
            client, auth_headers, category="Electronics", status="Out of Stock"
        ) == ["OUT"]
        assert self.names(client, auth_headers, status="Low Stock") == ["LOW"]

    def test_price_and_stock_ranges(self, client, auth_headers, make_product):
        make_product(name="CHEAP", price=5, stock=100)
        make_product(name="MID", price=50, stock=20)
        make_product(name="PRICEY", price=500, stock=1)

        assert self.names(client, auth_headers, min_price=10, max_price=100) == ["MID"]
        assert sorted(self.names(client, auth_headers, min_stock=20)) == ["CHEAP", "MID"]
        assert self.names(client, auth_headers, max_stock=1) == ["PRICEY"]

    def test_sort_by_field(self, client, auth_headers, make_product):
        make_product(name="B", price=30, category="Zeta")
        make_product(name="A", price=10, category="Alpha")
        make_product(name="C", price=20, category="Mid")

        assert self.names(client, auth_headers, sort_by="name", order="asc") == ["A", "B", "C"]
        assert self.names(client, auth_headers, sort_by="price", order="desc") == ["B", "C", "A"]
        assert self.names(client, auth_headers, sort_by="category", order="asc") == [
            "A",
            "C",
            "B",
        ]

    def test_stock_range_out_of_bounds(self, client, auth_headers):
        response = client.get(
            "/api/v1/products", headers=auth_headers, params={"min_stock": 10**20}
        )
        assert response.status_code == 400
        assert "min_stock" in response.json()["errors"]

    def test_invalid_sort_field(self, client, auth_headers):
        response = client.get(
            "/api/v1/products", headers=auth_headers, params={"sort_by": "password"}
        )
        assert response.status_code == 400
        assert "sort_by" in response.json()["errors"]


class TestExport:
    """Tests for CSV export."""

    def test_profit_margin(self):
        assert profit_margin(150, 100) == "50.0%"
        assert profit_margin(10, 0) == "N/A"
        assert profit_margin(90, 100) == "-10.0%"

    def test_export_csv(self, client, auth_headers, make_product):
        make_product(name='MONITOR 27"', category="Electronics", price=300, cost_price=200)
        make_product(name="GLOVES", category="Maintenance", price=5, cost_price=0, stock=0)

        response = client.get(
            "/api/v1/products/export",
            headers=auth_headers,
            params={"sort_by": "name", "order": "asc"},
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=products_" in response.headers["content-disposition"]

        lines = response.text.splitlines()
        assert lines[0] == ",".join(EXPORT_HEADERS)
        assert lines[1] == '"GLOVES","Maintenance","5.00","0.00","0","Out of Stock","N/A"'

        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[2] == [
            'MONITOR 27"',
            "Electronics",
            "300.00",
            "200.00",
            "10",
            "In Stock",
            "50.0%",
        ]

    def test_export_respects_filters(self, client, auth_headers, make_product):
        make_product(name="KEEP", category="Electronics")
        make_product(name="SKIP", category="Maintenance")

        response = client.get(
            "/api/v1/products/export", headers=auth_headers, params={"category": "Electronics"}
        )
        lines = response.text.splitlines()
        assert len(lines) == 2
        assert lines[1].startswith('"KEEP"')
