"""Tests for orders, dashboard statistics, notifications, reports and settings."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

from stockroom.models.enums import OrderStatus
from stockroom.schemas.settings import NotificationToggles
from stockroom.services.notifications import build_notifications, format_time_ago

MONDAY = datetime(2025, 3, 3, 9, 0, tzinfo=UTC)
TUESDAY = MONDAY + timedelta(days=1)


def order(order_no, status=OrderStatus.PENDING, hours_ago=1, amount=99.5, now=MONDAY):
    return SimpleNamespace(
        order_no=order_no,
        status=status.value,
        amount=amount,
        customer_name="Acme Corp",
        created_at=now - timedelta(hours=hours_ago),
    )


def product(product_id, status, stock=0, name="WIDGET"):
    return SimpleNamespace(id=product_id, status=status, stock=stock, name=name)


class TestFormatTimeAgo:
    """Tests for relative time labels."""

    def test_labels(self):
        now = MONDAY
        assert format_time_ago(now - timedelta(seconds=20), now) == "Just now"
        assert format_time_ago(now - timedelta(minutes=5), now) == "5m ago"
        assert format_time_ago(now - timedelta(hours=3, minutes=10), now) == "3h ago"
        assert format_time_ago(now - timedelta(days=2), now) == "2025-03-01"


class TestBuildNotifications:
    """Tests for deriving dashboard alerts."""

    def test_recent_pending_orders_only(self):
        orders = [
            order("ORD-20250303-0001", hours_ago=1),
            order("ORD-20250302-0002", hours_ago=30),
            order("ORD-20250303-0003", status=OrderStatus.COMPLETED),
        ]
        notifications = build_notifications(
            orders, [], NotificationToggles(low_stock_warnings=False), now=MONDAY
        )

        assert len(notifications) == 1
        alert = notifications[0]
        assert alert.type == "order"
        assert alert.id == "order-ORD-20250303-0001"
        assert alert.message == "Order #ORD-2025 from Acme Corp - $99.50"
        assert alert.time == "1h ago"

    def test_order_alerts_capped_at_three(self):
        orders = [order(f"ORD-{i}", hours_ago=i + 1) for i in range(5)]
        notifications = build_notifications(orders, [], NotificationToggles(), now=MONDAY)
        assert [n.id for n in notifications if n.type == "order"] == [
            "order-ORD-0",
            "order-ORD-1",
            "order-ORD-2",
        ]

    def test_low_stock_warnings(self):
        products = [
            product(1, "In Stock", stock=50),
            product(2, "Out of Stock", stock=0, name="GLOVES"),
            product(3, "Low Stock", stock=2, name="PENS"),
        ]
        notifications = build_notifications([], products, NotificationToggles(), now=TUESDAY)

        assert [(n.id, n.title) for n in notifications] == [
            ("stock-2", "Out of Stock"),
            ("stock-3", "Low Stock Warning"),
        ]
        assert notifications[1].message == "PENS - 2 units remaining"
        assert notifications[1].time == "Now"

    def test_weekly_report_only_on_monday(self):
        toggles = NotificationToggles(weekly_reports=True)
        orders = [
            order("A", status=OrderStatus.COMPLETED, amount=1000),
            order("B", status=OrderStatus.CANCELED, amount=50),
        ]

        monday = build_notifications(orders, [], toggles, now=MONDAY)
        tuesday = build_notifications(orders, [], toggles, now=TUESDAY)

        report = [n for n in monday if n.type == "report"]
        assert len(report) == 1
        assert report[0].id == "weekly-report"
        assert report[0].message == "Last week: $1,000.00 revenue, 2 orders"
        assert not [n for n in tuesday if n.type == "report"]

    def test_toggles_disable_kinds(self):
        toggles = NotificationToggles(order_alerts=False, low_stock_warnings=False)
        notifications = build_notifications(
            [order("A")], [product(1, "Out of Stock")], toggles, now=MONDAY
        )
        assert notifications == []


class TestOrders:
    """Tests for the order ledger endpoint."""

    def test_list_orders_newest_first(self, client, auth_headers, make_order):
        now = datetime.now(UTC)
        make_order("ORD-1", created_at=now - timedelta(days=2))
        make_order("ORD-2", created_at=now - timedelta(hours=1), customer="Globex Ltd")
        make_order("ORD-3", created_at=now - timedelta(days=1))

        response = client.get("/api/v1/orders", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert [o["id"] for o in data] == ["ORD-2", "ORD-3", "ORD-1"]
        assert data[0]["customer"] == "Globex Ltd"
        assert data[0]["status"] == "Completed"
        assert "date" in data[0]

    def test_search_by_customer_or_number(self, client, auth_headers, make_order):
        make_order("ORD-100", customer="Acme Corp")
        make_order("ORD-200", customer="Globex Ltd")

        by_customer = client.get(
            "/api/v1/orders", headers=auth_headers, params={"search": "globex"}
        ).json()
        by_number = client.get(
            "/api/v1/orders", headers=auth_headers, params={"search": "100"}
        ).json()

        assert [o["id"] for o in by_customer] == ["ORD-200"]
        assert [o["id"] for o in by_number] == ["ORD-100"]


class TestDashboardStats:
    """Tests for the dashboard headline figures."""

    def test_empty(self, client, auth_headers):
        response = client.get("/api/v1/dashboard/stats", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_revenue"] == 0
        assert data["total_orders"] == 0
        assert data["fulfillment_rate"] == 0
        assert data["recent_orders"] == []

    def test_figures(self, client, auth_headers, make_order, make_product):
        make_order("ORD-1", amount=100, status=OrderStatus.COMPLETED)
        make_order("ORD-2", amount=250.5, status=OrderStatus.COMPLETED)
        make_order("ORD-3", amount=75, status=OrderStatus.PENDING)
        make_product(name="LOW", stock=2, min_stock=5)
        make_product(name="OUT", stock=0)
        make_product(name="FINE", stock=100)

        data = client.get("/api/v1/dashboard/stats", headers=auth_headers).json()
        assert data["total_revenue"] == 350.5
        assert data["pending_orders"] == 1
        assert data["total_orders"] == 3
        assert data["completed_orders"] == 2
        assert data["low_stock_items"] == 2
        assert data["fulfillment_rate"] == 66.7
        assert len(data["recent_orders"]) == 3

    def test_recent_orders_limited_to_five(self, client, auth_headers, make_order):
        for i in range(7):
            make_order(f"ORD-{i}")

        data = client.get("/api/v1/dashboard/stats", headers=auth_headers).json()
        assert [o["id"] for o in data["recent_orders"]] == [f"ORD-{i}" for i in range(6, 1, -1)]


class TestDashboardNotifications:
    """Tests for the notifications endpoint."""

    def test_follows_user_toggles(self, client, auth_headers, make_order, make_product):
        make_order("ORD-1", status=OrderStatus.PENDING)
        make_product(name="GLOVES", stock=0)

        response = client.get("/api/v1/dashboard/notifications", headers=auth_headers)
        assert response.status_code == 200
        assert {n["type"] for n in response.json()} == {"order", "low_stock"}

        client.patch(
            "/api/v1/settings",
            headers=auth_headers,
            json={"notifications": {"order_alerts": False}},
        )
        response = client.get("/api/v1/dashboard/notifications", headers=auth_headers)
        assert [n["type"] for n in response.json()] == ["low_stock"]


class TestReportSummary:
    """Tests for the inventory report."""

    def test_summary(self, client, auth_headers, make_product):
        make_product(name="A", category="Electronics", stock=10, cost_price=5)
        make_product(name="B", category="Electronics", stock=2, min_stock=5, cost_price=10)
        make_product(name="C", category="Office", stock=0, cost_price=3)
        make_product(name="D", category="Maintenance", stock=4, cost_price=1.25)
        make_product(name="E", category="Office", stock=6, cost_price=2)
        make_product(name="F", category="Tools", stock=1, cost_price=100)

        response = client.get("/api/v1/reports/summary", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_products"] == 6
        assert data["total_stock"] == 23
        assert data["low_stock_count"] == 1
        assert data["out_of_stock_count"] == 1
        assert data["total_stock_value"] == 187.0
        assert data["top_categories"] == ["Electronics", "Office", "Maintenance"]
        assert data["category_distribution"] == [
            {"name": "Electronics", "value": 2},
            {"name": "Office", "value": 2},
            {"name": "Maintenance", "value": 1},
            {"name": "Tools", "value": 1},
        ]

    def test_empty(self, client, auth_headers):
        data = client.get("/api/v1/reports/summary", headers=auth_headers).json()
        assert data["total_products"] == 0
        assert data["top_categories"] == []
        assert data["total_stock_value"] == 0


class TestSettings:
    """Tests for the user settings endpoints."""

    def test_defaults(self, client, auth_headers):
        response = client.get("/api/v1/settings", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {
            "profile": {
                "full_name": "Test User",
                "email": auth_headers.email,
                "phone": "",
                "role": "user",
                "avatar": None,
            },
            "notifications": {
                "order_alerts": True,
                "low_stock_warnings": True,
                "weekly_reports": False,
            },
        }

    def test_partial_update(self, client, auth_headers):
        response = client.patch(
            "/api/v1/settings",
            headers=auth_headers,
            json={
                "profile": {"full_name": "Renamed", "phone": "+1 555 0100"},
                "notifications": {"weekly_reports": True},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["profile"]["full_name"] == "Renamed"
        assert data["profile"]["phone"] == "+1 555 0100"
        assert data["notifications"] == {
            "order_alerts": True,
            "low_stock_warnings": True,
            "weekly_reports": True,
        }

        me = client.get("/api/v1/auth/me", headers=auth_headers).json()
        assert me["name"] == "Renamed"

    def test_email_and_role_are_read_only(self, client, auth_headers):
        client.patch(
            "/api/v1/settings",
            headers=auth_headers,
            json={"profile": {"email": "hijack@example.com", "role": "admin"}},
        )
        profile = client.get("/api/v1/settings", headers=auth_headers).json()["profile"]
        assert profile["email"] == auth_headers.email
        assert profile["role"] == "user"
