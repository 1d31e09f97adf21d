import itertools
import re
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from bazaar.db.supabase import get_client
from bazaar.main import app

EMBED_PRODUCTS = re.compile(r"\bproducts\s*\(")
EMBED_ITEMS = re.compile(r"\border_items\s*\(")


class FakeQuery:
    """Just enough of the PostgREST builder for the service layer."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_n = None

    def select(self, columns="*"):
        self.op, self.columns = "select", columns
        return self

    def insert(self, rows):
        self.op, self.payload = "insert", rows
        return self

    def update(self, values):
        self.op, self.payload = "update", values
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.db.filtered.append((self.table, column, value))
        self.filters.append(lambda r: r.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda r: r.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _match(self, row):
        return all(f(row) for f in self.filters)

    def _embed(self, row):
        row = dict(row)
        if self.table == "orders" and EMBED_ITEMS.search(self.columns):
            items = [dict(i) for i in self.db.tables["order_items"] if i["order_id"] == row["id"]]
            if EMBED_PRODUCTS.search(self.columns):
                items = [self._with_product(i) for i in items]
            row["order_items"] = items
        if self.table == "order_items" and EMBED_PRODUCTS.search(self.columns):
            row = self._with_product(row)
        return row

    def _with_product(self, row):
        product = next((p for p in self.db.tables["products"] if p["id"] == row["product_id"]), None)
        row["products"] = dict(product) if product else None
        return row

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if self.table in self.db.failing:
            raise APIError({"message": f"{self.table} unavailable", "code": "500", "hint": None, "details": None})
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for values in payload:
                row = dict(values)
                row.setdefault("id", f"{self.table}-{next(self.db.ids)}")
                row.setdefault("created_at", self.db.tick())
                rows.append(row)
                inserted.append(dict(row))
            # row-level security without a returning select hands back nothing
            if self.table in self.db.silent_inserts:
                inserted = []
            return SimpleNamespace(data=inserted)

        matched = [r for r in rows if self._match(r)]
        if self.op == "update":
            for r in matched:
                r.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched])
        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._match(r)]
            return SimpleNamespace(data=[dict(r) for r in matched])

        data = [self._embed(r) for r in matched]
        if self.order_by:
            column, desc = self.order_by
            data.sort(key=lambda r: r.get(column), reverse=desc)
        if self.limit_n is not None:
            data = data[: self.limit_n]
        return SimpleNamespace(data=data)


class FakeSupabase:
    def __init__(self):
        self.tables = {
            "products": [],
            "product_images": [],
            "product_sizes": [],
            "product_colors": [],
            "orders": [],
            "order_items": [],
        }
        self.failing = set()
        self.silent_inserts = set()
        self.calls = []
        self.filtered = []
        self.ids = itertools.count(1)
        self.clock = datetime(2026, 1, 1, 12, 0, 0)

    def tick(self):
        self.clock += timedelta(minutes=1)
        return self.clock.isoformat()

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_db():
    db = FakeSupabase()
    db.tables["products"] = [
        {"id": "p1", "name": "Silk Abaya", "category": "Women's Clothing", "price": 40.0,
         "stock_quantity": 5, "description": "Black silk", "created_at": "2026-01-01T10:00:00"},
        {"id": "p2", "name": "Copper Pan", "category": "Kitchenware", "price": 20.0,
         "stock_quantity": 10, "description": None, "created_at": "2026-01-01T11:00:00"},
        {"id": "p3", "name": "Gold Bracelet", "category": "Accessories", "price": 15.5,
         "stock_quantity": 4, "description": None, "created_at": "2026-01-01T09:00:00"},
    ]
    db.tables["product_images"] = [
        {"id": "i2", "product_id": "p1", "image_url": "https://cdn.example/abaya-back.jpg", "display_order": 1},
        {"id": "i1", "product_id": "p1", "image_url": "https://cdn.example/abaya.jpg", "display_order": 0},
        {"id": "i3", "product_id": "p2", "image_url": "https://cdn.example/pan.jpg", "display_order": 0},
    ]
    db.tables["product_sizes"] = [
        {"id": "s1", "product_id": "p1", "size": "S"},
        {"id": "s2", "product_id": "p1", "size": "M"},
    ]
    db.tables["product_colors"] = [{"id": "c1", "product_id": "p1", "color": "Black"}]
    return db


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_client] = lambda: fake_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    res = client.post("/api/admin/auth", json={"password": "sinma2026"})
    assert res.status_code == 200
    return client
