# =============================================================================
# PEDIDOS v1.0 - TEST CONFIGURATION
# =============================================================================
# Global fixtures: in-memory database double, TestClient, sample data
# =============================================================================

import copy
import os
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient

# Test environment BEFORE importing the app
os.environ["TESTING"] = "true"

from pedidos.main import app
from pedidos.database_pg import convert_sql, get_connection
from pedidos.persistence.repositories.orders import (
    ORDER_HEADER_SQL,
    ORDER_ITEMS_SQL,
    ORDER_TRUCKS_SQL,
    ORDER_DRIVERS_SQL,
    UPDATE_ORDER_SQL,
    DELETE_ITEMS_SQL,
    INSERT_ITEM_SQL,
    DELETE_TRUCKS_SQL,
    INSERT_TRUCK_SQL,
    DELETE_DRIVERS_SQL,
    INSERT_DRIVER_SQL,
)
from pedidos.services.cache import invalidator

from tests.factories import (
    ClientFactory,
    DestinationFactory,
    ProductFactory,
    TruckFactory,
    DriverFactory,
    OrderFactory,
)


# =============================================================================
# DATABASE DOUBLE
# =============================================================================

class FakeConnection:
    """
    In-memory stand-in for PostgreSQLConnection.

    Understands exactly the statements of OrdersRepository. Parameters go
    through convert_sql, so a missing @name or an uncoercible value fails
    as it would against PostgreSQL. Mutations after the last commit are
    undone by rollback().
    """

    TABLES = (
        "clients", "destinations", "invoices", "products", "trucks",
        "drivers", "orders", "items", "order_trucks", "order_drivers",
    )

    def __init__(self):
        self.clients: Dict[int, Dict[str, Any]] = {}
        self.destinations: Dict[int, Dict[str, Any]] = {}
        self.invoices: List[Dict[str, Any]] = []
        self.products: Dict[int, Dict[str, Any]] = {}
        self.trucks: Dict[int, Dict[str, Any]] = {}
        self.drivers: Dict[int, Dict[str, Any]] = {}
        self.orders: Dict[int, Dict[str, Any]] = {}
        self.items: List[Dict[str, Any]] = []
        self.order_trucks: List[Dict[str, int]] = []
        self.order_drivers: List[Dict[str, int]] = []

        self.statements: List[tuple] = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on = None
        self._snapshot = None
        self._next_item_id = 1

        self._reads = {
            ORDER_HEADER_SQL: self._select_header,
            ORDER_ITEMS_SQL: self._select_items,
            ORDER_TRUCKS_SQL: self._select_trucks,
            ORDER_DRIVERS_SQL: self._select_drivers,
        }
        self._writes = {
            UPDATE_ORDER_SQL: self._update_order,
            DELETE_ITEMS_SQL: self._delete_items,
            INSERT_ITEM_SQL: self._insert_item,
            DELETE_TRUCKS_SQL: lambda v: self._delete_links("order_trucks", v),
            INSERT_TRUCK_SQL: lambda v: self._insert_link("order_trucks", v["pedido_id"], v["camion_id"]),
            DELETE_DRIVERS_SQL: lambda v: self._delete_links("order_drivers", v),
            INSERT_DRIVER_SQL: lambda v: self._insert_link("order_drivers", v["pedido_id"], v["chofer_id"]),
        }

    # -------------------------------------------------------------------------
    # PostgreSQLConnection interface
    # -------------------------------------------------------------------------

    def execute_query(self, sql, params=()):
        _, values = convert_sql(sql, params)
        self.statements.append((sql, values))

        if self.fail_on == sql:
            raise RuntimeError("simulated database failure")

        if sql in self._reads:
            return self._reads[sql](values)
        if sql in self._writes:
            if self._snapshot is None:
                self._snapshot = copy.deepcopy({t: getattr(self, t) for t in self.TABLES})
            return self._writes[sql](values) or []
        raise AssertionError(f"Unexpected statement: {sql}")

    def commit(self):
        self.commits += 1
        self._snapshot = None

    def rollback(self):
        self.rollbacks += 1
        if self._snapshot is not None:
            for table, rows in self._snapshot.items():
                setattr(self, table, rows)
            self._snapshot = None

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def executed(self, sql) -> List[Dict[str, Any]]:
        """Parameter dicts of every execution of `sql`."""
        return [values for stmt, values in self.statements if stmt == sql]

    def item_rows(self, order_id):
        return [i for i in self.items if i["order_id"] == order_id]

    def truck_ids(self, order_id):
        return [link["camion_id"] for link in self.order_trucks if link["pedido_id"] == order_id]

    def driver_ids(self, order_id):
        return [link["chofer_id"] for link in self.order_drivers if link["pedido_id"] == order_id]

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def add_item(self, order_id, product_id, quantity, price_per_unit, unit):
        row = {
            "id": self._next_item_id,
            "order_id": order_id,
            "product_id": product_id,
            "quantity": quantity,
            "price_per_unit": price_per_unit,
            "unit": unit,
        }
        self._next_item_id += 1
        self.items.append(row)
        return row

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _select_header(self, v):
        order = self.orders.get(v["id"])
        if order is None:
            return []
        client = self.clients.get(order["customer_id"])
        if client is None:
            return []
        destination = self.destinations.get(order["destination_id"])
        invoice = next(
            (
                f for f in self.invoices
                if f["numserie"] == order["invoice_series"]
                and f["numfactura"] == order["invoice_number"]
                and f["n"] == order["invoice_n"]
            ),
            None
        )
        return [{
            **order,
            "client_name": client["name"],
            "rfc": client["rfc"],
            "destino_name": destination["name"] if destination else None,
            "serie": invoice["numserie"] if invoice else None,
            "folio": invoice["numfactura"] if invoice else None,
        }]

    def _select_items(self, v):
        rows = []
        for item in sorted(self.item_rows(v["id"]), key=lambda i: i["id"]):
            product = self.products.get(item["product_id"])
            if product is None:
                continue
            rows.append({
                "id": item["id"],
                "quantity": item["quantity"],
                "price_per_unit": item["price_per_unit"],
                "unit": item["unit"],
                "product_id": product["id"],
                "product_name": product["name"],
                "product_unit": product["unit"],
            })
        return rows

    def _select_trucks(self, v):
        ids = sorted(self.truck_ids(v["id"]))
        return [dict(self.trucks[i]) for i in ids if i in self.trucks]

    def _select_drivers(self, v):
        ids = sorted(self.driver_ids(v["id"]))
        return [
            {"id": d["id"], "name": d["name"], "docId": d["docid"]}
            for d in (self.drivers[i] for i in ids if i in self.drivers)
        ]

    def _update_order(self, v):
        order = self.orders.get(v["id"])
        if order is None:
            return []
        for field in ("customer_id", "destination_id", "total",
                      "invoice_series", "invoice_number", "invoice_n"):
            order[field] = v[field]
        order["updated_at"] = datetime.now()
        return [{"id": order["id"]}]

    def _delete_items(self, v):
        self.items = [i for i in self.items if i["order_id"] != v["id"]]

    def _insert_item(self, v):
        self.add_item(v["order_id"], v["product_id"], v["quantity"], v["price_per_unit"], v["unit"])

    def _delete_links(self, table, v):
        setattr(self, table, [link for link in getattr(self, table) if link["pedido_id"] != v["id"]])

    def _insert_link(self, table, pedido_id, other_id):
        key = "camion_id" if table == "order_trucks" else "chofer_id"
        getattr(self, table).append({"pedido_id": pedido_id, key: other_id})


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_db() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def client(fake_db: FakeConnection) -> Generator[TestClient, None, None]:
    """
    TestClient whose requests use the in-memory database.
    """
    app.dependency_overrides[get_connection] = lambda: fake_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_invalidator():
    """Cache listeners and timestamps never leak between tests."""
    invalidator.reset()
    yield
    invalidator.reset()


@pytest.fixture
def catalog(fake_db: FakeConnection) -> Dict[str, Any]:
    """
    Clients, destination, products, trucks and drivers.
    """
    clients = [ClientFactory(), ClientFactory()]
    destination = DestinationFactory()
    products = [ProductFactory(unit="kg"), ProductFactory(unit="ton")]
    trucks = TruckFactory.create_batch(3)
    drivers = DriverFactory.create_batch(3)

    for c in clients:
        fake_db.clients[c["id"]] = c
    fake_db.destinations[destination["id"]] = destination
    for p in products:
        fake_db.products[p["id"]] = p
    for t in trucks:
        fake_db.trucks[t["id"]] = t
    for d in drivers:
        fake_db.drivers[d["id"]] = d

    return {
        "clients": clients,
        "destination": destination,
        "products": products,
        "trucks": trucks,
        "drivers": drivers,
    }


@pytest.fixture
def sample_order(fake_db: FakeConnection, catalog: Dict[str, Any]) -> Dict[str, Any]:
    """
    Order with destination, invoice, two items (NUMERIC and text
    quantities), one truck and one driver.
    """
    order = OrderFactory(
        customer_id=catalog["clients"][0]["id"],
        destination_id=catalog["destination"]["id"],
        total=Decimal("255.50"),
        invoice_series="A",
        invoice_number=1500,
        invoice_n=1,
    )
    fake_db.orders[order["id"]] = order
    fake_db.invoices.append({"numserie": "A", "numfactura": 1500, "n": 1})

    products = catalog["products"]
    fake_db.add_item(order["id"], products[0]["id"], Decimal("2.000"), Decimal("100.25"), "kg")
    fake_db.add_item(order["id"], products[1]["id"], "1.5", "36.6667", "ton")

    fake_db.order_trucks.append({"pedido_id": order["id"], "camion_id": catalog["trucks"][0]["id"]})
    fake_db.order_drivers.append({"pedido_id": order["id"], "chofer_id": catalog["drivers"][0]["id"]})

    return order


# =============================================================================
# MARKER CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Custom markers.
    """
    config.addinivalue_line(
        "markers", "integration: requests through the FastAPI app"
    )
    config.addinivalue_line(
        "markers", "unit: isolated unit tests"
    )
