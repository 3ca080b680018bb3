import asyncio
from typing import Dict, List, Optional

import pytest

from backoffice.errors import NotFound
from backoffice.models import Book, Customer, Employee, InventoryRecord, Sale, Supplier


class StubResource:
    """Ressource en mémoire qui se comporte comme l'API distante."""

    def __init__(self, model, records=()):
        self.model = model
        self.rows: Dict[int, object] = {r.id: r for r in records}
        self.next_id = max(self.rows, default=0) + 1
        self.calls: List[tuple] = []
        self.fail: Dict[str, Exception] = {}
        self.gate: Optional[asyncio.Event] = None

    def _check(self, op):
        exc = self.fail.get(op)
        if exc is not None:
            raise exc

    async def list_all(self):
        self.calls.append(("list_all",))
        if self.gate is not None:
            await self.gate.wait()
        self._check("list_all")
        return [r.model_copy() for r in self.rows.values()]

    async def get_by_id(self, record_id):
        self.calls.append(("get_by_id", record_id))
        self._check("get_by_id")
        if record_id not in self.rows:
            raise NotFound(f"{record_id} introuvable", 404)
        return self.rows[record_id].model_copy()

    async def create(self, draft):
        self.calls.append(("create", draft.to_payload(include_id=False)))
        self._check("create")
        created = self.model.model_validate({**draft.model_dump(), "id": self.next_id})
        self.rows[created.id] = created
        self.next_id += 1
        return created

    async def update(self, record_id, draft):
        self.calls.append(("update", record_id, draft.to_payload()))
        self._check("update")
        if record_id not in self.rows:
            raise NotFound(f"{record_id} introuvable", 404)
        self.rows[record_id] = draft.model_copy(update={"id": record_id})
        return self.rows[record_id]

    async def delete(self, record_id):
        self.calls.append(("delete", record_id))
        self._check("delete")
        if record_id not in self.rows:
            raise NotFound(f"{record_id} introuvable", 404)
        del self.rows[record_id]

    def ops(self):
        return [c[0] for c in self.calls]


class StubClients:
    def __init__(self, **resources):
        self.books = resources.get("books") or StubResource(Book)
        self.customers = resources.get("customers") or StubResource(Customer)
        self.sales = resources.get("sales") or StubResource(Sale)
        self.inventory = resources.get("inventory") or StubResource(InventoryRecord)
        self.suppliers = resources.get("suppliers") or StubResource(Supplier)
        self.employees = resources.get("employees") or StubResource(Employee)

    def for_kind(self, kind):
        return getattr(self, kind)


@pytest.fixture
def books():
    return StubResource(Book, [
        Book(id=1, title="Dune", author="Herbert", year=1965, category="Sci-Fi", price=25000, supplier_id=10),
        Book(id=2, title="1984", author="Orwell", year=1949, category="Dystopian", price=18000, supplier_id=11),
    ])


@pytest.fixture
def suppliers():
    return StubResource(Supplier, [
        Supplier(id=10, name="Planeta", contact="Ana", phone="555-0100", email="ana@planeta.co"),
        Supplier(id=11, name="Penguin", contact=None, phone="555-0101", email=None),
    ])


@pytest.fixture
def customers():
    return StubResource(Customer, [
        Customer(id=100, name="Laura Gómez", email="laura@mail.co", phone="3001234567", address="Calle 1"),
        Customer(id=101, name="Pedro Ruiz", email="pedro@mail.co", phone="3109876543", address="Carrera 2"),
    ])


@pytest.fixture
def employees():
    return StubResource(Employee, [
        Employee(id=200, name="Marta", role="Vendedora", email="marta@libreria.co", hire_date="2022-02-01"),
    ])


@pytest.fixture
def sales():
    return StubResource(Sale, [
        Sale(id=1000, customer_id=100, book_id=1, employee_id=200, purchase_date="2024-05-02", quantity=3),
        Sale(id=1001, customer_id=101, book_id=2, employee_id=200, purchase_date="2024-06-10", quantity=1),
    ])


@pytest.fixture
def inventory():
    return StubResource(InventoryRecord, [
        InventoryRecord(id=1, book_id=1, stock=0, last_updated="2024-01-01"),
        InventoryRecord(id=2, book_id=2, stock=3, last_updated="2024-01-01"),
    ])


@pytest.fixture
def clients(books, suppliers, customers, employees, sales, inventory):
    return StubClients(
        books=books,
        suppliers=suppliers,
        customers=customers,
        employees=employees,
        sales=sales,
        inventory=inventory,
    )
