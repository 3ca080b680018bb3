# backoffice/services/screens.py
from collections import OrderedDict
from typing import Any, Dict, Sequence

from backoffice.models import (
    Book, Customer, Employee, InventoryForm, InventoryRecord, Record, Sale, SaleForm, Supplier,
)
from backoffice.models.base import today
from backoffice.services.list_view_model import Messages, Related, RelatedCollection, ScreenConfig
from backoffice.services.lookup import NOT_AVAILABLE, label, resolve

# ─────────────────────────────────────────
# Champs dérivés (jamais renvoyés au serveur)
# ─────────────────────────────────────────


def sale_total(sale: Sale, books: Sequence[Record]) -> float:
    """Prix du livre × quantité ; 0 si le livre est introuvable ou sans prix."""
    book = resolve(books, sale.book_id)
    if book is NOT_AVAILABLE or not book.price:
        return 0
    return book.price * sale.quantity


def _fmt_date(value: Any) -> str:
    return value.isoformat() if value else ""


# ─────────────────────────────────────────
# LIBROS
# ─────────────────────────────────────────


def _book_fields(book: Book, related: Related):
    return (book.title, book.author, book.category)


def _book_row(book: Book, related: Related) -> Dict[str, Any]:
    supplier = resolve(related.get("suppliers", ()), book.supplier_id)
    return {
        "id": book.id,
        "titulo": book.title,
        "autor": book.author,
        "anio": book.year,
        "categoria": book.category,
        "precio": book.price,
        "proveedor": label(supplier, "name"),
    }


BOOKS = ScreenConfig(
    name="libros",
    route="/",
    title="Gestión de Libros",
    kind="books",
    model=Book,
    new_title="Nuevo Libro",
    edit_title="Editar Libro",
    messages=Messages(
        load="No se pudieron cargar los libros",
        save="Error al guardar el libro",
        delete="Error al eliminar el libro",
        created="¡Libro creado con éxito!",
        updated="¡Libro actualizado con éxito!",
        deleted="¡Libro eliminado con éxito!",
    ),
    search_fields=_book_fields,
    empty_draft=Book,
    row=_book_row,
    related=(RelatedCollection("suppliers", "No se pudieron cargar los proveedores"),),
    required=("title", "author", "year", "category", "price", "supplier_id"),
    options={"suppliers": "name"},
)


# ─────────────────────────────────────────
# CLIENTES
# ─────────────────────────────────────────


def _customer_fields(customer: Customer, related: Related):
    return (customer.name, customer.email, customer.phone)


def _customer_row(customer: Customer, related: Related) -> Dict[str, Any]:
    return {
        "id": customer.id,
        "nombre": customer.name,
        "email": customer.email,
        "telefono": customer.phone,
        "direccion": customer.address,
    }


CUSTOMERS = ScreenConfig(
    name="clientes",
    route="/clientes",
    title="Gestión de Clientes",
    kind="customers",
    model=Customer,
    new_title="Nuevo Cliente",
    edit_title="Editar Cliente",
    messages=Messages(
        load="No se pudieron cargar los clientes",
        save="Error al guardar el cliente",
        delete="Error al eliminar el cliente",
        created="¡Cliente creado con éxito!",
        updated="¡Cliente actualizado con éxito!",
        deleted="¡Cliente eliminado con éxito!",
    ),
    search_fields=_customer_fields,
    empty_draft=Customer,
    row=_customer_row,
    required=("name", "email", "phone"),
)


# ─────────────────────────────────────────
# VENTAS
# ─────────────────────────────────────────


def _sale_fields(sale: Sale, related: Related):
    customer = resolve(related.get("customers", ()), sale.customer_id)
    book = resolve(related.get("books", ()), sale.book_id)
    return (
        customer.name if customer is not NOT_AVAILABLE else None,
        book.title if book is not NOT_AVAILABLE else None,
        _fmt_date(sale.purchase_date),
    )


def _sale_row(sale: Sale, related: Related) -> Dict[str, Any]:
    books = related.get("books", ())
    return {
        "id": sale.id,
        "cliente": label(resolve(related.get("customers", ()), sale.customer_id), "name"),
        "libro": label(resolve(books, sale.book_id), "title"),
        "empleado": label(resolve(related.get("employees", ()), sale.employee_id), "name"),
        "fecha": _fmt_date(sale.purchase_date),
        "cantidad": sale.quantity,
        "total": sale_total(sale, books),
    }


def _empty_sale() -> Sale:
    return Sale(purchase_date=today(), quantity=1)


SALES = ScreenConfig(
    name="ventas",
    route="/ventas",
    title="Gestión de Ventas",
    kind="sales",
    model=Sale,
    form_model=SaleForm,
    new_title="Nueva Venta",
    edit_title="Editar Venta",
    messages=Messages(
        load="No se pudieron cargar los datos",
        save="Error al guardar la venta",
        delete="Error al eliminar la venta",
        created="¡Venta registrada con éxito!",
        updated="¡Venta actualizada con éxito!",
        deleted="¡Venta eliminada con éxito!",
    ),
    search_fields=_sale_fields,
    empty_draft=_empty_sale,
    row=_sale_row,
    related=(
        RelatedCollection("books", "No se pudieron cargar los datos"),
        RelatedCollection("customers", "No se pudieron cargar los datos"),
        RelatedCollection("employees", "No se pudieron cargar los datos"),
    ),
    required=("customer_id", "book_id", "employee_id", "purchase_date", "quantity"),
    options={"customers": "name", "books": "title", "employees": "name"},
)


# ─────────────────────────────────────────
# INVENTARIO (lecture + mise à jour du stock)
# ─────────────────────────────────────────


def _inventory_fields(row: InventoryRecord, related: Related):
    book = resolve(related.get("books", ()), row.book_id)
    if book is NOT_AVAILABLE:
        return ()
    return (book.title, book.author, book.category)


def _inventory_row(row: InventoryRecord, related: Related) -> Dict[str, Any]:
    book = resolve(related.get("books", ()), row.book_id)
    status = row.status
    return {
        "id": row.id,
        "libro": label(book, "title"),
        "autor": label(book, "author"),
        "categoria": label(book, "category"),
        "stock": row.stock,
        "estado": status.value,
        "estado_label": status.label,
        "estado_variant": status.variant,
        "ultima_actualizacion": _fmt_date(row.last_updated),
    }


def _empty_inventory() -> InventoryRecord:
    return InventoryRecord(stock=0, last_updated=today())


def _stamp_inventory(row: InventoryRecord) -> InventoryRecord:
    return row.model_copy(update={"last_updated": today()})


INVENTORY = ScreenConfig(
    name="inventario",
    route="/inventario",
    title="Gestión de Inventario",
    kind="inventory",
    model=InventoryRecord,
    form_model=InventoryForm,
    new_title="Actualizar Inventario",
    edit_title="Actualizar Inventario",
    messages=Messages(
        load="No se pudieron cargar los datos",
        save="Error al actualizar el inventario",
        updated="¡Inventario actualizado con éxito!",
    ),
    search_fields=_inventory_fields,
    empty_draft=_empty_inventory,
    row=_inventory_row,
    related=(RelatedCollection("books", "No se pudieron cargar los datos"),),
    required=("stock", "last_updated"),
    can_create=False,
    can_delete=False,
    prepare_submit=_stamp_inventory,
    options={"books": "title"},
)


# ─────────────────────────────────────────
# PROVEEDORES
# ─────────────────────────────────────────


def _supplier_fields(supplier: Supplier, related: Related):
    return (supplier.name, supplier.contact, supplier.email, supplier.phone)


def _supplier_row(supplier: Supplier, related: Related) -> Dict[str, Any]:
    return {
        "id": supplier.id,
        "nombre": supplier.name,
        "contacto": supplier.contact,
        "telefono": supplier.phone,
        "email": supplier.email,
    }


SUPPLIERS = ScreenConfig(
    name="proveedores",
    route="/proveedores",
    title="Gestión de Proveedores",
    kind="suppliers",
    model=Supplier,
    new_title="Nuevo Proveedor",
    edit_title="Editar Proveedor",
    messages=Messages(
        load="No se pudieron cargar los proveedores",
        save="Error al guardar el proveedor",
        delete="Error al eliminar el proveedor",
        created="¡Proveedor creado con éxito!",
        updated="¡Proveedor actualizado con éxito!",
        deleted="¡Proveedor eliminado con éxito!",
    ),
    search_fields=_supplier_fields,
    empty_draft=Supplier,
    row=_supplier_row,
    required=("name",),
)


# ─────────────────────────────────────────
# EMPLEADOS
# ─────────────────────────────────────────


def _employee_fields(employee: Employee, related: Related):
    return (employee.name, employee.role, employee.email)


def _employee_row(employee: Employee, related: Related) -> Dict[str, Any]:
    return {
        "id": employee.id,
        "nombre": employee.name,
        "cargo": employee.role,
        "email": employee.email,
        "fecha_ingreso": _fmt_date(employee.hire_date),
    }


def _empty_employee() -> Employee:
    return Employee(hire_date=today())


EMPLOYEES = ScreenConfig(
    name="empleados",
    route="/empleados",
    title="Gestión de Empleados",
    kind="employees",
    model=Employee,
    new_title="Nuevo Empleado",
    edit_title="Editar Empleado",
    messages=Messages(
        load="No se pudieron cargar los empleados",
        save="Error al guardar el empleado",
        delete="Error al eliminar el empleado",
        created="¡Empleado creado con éxito!",
        updated="¡Empleado actualizado con éxito!",
        deleted="¡Empleado eliminado con éxito!",
    ),
    search_fields=_employee_fields,
    empty_draft=_empty_employee,
    row=_employee_row,
    required=("name", "role", "hire_date"),
)


# ordre de la barre de navigation
SCREENS: "OrderedDict[str, ScreenConfig]" = OrderedDict(
    (screen.name, screen)
    for screen in (BOOKS, CUSTOMERS, SALES, INVENTORY, SUPPLIERS, EMPLOYEES)
)


def get_screen(name: str) -> ScreenConfig:
    return SCREENS[name]
