from .base import Record
from .book import Book
from .customer import Customer
from .employee import Employee
from .inventory import InventoryForm, InventoryRecord, StockStatus, stock_status
from .sale import Sale, SaleForm
from .supplier import Supplier

__all__ = [
    "Record",
    "Book", "Customer", "Employee", "InventoryRecord", "Sale", "Supplier",
    "InventoryForm", "SaleForm",
    "StockStatus", "stock_status",
]
