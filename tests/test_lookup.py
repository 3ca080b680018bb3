from backoffice.models import Book, Sale
from backoffice.services.lookup import NA, NOT_AVAILABLE, label, resolve
from backoffice.services.screens import sale_total

BOOKS = [
    Book(id=1, title="Dune", price=25000),
    Book(id=2, title="1984", price=None),
]


def test_resolve_exact_id():
    assert resolve(BOOKS, 2).title == "1984"


def test_resolve_miss_returns_placeholder():
    assert resolve(BOOKS, 99) is NOT_AVAILABLE
    assert resolve([], 1) is NOT_AVAILABLE
    assert resolve(BOOKS, None) is NOT_AVAILABLE


def test_placeholder_is_falsy_singleton():
    assert not NOT_AVAILABLE
    assert type(NOT_AVAILABLE)() is NOT_AVAILABLE


def test_label_of_placeholder_or_empty_value():
    assert label(NOT_AVAILABLE, "title") == NA
    assert label(Book(id=3, title=""), "title") == NA
    assert label(BOOKS[0], "title") == "Dune"


def test_sale_total():
    sale = Sale(id=1, book_id=1, quantity=3)
    assert sale_total(sale, BOOKS) == 75000


def test_sale_total_with_dangling_book_is_zero():
    sale = Sale(id=1, book_id=42, quantity=3)
    assert sale_total(sale, BOOKS) == 0


def test_sale_total_without_price_is_zero():
    sale = Sale(id=1, book_id=2, quantity=2)
    assert sale_total(sale, BOOKS) == 0
