"""
Pytest fixtures and configuration for WebStore reports tests

Unit tests use a mocked psycopg2 connection; integration tests need a real
PostgreSQL database (DATABASE_URL) and are skipped without one.
"""
import pytest
import os
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock
from dotenv import load_dotenv

from webstore.domain import (
    Category,
    Customer,
    CustomerOrderCount,
    CustomerOrderValue,
    Order,
    OrderItem,
    OrderItemCount,
    PendingOrderTotal,
    Product,
    ProductSales,
    RecentOrder,
    Stock,
)

# Load environment variables for tests
load_dotenv()

FIXED_NOW = datetime(2026, 10, 17, 12, 0, 0)


@pytest.fixture(scope="session")
def database_url():
    """
    Provides the database URL for integration tests

    Scope: session (created once per test session)
    """
    url = os.getenv("DATABASE_URL")
    if not url:
        pytest.skip("DATABASE_URL not configured")
    return url


@pytest.fixture
def mock_conn():
    """
    Mocked psycopg2 connection whose cursor() always returns the same cursor

    Access the cursor as mock_conn.cursor.return_value.
    """
    conn = MagicMock()
    conn.cursor.return_value = MagicMock()
    return conn


@pytest.fixture
def mock_cursor(mock_conn):
    return mock_conn.cursor.return_value


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def sample_customers():
    return [
        Customer(customer_id=1, first_name="Ada", last_name="Lovelace", email="ada@example.com"),
        Customer(customer_id=2, first_name="Alan", last_name="Turing", email="alan@example.com"),
    ]


@pytest.fixture
def sample_discounted_order():
    """Order 10 with one discounted and one full-price item"""
    return Order(
        order_id=10,
        customer_id=1,
        order_status="Shipped",
        order_date=datetime(2026, 10, 1, 9, 30),
        customer_first_name="Ada",
        customer_last_name="Lovelace",
        items=[
            OrderItem(order_item_id=100, order_id=10, product_id=1, quantity=2,
                      unit_price=Decimal("499.99"), discount=Decimal("50.00"), product_name="Laptop"),
            OrderItem(order_item_id=101, order_id=10, product_id=2, quantity=1,
                      unit_price=Decimal("19.99"), discount=Decimal("0"), product_name="Mouse"),
        ]
    )


class FakeReportService:
    """
    Stand-in for ReportService returning canned data

    Records every call in `calls` so tests can check which queries ran.
    """

    def __init__(self, category_report=None):
        self.calls = []
        self._category_report = category_report

    def _record(self, name, value):
        self.calls.append(name)
        return value

    def list_customers(self):
        return self._record('list_customers', [
            Customer(customer_id=1, first_name="Ada", last_name="Lovelace", email="ada@example.com"),
        ])

    def orders_with_item_count(self):
        return self._record('orders_with_item_count', [
            OrderItemCount(order_id=10, order_status="Pending", item_count=3,
                           customer_first_name="Ada", customer_last_name="Lovelace"),
        ])

    def products_by_price(self):
        return self._record('products_by_price', [
            Product(product_id=1, product_name="Laptop", price=Decimal("999.5")),
            Product(product_id=2, product_name="Mouse", price=Decimal("20")),
        ])

    def pending_orders(self):
        return self._record('pending_orders', [
            PendingOrderTotal(order_id=10, order_date=datetime(2026, 10, 1, 9, 30),
                              total_price=Decimal("969.97"),
                              customer_first_name="Ada", customer_last_name="Lovelace"),
        ])

    def order_counts(self):
        return self._record('order_counts', [
            CustomerOrderCount(customer_id=1, order_count=2,
                               customer_first_name="Ada", customer_last_name="Lovelace"),
            CustomerOrderCount(customer_id=2, order_count=0,
                               customer_first_name="Alan", customer_last_name="Turing"),
        ])

    def top_customers(self, limit=3):
        return self._record('top_customers', [
            CustomerOrderValue(customer_id=1, total_order_value=Decimal("1200"),
                               customer_first_name="Ada", customer_last_name="Lovelace"),
        ])

    def recent_orders(self, since=None):
        return self._record('recent_orders', [
            RecentOrder(order_id=11, order_date=datetime(2026, 10, 15, 8, 0),
                        customer_first_name="Alan", customer_last_name="Turing"),
        ])

    def product_sales(self):
        return self._record('product_sales', [
            ProductSales(product_id=2, product_name="Mouse", total_sold=7),
            ProductSales(product_id=3, product_name="Cable", total_sold=0),
        ])

    def discounted_orders(self):
        return self._record('discounted_orders', [])

    def category_report(self, category_name="Electronics"):
        return self._record('category_report', self._category_report)


@pytest.fixture
def fake_service():
    return FakeReportService()


@pytest.fixture
def fake_service_factory():
    """Build a FakeReportService with a custom category report"""
    return FakeReportService


@pytest.fixture
def electronics_category():
    return Category(category_id=5, category_name="Electronics")


@pytest.fixture
def best_stock_store_b():
    return Stock(store_id=2, product_id=1, quantity_in_stock=12, store_name="StoreB")
