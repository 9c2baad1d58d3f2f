"""
Report data service

Builds the structured data behind each of the ten reports from the
repositories. Rendering lives in report_renderer; this module only queries.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from webstore.domain import (
    CategoryReport,
    Customer,
    CustomerOrderCount,
    CustomerOrderValue,
    Order,
    OrderItemCount,
    PendingOrderTotal,
    Product,
    ProductSales,
    RecentOrder,
)
from webstore.repositories import CustomerRepository, OrderRepository, ProductRepository

logger = logging.getLogger(__name__)

PENDING_STATUS = "Pending"
TOP_CUSTOMERS_LIMIT = 3
RECENT_ORDERS_DAYS = 30
ELECTRONICS_CATEGORY = "Electronics"


class ReportService:
    """
    Read-only report queries over one injected connection

    Args:
        conn: psycopg2 connection using RealDictCursor; owned by the caller
        clock: Returns "now" for time-relative reports (default datetime.now)
    """

    def __init__(self, conn, clock: Optional[Callable[[], datetime]] = None):
        self.conn = conn
        self.clock = clock or datetime.now
        self.customers = CustomerRepository(conn)
        self.orders = OrderRepository(conn)
        self.products = ProductRepository(conn)

    def list_customers(self) -> List[Customer]:
        return self.customers.find_all()

    def orders_with_item_count(self) -> List[OrderItemCount]:
        return self.orders.get_item_counts()

    def products_by_price(self) -> List[Product]:
        return self.products.find_all_by_price_desc()

    def pending_orders(self) -> List[PendingOrderTotal]:
        """Orders whose status is exactly "Pending", with totals"""
        return self.orders.find_totals_by_status(PENDING_STATUS)

    def order_counts(self) -> List[CustomerOrderCount]:
        return self.customers.get_order_counts()

    def top_customers(self, limit: int = TOP_CUSTOMERS_LIMIT) -> List[CustomerOrderValue]:
        return self.customers.get_top_by_order_value(limit)

    def recent_orders_cutoff(self) -> datetime:
        """Inclusive lower bound of the recent-orders window, read from the clock"""
        return self.clock() - timedelta(days=RECENT_ORDERS_DAYS)

    def recent_orders(self, since: Optional[datetime] = None) -> List[RecentOrder]:
        """
        Orders placed within the last 30 days of the clock's current time

        Args:
            since: Precomputed cutoff from recent_orders_cutoff() (default: read the clock now)
        """
        if since is None:
            since = self.recent_orders_cutoff()
        return self.orders.find_placed_since(since)

    def product_sales(self) -> List[ProductSales]:
        return self.products.get_sales_totals()

    def discounted_orders(self) -> List[Order]:
        return self.orders.find_discounted()

    def category_report(self, category_name: str = ELECTRONICS_CATEGORY) -> Optional[CategoryReport]:
        """
        Orders containing products of a category, with best-stocked stores

        Returns:
            None when the category does not exist (no further queries are
            issued); otherwise the assembled CategoryReport
        """
        category = self.products.find_category_by_name(category_name)
        if category is None:
            logger.info(f"Category {category_name!r} not found")
            return None

        products = self.products.find_by_category(category.category_id)
        product_ids = [product.product_id for product in products]

        return CategoryReport(
            category=category,
            products=products,
            orders=self.orders.find_containing_products(product_ids),
            best_stock=self.products.find_best_stock(product_ids),
        )
