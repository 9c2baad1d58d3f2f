"""
Order Repository - Data Access Layer for Orders

Handles all order queries and returns Order domain models or report rows
with the customer name joined in.
"""
import logging
from datetime import datetime
from typing import List, Sequence

from webstore.domain.order import Order, OrderItem
from webstore.domain.report import OrderItemCount, PendingOrderTotal, RecentOrder

logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here. Works on an injected
    psycopg2 connection (RealDictCursor) and never closes it.
    """

    def __init__(self, conn):
        self.conn = conn

    def get_item_counts(self) -> List[OrderItemCount]:
        """
        Every order with its customer and the summed quantity of its items

        Returns:
            One row per order in primary key order; orders without items
            have item_count 0
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    o.order_id,
                    o.order_status,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name,
                    COALESCE(SUM(oi.quantity), 0) AS item_count
                FROM orders o
                JOIN customers c ON c.customer_id = o.customer_id
                LEFT JOIN order_items oi ON oi.order_id = o.order_id
                GROUP BY o.order_id, o.order_status, c.first_name, c.last_name
                ORDER BY o.order_id
            """)

            rows = cursor.fetchall()
            logger.debug(f"order item counts: {len(rows)} rows")
            return [OrderItemCount(**row) for row in rows]

        finally:
            cursor.close()

    def find_totals_by_status(self, status: str) -> List[PendingOrderTotal]:
        """
        Orders with the given status and their computed totals

        Status comparison is exact and case-sensitive.

        Args:
            status: Order status to match (e.g. "Pending")

        Returns:
            Rows in primary key order; total is SUM(unit_price * quantity - discount)
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    o.order_id,
                    o.order_date,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name,
                    COALESCE(SUM(oi.unit_price * oi.quantity - oi.discount), 0) AS total_price
                FROM orders o
                JOIN customers c ON c.customer_id = o.customer_id
                LEFT JOIN order_items oi ON oi.order_id = o.order_id
                WHERE o.order_status = %s
                GROUP BY o.order_id, o.order_date, c.first_name, c.last_name
                ORDER BY o.order_id
            """, (status,))

            rows = cursor.fetchall()
            logger.debug(f"orders with status {status!r}: {len(rows)} rows")
            return [PendingOrderTotal(**row) for row in rows]

        finally:
            cursor.close()

    def find_placed_since(self, since: datetime) -> List[RecentOrder]:
        """
        Orders placed at or after a cutoff

        Args:
            since: Inclusive lower bound on order_date

        Returns:
            Rows in primary key order
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    o.order_id,
                    o.order_date,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name
                FROM orders o
                JOIN customers c ON c.customer_id = o.customer_id
                WHERE o.order_date >= %s
                ORDER BY o.order_id
            """, (since,))

            rows = cursor.fetchall()
            logger.debug(f"orders since {since.isoformat()}: {len(rows)} rows")
            return [RecentOrder(**row) for row in rows]

        finally:
            cursor.close()

    def find_discounted(self) -> List[Order]:
        """
        Orders with at least one discounted item

        Only the discounted items (discount > 0) are loaded into each order.

        Returns:
            Orders in primary key order with product names on their items
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    o.order_id, o.customer_id, o.order_status, o.order_date,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name
                FROM orders o
                JOIN customers c ON c.customer_id = o.customer_id
                WHERE EXISTS (
                    SELECT 1 FROM order_items oi
                    WHERE oi.order_id = o.order_id AND oi.discount > 0
                )
                ORDER BY o.order_id
            """)

            order_rows = cursor.fetchall()
            logger.debug(f"discounted orders: {len(order_rows)} rows")

            if not order_rows:
                return []

            order_ids = [row['order_id'] for row in order_rows]

            cursor.execute("""
                SELECT
                    oi.order_item_id, oi.order_id, oi.product_id,
                    oi.quantity, oi.unit_price, oi.discount,
                    p.product_name
                FROM order_items oi
                JOIN products p ON p.product_id = oi.product_id
                WHERE oi.order_id = ANY(%s) AND oi.discount > 0
                ORDER BY oi.order_id, oi.order_item_id
            """, (order_ids,))

            return self._build_orders(order_rows, cursor.fetchall())

        finally:
            cursor.close()

    def find_containing_products(self, product_ids: Sequence[int]) -> List[Order]:
        """
        Orders containing at least one of the given products

        Each order's items are restricted to the given products.

        Args:
            product_ids: Products to look for

        Returns:
            Orders in primary key order with product names on their items
        """
        if not product_ids:
            return []

        product_ids = list(product_ids)
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    o.order_id, o.customer_id, o.order_status, o.order_date,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name
                FROM orders o
                JOIN customers c ON c.customer_id = o.customer_id
                WHERE EXISTS (
                    SELECT 1 FROM order_items oi
                    WHERE oi.order_id = o.order_id AND oi.product_id = ANY(%s)
                )
                ORDER BY o.order_id
            """, (product_ids,))

            order_rows = cursor.fetchall()
            logger.debug(f"orders containing {len(product_ids)} products: {len(order_rows)} rows")

            if not order_rows:
                return []

            order_ids = [row['order_id'] for row in order_rows]

            cursor.execute("""
                SELECT
                    oi.order_item_id, oi.order_id, oi.product_id,
                    oi.quantity, oi.unit_price, oi.discount,
                    p.product_name
                FROM order_items oi
                JOIN products p ON p.product_id = oi.product_id
                WHERE oi.order_id = ANY(%s) AND oi.product_id = ANY(%s)
                ORDER BY oi.order_id, oi.order_item_id
            """, (order_ids, product_ids))

            return self._build_orders(order_rows, cursor.fetchall())

        finally:
            cursor.close()

    @staticmethod
    def _build_orders(order_rows, item_rows) -> List[Order]:
        """Group item rows under their orders (two queries instead of N+1)"""
        items_by_order = {}
        for item in item_rows:
            items_by_order.setdefault(item['order_id'], []).append(OrderItem(**item))

        orders = []
        for row in order_rows:
            order_dict = dict(row)
            order_dict['items'] = items_by_order.get(row['order_id'], [])
            orders.append(Order(**order_dict))

        return orders
