"""
Customer Repository - Data Access Layer for Customers

Customer listings and per-customer aggregates over their orders.
"""
import logging
from typing import List

from webstore.domain.customer import Customer
from webstore.domain.report import CustomerOrderCount, CustomerOrderValue

logger = logging.getLogger(__name__)


class CustomerRepository:
    """
    Repository for Customer data access

    Works on an injected psycopg2 connection (RealDictCursor). The
    repository opens and closes its own cursors but never the connection.
    """

    def __init__(self, conn):
        self.conn = conn

    def find_all(self) -> List[Customer]:
        """
        Find every customer

        Returns:
            Customers in primary key order
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT customer_id, first_name, last_name, email
                FROM customers
                ORDER BY customer_id
            """)

            rows = cursor.fetchall()
            logger.debug(f"customers: {len(rows)} rows")
            return [Customer(**row) for row in rows]

        finally:
            cursor.close()

    def get_order_counts(self) -> List[CustomerOrderCount]:
        """
        Count orders per customer

        Customers without orders are included with a count of 0.

        Returns:
            One row per customer in primary key order
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    c.customer_id,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name,
                    COUNT(o.order_id) AS order_count
                FROM customers c
                LEFT JOIN orders o ON o.customer_id = c.customer_id
                GROUP BY c.customer_id, c.first_name, c.last_name
                ORDER BY c.customer_id
            """)

            rows = cursor.fetchall()
            logger.debug(f"customer order counts: {len(rows)} rows")
            return [CustomerOrderCount(**row) for row in rows]

        finally:
            cursor.close()

    def get_top_by_order_value(self, limit: int = 3) -> List[CustomerOrderValue]:
        """
        Rank customers by the value of everything they ordered

        Value is SUM(unit_price * quantity - discount) across all items of
        all their orders; customers without orders count as 0.

        Args:
            limit: Maximum rows to return

        Returns:
            At most `limit` rows, highest value first, ties by customer ID
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    c.customer_id,
                    c.first_name AS customer_first_name,
                    c.last_name AS customer_last_name,
                    COALESCE(SUM(oi.unit_price * oi.quantity - oi.discount), 0) AS total_order_value
                FROM customers c
                LEFT JOIN orders o ON o.customer_id = c.customer_id
                LEFT JOIN order_items oi ON oi.order_id = o.order_id
                GROUP BY c.customer_id, c.first_name, c.last_name
                ORDER BY total_order_value DESC, c.customer_id
                LIMIT %s
            """, (limit,))

            rows = cursor.fetchall()
            logger.debug(f"top customers by order value: {len(rows)} rows")
            return [CustomerOrderValue(**row) for row in rows]

        finally:
            cursor.close()
