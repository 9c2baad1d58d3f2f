"""
Product Repository - Data Access Layer for the catalog

Products, their categories and the per-store stock levels.
"""
import logging
from typing import Dict, List, Optional, Sequence

from webstore.domain.product import Category, Product, Stock
from webstore.domain.report import ProductSales

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Repository for Product, Category and Stock data access

    Works on an injected psycopg2 connection (RealDictCursor) and never
    closes it.
    """

    def __init__(self, conn):
        self.conn = conn

    def find_all_by_price_desc(self) -> List[Product]:
        """
        Every product, most expensive first

        Returns:
            Products ordered by price descending, ties by product ID
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT product_id, product_name, price
                FROM products
                ORDER BY price DESC, product_id
            """)

            rows = cursor.fetchall()
            logger.debug(f"products by price: {len(rows)} rows")
            return [Product(**row) for row in rows]

        finally:
            cursor.close()

    def get_sales_totals(self) -> List[ProductSales]:
        """
        Units sold per product across all orders

        Returns:
            One row per product, best sellers first, ties by product ID;
            products never ordered have total_sold 0
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    p.product_id,
                    p.product_name,
                    COALESCE(SUM(oi.quantity), 0) AS total_sold
                FROM products p
                LEFT JOIN order_items oi ON oi.product_id = p.product_id
                GROUP BY p.product_id, p.product_name
                ORDER BY total_sold DESC, p.product_id
            """)

            rows = cursor.fetchall()
            logger.debug(f"product sales totals: {len(rows)} rows")
            return [ProductSales(**row) for row in rows]

        finally:
            cursor.close()

    def find_category_by_name(self, category_name: str) -> Optional[Category]:
        """
        Find a category by exact name

        Returns:
            The first matching category (lowest ID) or None if not found
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT category_id, category_name
                FROM categories
                WHERE category_name = %s
                ORDER BY category_id
                LIMIT 1
            """, (category_name,))

            row = cursor.fetchone()
            if not row:
                return None

            return Category(**row)

        finally:
            cursor.close()

    def find_by_category(self, category_id: int) -> List[Product]:
        """
        Products linked to a category

        Returns:
            Products in primary key order
        """
        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT p.product_id, p.product_name, p.price
                FROM products p
                JOIN product_categories pc ON pc.product_id = p.product_id
                WHERE pc.category_id = %s
                ORDER BY p.product_id
            """, (category_id,))

            rows = cursor.fetchall()
            logger.debug(f"products in category {category_id}: {len(rows)} rows")
            return [Product(**row) for row in rows]

        finally:
            cursor.close()

    def find_best_stock(self, product_ids: Sequence[int]) -> Dict[int, Stock]:
        """
        For each product, the store holding the most units

        Ties on quantity go to the lowest store ID. Rows with an unknown
        (NULL) quantity are ignored.

        Args:
            product_ids: Products to look up

        Returns:
            product_id -> Stock (with store_name); products without any stock
            row are absent from the dict
        """
        if not product_ids:
            return {}

        cursor = self.conn.cursor()

        try:
            cursor.execute("""
                SELECT DISTINCT ON (s.product_id)
                    s.store_id, s.product_id, s.quantity_in_stock,
                    st.store_name
                FROM stocks s
                JOIN stores st ON st.store_id = s.store_id
                WHERE s.product_id = ANY(%s)
                  AND s.quantity_in_stock IS NOT NULL
                ORDER BY s.product_id, s.quantity_in_stock DESC, s.store_id
            """, (list(product_ids),))

            rows = cursor.fetchall()
            logger.debug(f"best stock for {len(product_ids)} products: {len(rows)} rows")
            return {row['product_id']: Stock(**row) for row in rows}

        finally:
            cursor.close()
