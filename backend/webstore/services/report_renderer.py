"""
Text rendering for the reports

Pure functions: report data in, list of output lines out. No I/O here.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

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

DEFAULT_DATE_FORMAT = "%m/%d/%Y"


def format_money(value: Union[Decimal, float, int]) -> str:
    """Currency with a dollar sign and exactly two decimals"""
    return f"${value:.2f}"


def format_date(value: datetime, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    return value.strftime(date_format)


def section_header(number: int, title: str) -> str:
    return f"=== Task {number:02d}: {title} ==="


def render_customers(customers: List[Customer]) -> List[str]:
    return [f"{c.full_name} - {c.email or ''}" for c in customers]


def render_orders_with_item_count(rows: List[OrderItemCount]) -> List[str]:
    return [
        f"Order #{row.order_id} - {row.customer_name} - Status: {row.order_status} - Items: {row.item_count}"
        for row in rows
    ]


def render_products_by_price(products: List[Product]) -> List[str]:
    return [f"{p.product_name} - {format_money(p.price)}" for p in products]


def render_pending_orders(rows: List[PendingOrderTotal], date_format: str = DEFAULT_DATE_FORMAT) -> List[str]:
    return [
        f"Order #{row.order_id} - {row.customer_name} - "
        f"Date: {format_date(row.order_date, date_format)} - Total: {format_money(row.total_price)}"
        for row in rows
    ]


def render_order_counts(rows: List[CustomerOrderCount]) -> List[str]:
    return [f"{row.customer_name} - Orders: {row.order_count}" for row in rows]


def render_top_customers(rows: List[CustomerOrderValue]) -> List[str]:
    return [
        f"{row.customer_name} - Total Order Value: {format_money(row.total_order_value)}"
        for row in rows
    ]


def render_recent_orders(rows: List[RecentOrder], date_format: str = DEFAULT_DATE_FORMAT) -> List[str]:
    return [
        f"Order #{row.order_id} - Date: {format_date(row.order_date, date_format)} - Customer: {row.customer_name}"
        for row in rows
    ]


def render_product_sales(rows: List[ProductSales]) -> List[str]:
    return [f"{row.product_name} - Total Sold: {row.total_sold}" for row in rows]


def render_discounted_orders(orders: List[Order]) -> List[str]:
    """
    One block per order listing only its discounted items

    Items with a zero discount are skipped even if the repository loaded them.
    """
    lines = []
    for order in orders:
        lines.append(f"Order #{order.order_id} - Customer: {order.customer_name}")
        lines.append("  Discounted Products:")
        for item in order.items:
            if not item.is_discounted:
                continue
            lines.append(f"  - {item.product_name} (Discount: {format_money(item.discount)})")
        lines.append("")
    return lines


def render_category_report(report: Optional[CategoryReport], category_name: str) -> List[str]:
    """
    Orders containing the category's products and where each is best stocked

    A missing category renders a single not-found line.
    """
    if report is None:
        return [f"No '{category_name}' category found in the database."]

    lines = [f"Orders containing {report.category.category_name} products:"]
    for order in report.orders:
        lines.append(f"Order #{order.order_id} - Customer: {order.customer_name}")
        lines.append(f"  {report.category.category_name} Products:")
        for item in order.items:
            lines.append(f"  - {item.product_name} (Quantity: {item.quantity})")
            stock = report.best_stock_for(item.product_id)
            if stock is not None:
                lines.append(f"    Best stocked at: {stock.store.store_name} with {stock.quantity_in_stock} units")
            else:
                lines.append("    No stock information available")
        lines.append("")
    return lines
