"""
Report Generator

The ten read-only WebStore reports. Each task method fetches its data
through ReportService, renders it and writes one labeled section to the
output sink. Store errors propagate unchanged to the caller.

Usage:
    with db_connection() as conn:
        generator = ReportGenerator(conn)
        generator.task01_list_all_customers()
        generator.run([3, 8])
"""
import io
import sys
import logging
from collections import namedtuple
from datetime import datetime
from typing import Callable, Iterable, List, Optional, TextIO

from webstore.core.config import settings
from webstore.services import report_renderer as renderer
from webstore.services.report_service import ELECTRONICS_CATEGORY, ReportService

logger = logging.getLogger(__name__)

ReportDefinition = namedtuple('ReportDefinition', ['number', 'title', 'method'])

REPORTS = {
    1: ReportDefinition(1, "List All Customers", "task01_list_all_customers"),
    2: ReportDefinition(2, "List Orders With Item Count", "task02_list_orders_with_item_count"),
    3: ReportDefinition(3, "List Products By Descending Price", "task03_list_products_by_descending_price"),
    4: ReportDefinition(4, "List Pending Orders With Total Price", "task04_list_pending_orders_with_total_price"),
    5: ReportDefinition(5, "Order Count Per Customer", "task05_order_count_per_customer"),
    6: ReportDefinition(6, "Top 3 Customers By Order Value", "task06_top3_customers_by_order_value"),
    7: ReportDefinition(7, "Recent Orders", "task07_recent_orders"),
    8: ReportDefinition(8, "Total Sold Per Product", "task08_total_sold_per_product"),
    9: ReportDefinition(9, "Discounted Orders", "task09_discounted_orders"),
    10: ReportDefinition(10, "Electronics Category Cross-Report", "task10_category_cross_report"),
}


def get_report(number: int) -> ReportDefinition:
    """Look up a report definition, raising ValueError for unknown numbers"""
    try:
        return REPORTS[number]
    except KeyError:
        raise ValueError(f"Unknown report number: {number} (expected 1-{len(REPORTS)})") from None


class ReportGenerator:
    """
    Writes the WebStore reports as text

    Args:
        conn: psycopg2 connection using RealDictCursor; owned by the caller
        out: Text sink (default sys.stdout, resolved at write time)
        clock: Returns "now" for the recent-orders window (default datetime.now)
        date_format: strftime format for dates (default settings.REPORT_DATE_FORMAT)
    """

    def __init__(
        self,
        conn,
        out: Optional[TextIO] = None,
        clock: Optional[Callable[[], datetime]] = None,
        date_format: Optional[str] = None
    ):
        self.service = ReportService(conn, clock=clock)
        self._out = out
        self.date_format = date_format or settings.REPORT_DATE_FORMAT

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _write_section(self, number: int, lines: List[str]) -> None:
        print(renderer.section_header(number, REPORTS[number].title), file=self.out)
        for line in lines:
            print(line, file=self.out)
        logger.debug(f"Report {number}: wrote {len(lines)} lines")

    def task01_list_all_customers(self) -> None:
        """Every customer as "First Last - Email" """
        customers = self.service.list_customers()
        self._write_section(1, renderer.render_customers(customers))

    def task02_list_orders_with_item_count(self) -> None:
        """Every order with customer, status and summed item quantity"""
        rows = self.service.orders_with_item_count()
        self._write_section(2, renderer.render_orders_with_item_count(rows))

    def task03_list_products_by_descending_price(self) -> None:
        products = self.service.products_by_price()
        self._write_section(3, renderer.render_products_by_price(products))

    def task04_list_pending_orders_with_total_price(self) -> None:
        """Orders with status exactly "Pending", with computed totals"""
        rows = self.service.pending_orders()
        self._write_section(4, renderer.render_pending_orders(rows, self.date_format))

    def task05_order_count_per_customer(self) -> None:
        rows = self.service.order_counts()
        self._write_section(5, renderer.render_order_counts(rows))

    def task06_top3_customers_by_order_value(self) -> None:
        rows = self.service.top_customers()
        self._write_section(6, renderer.render_top_customers(rows))

    def task07_recent_orders(self) -> None:
        """Orders from the last 30 days, relative to the clock at call time"""
        rows = self.service.recent_orders()
        self._write_section(7, renderer.render_recent_orders(rows, self.date_format))

    def task08_total_sold_per_product(self) -> None:
        rows = self.service.product_sales()
        self._write_section(8, renderer.render_product_sales(rows))

    def task09_discounted_orders(self) -> None:
        orders = self.service.discounted_orders()
        self._write_section(9, renderer.render_discounted_orders(orders))

    def task10_category_cross_report(self) -> None:
        """
        Electronics orders with the store where each product is best stocked

        A missing "Electronics" category is reported, not raised.
        """
        report = self.service.category_report(ELECTRONICS_CATEGORY)
        self._write_section(10, renderer.render_category_report(report, ELECTRONICS_CATEGORY))

    def run_report(self, number: int, separate: bool = False) -> None:
        """
        Run one report by number (1-10)

        Args:
            separate: Write a blank line first, to follow a previous section
        """
        report = get_report(number)
        if separate:
            print("", file=self.out)
        getattr(self, report.method)()

    def run(self, numbers: Optional[Iterable[int]] = None) -> None:
        """
        Run several reports in order (default: all ten)

        Stops at the first failing report; callers that want to keep going
        run reports one at a time (see webstore.cli).
        """
        for index, number in enumerate(numbers if numbers is not None else sorted(REPORTS)):
            self.run_report(number, separate=index > 0)


def render_report_text(
    conn,
    number: int,
    clock: Optional[Callable[[], datetime]] = None,
    date_format: Optional[str] = None
) -> str:
    """Run one report into a string instead of stdout"""
    buffer = io.StringIO()
    ReportGenerator(conn, out=buffer, clock=clock, date_format=date_format).run_report(number)
    return buffer.getvalue()
