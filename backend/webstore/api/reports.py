"""
Reports API Endpoints

JSON access to the data behind each report, plus the rendered text of any
report by number. Every request gets its own connection.
"""
from contextlib import ExitStack

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from typing import List

from webstore.core.database import db_connection
from webstore.services.report_generator import REPORTS, ReportDefinition, get_report, render_report_text
from webstore.services.report_service import ELECTRONICS_CATEGORY, ReportService

router = APIRouter()

REPORT_PATHS = {
    1: "/customers",
    2: "/orders/item-counts",
    3: "/products/by-price",
    4: "/orders/pending",
    5: "/customers/order-counts",
    6: "/customers/top",
    7: "/orders/recent",
    8: "/products/sales",
    9: "/orders/discounted",
    10: "/categories/electronics",
}


def get_report_connection():
    """FastAPI dependency: one read connection per request, always closed"""
    with ExitStack() as stack:
        try:
            conn = stack.enter_context(db_connection())
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Error connecting to database: {str(e)}")
        yield conn


def get_report_service(conn=Depends(get_report_connection)) -> ReportService:
    return ReportService(conn)


def _envelope(rows: List) -> dict:
    return {
        "status": "success",
        "count": len(rows),
        "data": [row.to_dict() for row in rows]
    }


@router.get("/")
def list_reports():
    """Catalog of the available reports"""
    return {
        "status": "success",
        "data": [
            {"number": report.number, "title": report.title, "path": REPORT_PATHS[report.number]}
            for report in REPORTS.values()
        ]
    }


@router.get("/customers")
def get_customers(service: ReportService = Depends(get_report_service)):
    """Report 1: all customers"""
    try:
        return _envelope(service.list_customers())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching customers: {str(e)}")


@router.get("/orders/item-counts")
def get_orders_with_item_count(service: ReportService = Depends(get_report_service)):
    """Report 2: orders with summed item quantities"""
    try:
        return _envelope(service.orders_with_item_count())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching order item counts: {str(e)}")


@router.get("/products/by-price")
def get_products_by_price(service: ReportService = Depends(get_report_service)):
    """Report 3: products by price, highest first"""
    try:
        return _envelope(service.products_by_price())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/orders/pending")
def get_pending_orders(service: ReportService = Depends(get_report_service)):
    """Report 4: "Pending" orders with totals"""
    try:
        return _envelope(service.pending_orders())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching pending orders: {str(e)}")


@router.get("/customers/order-counts")
def get_order_counts(service: ReportService = Depends(get_report_service)):
    """Report 5: order count per customer"""
    try:
        return _envelope(service.order_counts())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching order counts: {str(e)}")


@router.get("/customers/top")
def get_top_customers(service: ReportService = Depends(get_report_service)):
    """Report 6: top 3 customers by order value"""
    try:
        return _envelope(service.top_customers())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching top customers: {str(e)}")


@router.get("/orders/recent")
def get_recent_orders(service: ReportService = Depends(get_report_service)):
    """Report 7: orders from the last 30 days"""
    try:
        cutoff = service.recent_orders_cutoff()
        response = _envelope(service.recent_orders(since=cutoff))
        response["since"] = cutoff.isoformat()
        return response
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching recent orders: {str(e)}")


@router.get("/products/sales")
def get_product_sales(service: ReportService = Depends(get_report_service)):
    """Report 8: units sold per product"""
    try:
        return _envelope(service.product_sales())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching product sales: {str(e)}")


@router.get("/orders/discounted")
def get_discounted_orders(service: ReportService = Depends(get_report_service)):
    """Report 9: orders with discounted items (only those items listed)"""
    try:
        return _envelope(service.discounted_orders())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching discounted orders: {str(e)}")


@router.get("/categories/electronics")
def get_electronics_report(service: ReportService = Depends(get_report_service)):
    """Report 10: electronics orders with best-stocked stores"""
    try:
        report = service.category_report(ELECTRONICS_CATEGORY)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching category report: {str(e)}")

    if report is None:
        return {
            "status": "success",
            "found": False,
            "message": f"No '{ELECTRONICS_CATEGORY}' category found in the database.",
            "data": None
        }

    return {
        "status": "success",
        "found": True,
        "count": len(report.orders),
        "data": report.to_dict()
    }


def get_report_definition(number: int) -> ReportDefinition:
    """Resolve the report number before a connection is opened"""
    try:
        return get_report(number)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{number}/text", response_class=PlainTextResponse)
def get_report_text(
    report: ReportDefinition = Depends(get_report_definition),
    conn=Depends(get_report_connection)
):
    """Rendered text of one report (1-10)"""
    try:
        return render_report_text(conn, report.number)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error rendering report {report.number}: {str(e)}")
