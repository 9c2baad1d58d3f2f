"""
Domain Layer - Business Entities

Pydantic models for the WebStore entities and the rows the reports return.
"""
from webstore.domain.customer import Customer
from webstore.domain.order import Order, OrderItem
from webstore.domain.product import Product, Category, Store, Stock
from webstore.domain.report import (
    OrderItemCount,
    PendingOrderTotal,
    RecentOrder,
    CustomerOrderCount,
    CustomerOrderValue,
    ProductSales,
    CategoryReport,
)

__all__ = [
    'Customer',
    'Order',
    'OrderItem',
    'Product',
    'Category',
    'Store',
    'Stock',
    'OrderItemCount',
    'PendingOrderTotal',
    'RecentOrder',
    'CustomerOrderCount',
    'CustomerOrderValue',
    'ProductSales',
    'CategoryReport',
]
