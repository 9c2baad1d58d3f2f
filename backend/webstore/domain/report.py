"""
Report Row Models

Flat result rows produced by the aggregate report queries. Orders-based
reports that need line items (discounted orders, category cross-report)
reuse the Order/OrderItem models instead.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict
from datetime import datetime
from decimal import Decimal

from webstore.domain.customer import full_name
from webstore.domain.order import Order
from webstore.domain.product import Category, Product, Stock


class _CustomerNamed(BaseModel):
    """Rows that carry a joined customer name"""

    customer_first_name: Optional[str] = Field(None, description="Customer first name (from JOIN)")
    customer_last_name: Optional[str] = Field(None, description="Customer last name (from JOIN)")

    model_config = ConfigDict(from_attributes=True)

    @property
    def customer_name(self) -> str:
        return full_name(self.customer_first_name, self.customer_last_name)

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['customer_name'] = self.customer_name
        for key, value in data.items():
            if isinstance(value, Decimal):
                data[key] = float(value)
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
        return data


class OrderItemCount(_CustomerNamed):
    """Order with the summed quantity of its items"""

    order_id: int = Field(..., description="Order ID")
    order_status: Optional[str] = Field(None, description="Order status")
    item_count: int = Field(0, description="Sum of item quantities (0 if no items)")


class PendingOrderTotal(_CustomerNamed):
    """Pending order with its computed total"""

    order_id: int = Field(..., description="Order ID")
    order_date: datetime = Field(..., description="Order date")
    total_price: Decimal = Field(Decimal('0'), description="Sum of unit_price * quantity - discount")


class RecentOrder(_CustomerNamed):
    """Order placed inside the recent-orders window"""

    order_id: int = Field(..., description="Order ID")
    order_date: datetime = Field(..., description="Order date")


class CustomerOrderCount(_CustomerNamed):
    """Number of orders placed by one customer"""

    customer_id: int = Field(..., description="Customer ID")
    order_count: int = Field(0, description="Number of orders (0 if none)")


class CustomerOrderValue(_CustomerNamed):
    """Lifetime order value of one customer"""

    customer_id: int = Field(..., description="Customer ID")
    total_order_value: Decimal = Field(Decimal('0'), description="Sum over all order items")


class ProductSales(BaseModel):
    """Total units sold of one product"""

    product_id: int = Field(..., description="Product ID")
    product_name: str = Field(..., description="Product name")
    total_sold: int = Field(0, description="Units sold across all orders (0 if none)")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return self.model_dump()


class CategoryReport(BaseModel):
    """
    Orders containing products of one category, plus where each of those
    products is best stocked

    Fields:
        category: The resolved category
        products: Products linked to the category
        orders: Orders containing at least one of the products; each order's
            items are restricted to those products
        best_stock: product_id -> stock row with the highest quantity;
            products without stock rows are absent
    """

    category: Category
    products: List[Product] = Field(default_factory=list)
    orders: List[Order] = Field(default_factory=list)
    best_stock: Dict[int, Stock] = Field(default_factory=dict)

    def best_stock_for(self, product_id: int) -> Optional[Stock]:
        return self.best_stock.get(product_id)

    def to_dict(self) -> dict:
        orders = []
        for order in self.orders:
            order_data = order.to_dict()
            for item_data in order_data['items']:
                stock = self.best_stock_for(item_data['product_id'])
                item_data['best_stock'] = stock.to_dict() if stock else None
            orders.append(order_data)

        return {
            'category': self.category.to_dict(),
            'products': [product.to_dict() for product in self.products],
            'orders': orders,
        }
