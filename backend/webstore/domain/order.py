"""
Order Domain Models

Represents orders and their line items. Customer and product names are
optional fields filled from JOINs by the repositories.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from webstore.domain.customer import full_name


class OrderItem(BaseModel):
    """
    Order Item domain model - represents a line item in an order

    Fields:
        order_item_id: Primary key
        order_id: Parent order ID
        product_id: Reference to product catalog
        quantity: Number of units ordered
        unit_price: Price per unit at order time
        discount: Amount subtracted from the line total

        # From product catalog (optional, from JOIN)
        product_name: Product name
    """

    order_item_id: int = Field(..., description="Order item ID")
    order_id: int = Field(..., description="Parent order ID")
    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., description="Quantity ordered")
    unit_price: Decimal = Field(..., description="Price per unit", ge=0)
    discount: Decimal = Field(Decimal('0'), description="Discount amount")

    product_name: Optional[str] = Field(None, description="Product name (from JOIN)")

    model_config = ConfigDict(from_attributes=True)

    @property
    def line_total(self) -> Decimal:
        """unit_price * quantity - discount"""
        return self.unit_price * self.quantity - self.discount

    @property
    def is_discounted(self) -> bool:
        return self.discount > 0

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['line_total'] = float(self.line_total)

        for field in ['unit_price', 'discount']:
            if data.get(field) is not None:
                data[field] = float(data[field])

        return data


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        order_id: Primary key
        customer_id: Reference to customer
        order_status: Free-text status ("Pending", "Shipped", ...)
        order_date: When the order was placed

        # Related data (optional, from JOINs)
        customer_first_name: Customer first name
        customer_last_name: Customer last name

        # Order items (one-to-many relationship)
        items: Line items; repositories may restrict this to a subset
    """

    order_id: int = Field(..., description="Order ID")
    customer_id: int = Field(..., description="Customer ID")
    order_status: Optional[str] = Field(None, description="Order status")
    order_date: datetime = Field(..., description="Order date")

    customer_first_name: Optional[str] = Field(None, description="Customer first name (from JOIN)")
    customer_last_name: Optional[str] = Field(None, description="Customer last name (from JOIN)")

    items: List[OrderItem] = Field(default_factory=list, description="Order items")

    model_config = ConfigDict(from_attributes=True)

    @property
    def customer_name(self) -> str:
        return full_name(self.customer_first_name, self.customer_last_name)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> Decimal:
        """Sum of line totals of the loaded items"""
        return sum((item.line_total for item in self.items), Decimal('0'))

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump()

        data['customer_name'] = self.customer_name
        data['total_quantity'] = self.total_quantity
        data['total_price'] = float(self.total_price)
        data['order_date'] = self.order_date.isoformat()
        data['items'] = [item.to_dict() for item in self.items]

        return data
