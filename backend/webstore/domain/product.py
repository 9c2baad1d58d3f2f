"""
Catalog and Inventory Domain Models

Products, the categories that group them, and the per-store stock levels.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal


class Product(BaseModel):
    """
    Product domain model - represents a product in the catalog

    Fields:
        product_id: Primary key
        product_name: Product name
        price: Current list price
    """

    product_id: int = Field(..., description="Product ID")
    product_name: str = Field(..., description="Product name")
    price: Decimal = Field(..., description="List price", ge=0)

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['price'] = float(data['price'])
        return data


class Category(BaseModel):
    """Product category (many-to-many with products)"""

    category_id: int = Field(..., description="Category ID")
    category_name: str = Field(..., description="Category name")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return self.model_dump()


class Store(BaseModel):
    """Physical store holding stock"""

    store_id: int = Field(..., description="Store ID")
    store_name: str = Field(..., description="Store name")

    model_config = ConfigDict(from_attributes=True)


class Stock(BaseModel):
    """
    Stock level of one product in one store

    Fields:
        store_id: Store holding the stock
        product_id: Stocked product
        quantity_in_stock: Units on hand

        # Related data (optional, from JOIN)
        store_name: Store name
    """

    store_id: int = Field(..., description="Store ID")
    product_id: int = Field(..., description="Product ID")
    quantity_in_stock: int = Field(..., description="Units in stock")

    store_name: Optional[str] = Field(None, description="Store name (from JOIN)")

    model_config = ConfigDict(from_attributes=True)

    @property
    def store(self) -> Optional[Store]:
        """Store resolved from the joined columns"""
        if self.store_name is None:
            return None
        return Store(store_id=self.store_id, store_name=self.store_name)

    def to_dict(self) -> dict:
        return self.model_dump()
