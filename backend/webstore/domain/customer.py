"""
Customer Domain Model

Represents a WebStore customer. Display names are derived from the
first/last name fields and never stored.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Join first and last name the way every report prints them ("First Last")"""
    return f"{first_name or ''} {last_name or ''}"


class Customer(BaseModel):
    """
    Customer domain model

    Fields:
        customer_id: Primary key
        first_name: Given name
        last_name: Family name
        email: Contact email (optional)
    """

    customer_id: int = Field(..., description="Customer ID")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: Optional[str] = Field(None, description="Customer email")

    model_config = ConfigDict(from_attributes=True)

    @property
    def full_name(self) -> str:
        """Customer name as "First Last" """
        return full_name(self.first_name, self.last_name)

    def to_dict(self) -> dict:
        """Convert to dictionary with computed fields"""
        data = self.model_dump()
        data['full_name'] = self.full_name
        return data
