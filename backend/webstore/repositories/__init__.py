"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from the report logic.
"""
from webstore.repositories.customer_repository import CustomerRepository
from webstore.repositories.order_repository import OrderRepository
from webstore.repositories.product_repository import ProductRepository

__all__ = [
    'CustomerRepository',
    'OrderRepository',
    'ProductRepository'
]
