"""
Unit tests for CustomerRepository

These tests validate repository logic without requiring a database connection.
"""
import pytest
from decimal import Decimal

from webstore.repositories.customer_repository import CustomerRepository
from webstore.domain import Customer, CustomerOrderCount, CustomerOrderValue


class TestCustomerRepository:
    """Test CustomerRepository methods"""

    def test_find_all_returns_customers(self, mock_conn, mock_cursor):
        """Test find_all maps rows to Customer models in retrieval order"""
        mock_cursor.fetchall.return_value = [
            {'customer_id': 2, 'first_name': 'Alan', 'last_name': 'Turing', 'email': 'alan@example.com'},
            {'customer_id': 1, 'first_name': 'Ada', 'last_name': 'Lovelace', 'email': None},
        ]

        customers = CustomerRepository(mock_conn).find_all()

        assert [c.customer_id for c in customers] == [2, 1]
        assert all(isinstance(c, Customer) for c in customers)
        assert customers[0].full_name == 'Alan Turing'
        assert customers[1].email is None

        mock_cursor.execute.assert_called_once()
        mock_cursor.close.assert_called_once()

    def test_repository_never_closes_injected_connection(self, mock_conn, mock_cursor):
        """The caller owns the connection"""
        mock_cursor.fetchall.return_value = []

        CustomerRepository(mock_conn).find_all()

        mock_conn.close.assert_not_called()

    def test_cursor_closed_when_query_fails(self, mock_conn, mock_cursor):
        """Store errors propagate and the cursor is still closed"""
        mock_cursor.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            CustomerRepository(mock_conn).get_order_counts()

        mock_cursor.close.assert_called_once()

    def test_get_order_counts_includes_zero_counts(self, mock_conn, mock_cursor):
        """Customers without orders come back with order_count 0"""
        mock_cursor.fetchall.return_value = [
            {'customer_id': 1, 'customer_first_name': 'Ada', 'customer_last_name': 'Lovelace', 'order_count': 3},
            {'customer_id': 2, 'customer_first_name': 'Alan', 'customer_last_name': 'Turing', 'order_count': 0},
        ]

        rows = CustomerRepository(mock_conn).get_order_counts()

        assert all(isinstance(r, CustomerOrderCount) for r in rows)
        assert [(r.customer_name, r.order_count) for r in rows] == [
            ('Ada Lovelace', 3),
            ('Alan Turing', 0),
        ]
        sql = mock_cursor.execute.call_args[0][0]
        assert 'LEFT JOIN orders' in sql

    def test_get_top_by_order_value_passes_limit(self, mock_conn, mock_cursor):
        """The limit is sent as a query parameter and results are mapped"""
        mock_cursor.fetchall.return_value = [
            {'customer_id': 3, 'customer_first_name': 'Grace', 'customer_last_name': 'Hopper',
             'total_order_value': Decimal('1500.00')},
        ]

        rows = CustomerRepository(mock_conn).get_top_by_order_value(3)

        assert len(rows) == 1
        assert isinstance(rows[0], CustomerOrderValue)
        assert rows[0].total_order_value == Decimal('1500.00')

        sql, params = mock_cursor.execute.call_args[0]
        assert params == (3,)
        assert 'ORDER BY total_order_value DESC, c.customer_id' in sql
        assert 'oi.unit_price * oi.quantity - oi.discount' in sql

    def test_get_top_by_order_value_rejects_negative_limit(self, mock_conn, mock_cursor):
        with pytest.raises(ValueError):
            CustomerRepository(mock_conn).get_top_by_order_value(-1)

        mock_cursor.execute.assert_not_called()
