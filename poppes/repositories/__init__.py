"""Repositories package - build the configured product/order store."""

from flask import Flask, current_app

from .base import IdentityProvider, OrderRepository, ProductRepository
from .memory import MemoryOrderRepository, MemoryProductRepository
from .sql import SqlIdentityProvider, SqlOrderRepository, SqlProductRepository

EXTENSION_KEY = 'poppes.store'


class Store:
    """The repositories a request handler works with."""

    def __init__(self, products, orders, identity=None):
        self.products = products
        self.orders = orders
        self.identity = identity or SqlIdentityProvider()


def build_store(app: Flask):
    """Create the store selected by ``STORE_BACKEND``."""
    backend = app.config.get('STORE_BACKEND', 'sql')

    if backend == 'sql':
        return Store(SqlProductRepository(), SqlOrderRepository())

    if backend == 'memory':
        return Store(MemoryProductRepository(), MemoryOrderRepository())

    if backend == 'dynamodb':
        from .dynamodb import DynamoOrderRepository, DynamoProductRepository, connect_tables
        products_table, orders_table = connect_tables(
            app.config['AWS_REGION'],
            app.config['DYNAMODB_PRODUCTS_TABLE'],
            app.config['DYNAMODB_ORDERS_TABLE'],
        )
        return Store(DynamoProductRepository(products_table), DynamoOrderRepository(orders_table))

    raise ValueError(f'Unknown STORE_BACKEND: {backend!r}')


def get_store():
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    'Store',
    'build_store',
    'get_store',
    'ProductRepository',
    'OrderRepository',
    'IdentityProvider',
]
