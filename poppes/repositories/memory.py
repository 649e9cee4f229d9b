"""In-process store, used by the test-suite and ``STORE_BACKEND=memory``."""

import uuid
from dataclasses import replace
from datetime import datetime

from poppes.errors import NotFoundError
from poppes.repositories.base import (OrderRepository, ProductRepository, matches_search,
                                      newest_first, sort_products)


class MemoryProductRepository(ProductRepository):

    def __init__(self, products=()):
        self._products = {}
        for product in products:
            self.create(product)

    def list(self, in_stock=None, search=None, sort='newest', limit=None):
        products = [replace(p) for p in self._products.values()]
        if in_stock is not None:
            products = [p for p in products if p.in_stock == in_stock]
        if search:
            products = [p for p in products if matches_search(p, search)]
        products = sort_products(products, sort)
        return products[:limit] if limit else products

    def get(self, product_id):
        product = self._products.get(product_id)
        return replace(product) if product else None

    def create(self, product):
        now = datetime.utcnow()
        product_id = product.id or uuid.uuid4().hex
        self._products[product_id] = replace(product, id=product_id,
                                             created_at=product.created_at or now,
                                             updated_at=now)
        return product_id

    def update(self, product):
        current = self._products.get(product.id)
        if current is None:
            raise NotFoundError('Product', product.id)
        self._products[product.id] = replace(product, created_at=current.created_at,
                                             updated_at=datetime.utcnow())

    def delete(self, product_id):
        if self._products.pop(product_id, None) is None:
            raise NotFoundError('Product', product_id)

    def set_in_stock(self, product_id, in_stock):
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError('Product', product_id)
        product.in_stock = in_stock
        product.updated_at = datetime.utcnow()


class MemoryOrderRepository(OrderRepository):

    def __init__(self):
        self._orders = {}

    def create(self, order):
        if order.submission_token:
            existing = self.find_by_submission_token(order.submission_token)
            if existing is not None:
                return existing.id
        order_id = uuid.uuid4().hex
        self._orders[order_id] = replace(order, id=order_id,
                                         items=[item.copy() for item in order.items])
        return order_id

    def get(self, order_id):
        order = self._orders.get(order_id)
        return replace(order) if order else None

    def list_for_user(self, user_id):
        return newest_first(replace(o) for o in self._orders.values()
                            if o.user_id == str(user_id))

    def list_all(self, status=None):
        orders = [replace(o) for o in self._orders.values()]
        if status:
            orders = [o for o in orders if o.status == status]
        return newest_first(orders)

    def update_status(self, order_id, status):
        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError('Order', order_id)
        order.status = status
        order.updated_at = datetime.utcnow()

    def find_by_submission_token(self, token):
        for order in self._orders.values():
            if order.submission_token == token:
                return replace(order)
        return None
