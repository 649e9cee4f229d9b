"""Repository contracts for the product and order store.

Backends return ``poppes.records`` objects and translate their own failures
into ``StoreError``. Lookups return ``None`` for absent ids; writes against an
absent id raise ``NotFoundError``.
"""

from abc import ABC, abstractmethod

PRODUCT_SORTS = ('newest', 'name', 'price')


class ProductRepository(ABC):

    @abstractmethod
    def list(self, in_stock=None, search=None, sort='newest', limit=None):
        """Products filtered by stock flag and name/description search."""

    @abstractmethod
    def get(self, product_id):
        pass

    @abstractmethod
    def create(self, product):
        """Store a new product and return the id assigned to it."""

    @abstractmethod
    def update(self, product):
        pass

    @abstractmethod
    def delete(self, product_id):
        pass

    @abstractmethod
    def set_in_stock(self, product_id, in_stock):
        pass


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order):
        """Store a new order and return the id assigned to it."""

    @abstractmethod
    def get(self, order_id):
        pass

    @abstractmethod
    def list_for_user(self, user_id):
        """A user's orders, newest first."""

    @abstractmethod
    def list_all(self, status=None):
        """All orders, newest first, optionally filtered by status."""

    @abstractmethod
    def update_status(self, order_id, status):
        pass

    @abstractmethod
    def find_by_submission_token(self, token):
        pass


class IdentityProvider(ABC):

    @abstractmethod
    def register(self, email, password, name, role='customer'):
        pass

    @abstractmethod
    def authenticate(self, email, password):
        """The matching active user, or None."""

    @abstractmethod
    def get(self, user_id):
        pass

    @abstractmethod
    def find_by_email(self, email):
        pass


def matches_search(product, search):
    needle = search.lower()
    return needle in product.name.lower() or needle in (product.description or '').lower()


def sort_products(products, sort):
    """In-process ordering shared by the backends without query sorting."""
    if sort == 'name':
        return sorted(products, key=lambda p: p.name.lower())
    if sort == 'price':
        return sorted(products, key=lambda p: p.price)
    return sorted(products, key=lambda p: p.created_at.isoformat() if p.created_at else '',
                  reverse=True)


def newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at.isoformat() if o.created_at else '',
                  reverse=True)
