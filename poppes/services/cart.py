"""Session cart: merge-add, stock-bound quantities, durable slot persistence."""

import json
import logging

from poppes.records import CartLine
from poppes.services import pricing

logger = logging.getLogger(__name__)


class SessionCartStorage:
    """Keeps the serialized cart under a fixed key of a session mapping."""

    def __init__(self, session, key='poppes-cart'):
        self.session = session
        self.key = key

    def load(self):
        return self.session.get(self.key)

    def save(self, payload):
        self.session[self.key] = payload

    def remove(self):
        self.session.pop(self.key, None)


class MemoryCartStorage:
    """Dictionary-backed slot, for scripts and tests."""

    def __init__(self, payload=None):
        self.payload = payload

    def load(self):
        return self.payload

    def save(self, payload):
        self.payload = payload

    def remove(self):
        self.payload = None


def _silent(message, category='info'):
    pass


class Cart:
    """Ordered cart lines, unique by product id.

    The cart is restored from ``storage`` when built and every successful
    mutation writes the whole collection back. Outcomes are reported through
    ``notify(message, category)``, which views bind to ``flask.flash``.
    Rejected mutations leave both memory and storage untouched.
    """

    def __init__(self, storage, notify=None):
        self.storage = storage
        self.notify = notify if notify is not None else _silent
        self._lines = self._restore()

    def _restore(self):
        payload = self.storage.load()
        if not payload:
            return []
        try:
            return [CartLine.from_dict(item) for item in json.loads(payload)]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning('Discarding unreadable cart slot: %s', e)
            return []

    def _persist(self):
        self.storage.save(json.dumps([line.to_dict() for line in self._lines]))

    def _find(self, product_id):
        for line in self._lines:
            if line.product_id == product_id:
                return line
        return None

    @property
    def items(self):
        return list(self._lines)

    @property
    def count(self):
        """Total number of units across all lines."""
        return sum(line.cart_quantity for line in self._lines)

    @property
    def subtotal(self):
        return pricing.subtotal(self._lines)

    @property
    def is_empty(self):
        return not self._lines

    def __len__(self):
        return len(self._lines)

    def __iter__(self):
        return iter(list(self._lines))

    def __contains__(self, product_id):
        return self._find(product_id) is not None

    def get(self, product_id):
        return self._find(product_id)

    def add_to_cart(self, product, quantity=1):
        """Add ``quantity`` units of ``product``, stacking onto an existing line."""
        if quantity < 1:
            self.notify('Quantity must be at least 1', 'warning')
            return False
        if not product.in_stock:
            self.notify('Product is out of stock', 'danger')
            return False

        existing = self._find(product.id)
        requested = quantity + (existing.cart_quantity if existing else 0)
        if requested > product.quantity:
            self.notify('Not enough stock available', 'danger')
            return False

        if existing:
            existing.cart_quantity = requested
            message = 'Quantity updated in cart'
        else:
            self._lines.append(CartLine(product=product, cart_quantity=quantity))
            message = 'Added to cart'

        self._persist()
        self.notify(message, 'success')
        return True

    def update_quantity(self, product_id, quantity):
        """Set a line's quantity exactly; zero or below removes the line."""
        if quantity <= 0:
            return self.remove_from_cart(product_id)

        line = self._find(product_id)
        if line is None:
            return False
        if quantity > line.stock:
            self.notify('Not enough stock available', 'danger')
            return False

        line.cart_quantity = quantity
        self._persist()
        return True

    def remove_from_cart(self, product_id):
        line = self._find(product_id)
        if line is None:
            return False

        self._lines.remove(line)
        self._persist()
        self.notify('Removed from cart', 'success')
        return True

    def clear_cart(self):
        self._lines = []
        self.storage.remove()

    def summary(self):
        return pricing.summarize(self._lines)
