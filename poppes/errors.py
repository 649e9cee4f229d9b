"""Exceptions shared by the services and store backends."""


class StoreError(Exception):
    """The product/order store could not be reached or rejected a write."""


class NotFoundError(LookupError):
    """A product or order id is absent from the store."""

    def __init__(self, kind, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f'{kind} {record_id!r} not found')


class CheckoutError(ValueError):
    """An order submission failed validation before reaching the store."""
