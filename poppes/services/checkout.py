"""Order submission: snapshot the cart into a new pending order."""

import logging
import secrets
from datetime import datetime

from poppes.errors import CheckoutError
from poppes.records import OrderRecord
from poppes.services import pricing

logger = logging.getLogger(__name__)

GUEST_USER_ID = 'guest'


def new_submission_token():
    """Token identifying one rendering of the checkout form."""
    return secrets.token_urlsafe(16)


def submit_order(cart, customer, user_id, orders, submission_token=None):
    """Create an order from ``cart`` and return its id.

    A ``submission_token`` that already produced an order returns that
    order's id and clears the cart. ``StoreError`` from the repository
    propagates with the cart intact so the customer can resubmit.
    """
    missing = customer.missing_fields()
    if missing:
        raise CheckoutError(f'Missing required fields: {", ".join(missing)}')
    if cart.is_empty:
        raise CheckoutError('Your cart is empty.')

    if submission_token:
        existing = orders.find_by_submission_token(submission_token)
        if existing is not None:
            logger.info('Duplicate submission %s resolved to order %s',
                        submission_token, existing.id)
            cart.clear_cart()
            return existing.id

    now = datetime.utcnow()
    order = OrderRecord(
        user_id=str(user_id) if user_id is not None else GUEST_USER_ID,
        items=[line.copy() for line in cart.items],
        total=pricing.total(cart.items),
        customer=customer,
        status='pending',
        created_at=now,
        updated_at=now,
        submission_token=submission_token,
    )
    order_id = orders.create(order)

    cart.clear_cart()
    logger.info('Order %s placed by %s, total %s', order_id, order.user_id, order.total)
    return order_id
