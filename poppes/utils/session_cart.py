"""Bind the cart engine to the current browser session."""

from flask import current_app, flash, session

from poppes.services.cart import Cart, SessionCartStorage


def load_cart(quiet=False):
    """Cart for this request, restored from the session slot.

    Outcome messages are flashed unless ``quiet`` is set.
    """
    # Keep the cart slot across browser restarts.
    session.permanent = True
    storage = SessionCartStorage(session, current_app.config['CART_STORAGE_KEY'])
    return Cart(storage, notify=None if quiet else flash)
