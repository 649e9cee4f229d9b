"""Order routes."""

from flask import (Blueprint, render_template, redirect, url_for, flash, request, session,
                   abort, current_app)
from flask_login import login_required, current_user
from poppes.errors import CheckoutError, StoreError
from poppes.forms.checkout import CheckoutForm
from poppes.repositories import get_store
from poppes.services import pricing
from poppes.services.checkout import new_submission_token, submit_order
from poppes.services.order_status import status_view, timeline
from poppes.utils.session_cart import load_cart

orders_bp = Blueprint('orders', __name__)

CHECKOUT_TOKEN_KEY = 'checkout-token'


def _issue_token(form):
    token = new_submission_token()
    session[CHECKOUT_TOKEN_KEY] = token
    form.submission_token.data = token


def _owns(order):
    return order.user_id == str(current_user.id) or current_user.is_admin()


def _render_checkout(form, cart):
    return render_template('orders/checkout.html',
                           form=form,
                           cart=cart,
                           summary=cart.summary())


@orders_bp.route('/checkout', methods=['GET', 'POST'])
@login_required
def checkout():
    """Checkout page."""
    store = get_store()
    form = CheckoutForm()

    if request.method == 'POST' and form.submission_token.data:
        # A repeated click on an already placed order lands on its confirmation.
        try:
            placed = store.orders.find_by_submission_token(form.submission_token.data)
        except StoreError:
            placed = None
        if placed is not None and _owns(placed):
            flash('Your order has already been placed.', 'info')
            return redirect(url_for('orders.order_confirmation', order_id=placed.id))

    cart = load_cart()
    if cart.is_empty:
        flash('Your cart is empty.', 'warning')
        return redirect(url_for('cart.view_cart'))

    if request.method == 'GET':
        form.name.data = current_user.name or ''
        form.email.data = current_user.email
        _issue_token(form)
        return _render_checkout(form, cart)

    if not form.validate_on_submit():
        if not session.get(CHECKOUT_TOKEN_KEY):
            _issue_token(form)
        return _render_checkout(form, cart)

    token = form.submission_token.data
    if not token or token != session.get(CHECKOUT_TOKEN_KEY):
        flash('This checkout form has expired. Please review your order and submit again.',
              'warning')
        _issue_token(form)
        return _render_checkout(form, cart)

    try:
        order_id = submit_order(cart, form.customer_info(), current_user.id, store.orders,
                                submission_token=token)
    except CheckoutError as e:
        flash(str(e), 'warning')
        return _render_checkout(form, cart)
    except StoreError:
        current_app.logger.exception('Error placing order for user %s', current_user.id)
        flash('Failed to place order. Please try again.', 'danger')
        return _render_checkout(form, cart)

    session.pop(CHECKOUT_TOKEN_KEY, None)
    flash('Order placed successfully!', 'success')
    return redirect(url_for('orders.order_confirmation', order_id=order_id))


@orders_bp.route('/confirmation/<order_id>')
@login_required
def order_confirmation(order_id):
    """Order confirmation page."""
    try:
        order = get_store().orders.get(order_id)
    except StoreError:
        current_app.logger.exception('Error fetching order %s', order_id)
        flash('Failed to load the order. Please try again.', 'danger')
        return redirect(url_for('orders.order_tracking'))

    if order is None or not _owns(order):
        abort(404)

    return render_template('orders/confirmation.html',
                           order=order,
                           breakdown=pricing.breakdown_from_total(order.total),
                           status=status_view(order.status))


@orders_bp.route('/')
@login_required
def order_tracking():
    """Order tracking: the customer's orders, newest first."""
    try:
        orders = get_store().orders.list_for_user(current_user.id)
    except StoreError:
        current_app.logger.exception('Error fetching orders for user %s', current_user.id)
        flash('Failed to load your orders. Please try again.', 'danger')
        orders = []

    tracked = [
        {'order': order, 'status': status_view(order.status), 'timeline': timeline(order.status)}
        for order in orders
    ]
    return render_template('orders/tracking.html', tracked=tracked)
