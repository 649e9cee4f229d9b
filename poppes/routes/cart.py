"""Cart routes."""

from flask import (Blueprint, render_template, redirect, url_for, flash, request, jsonify,
                   abort, current_app)
from poppes.errors import StoreError
from poppes.repositories import get_store
from poppes.utils.session_cart import load_cart

cart_bp = Blueprint('cart', __name__)


def _wants_json():
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def _cart_payload(cart, success):
    summary = cart.summary()
    return {
        'success': success,
        'cart_count': cart.count,
        'subtotal': str(summary.subtotal),
        'total': str(summary.total),
    }


@cart_bp.route('/')
def view_cart():
    """View shopping cart."""
    cart = load_cart()
    return render_template('cart/cart.html', cart=cart, summary=cart.summary())


@cart_bp.route('/add', methods=['GET', 'POST'])
def add_to_cart():
    """Add product to cart."""
    # If accessed via GET, redirect to cart
    if request.method == 'GET':
        return redirect(url_for('cart.view_cart'))

    product_id = request.form.get('product_id', '')
    quantity = request.form.get('quantity', 1, type=int)

    try:
        product = get_store().products.get(product_id)
    except StoreError:
        current_app.logger.exception('Could not load product %s', product_id)
        flash('Could not reach the store. Please try again.', 'danger')
        return redirect(request.referrer or url_for('main.products'))

    if product is None:
        abort(404)

    cart = load_cart(quiet=_wants_json())
    added = cart.add_to_cart(product, quantity)

    if _wants_json():
        return jsonify(_cart_payload(cart, added)), (200 if added else 400)

    return redirect(request.referrer or url_for('main.products'))


@cart_bp.route('/update', methods=['POST'])
def update_cart():
    """Update cart item quantity."""
    product_id = request.form.get('product_id', '')
    quantity = request.form.get('quantity', type=int)

    if quantity is None:
        flash('Please enter a valid quantity.', 'warning')
        return redirect(url_for('cart.view_cart'))

    cart = load_cart(quiet=_wants_json())
    updated = cart.update_quantity(product_id, quantity)

    if _wants_json():
        return jsonify(_cart_payload(cart, updated))

    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/remove/<product_id>', methods=['POST'])
def remove_from_cart(product_id):
    """Remove item from cart."""
    cart = load_cart(quiet=_wants_json())
    removed = cart.remove_from_cart(product_id)

    if _wants_json():
        return jsonify(_cart_payload(cart, removed))

    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/clear', methods=['POST'])
def clear_cart():
    """Clear all items from cart."""
    load_cart().clear_cart()

    flash('Cart cleared.', 'success')
    return redirect(url_for('cart.view_cart'))
