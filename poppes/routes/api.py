"""JSON API endpoints for AJAX operations."""

from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from poppes.errors import StoreError
from poppes.repositories import get_store
from poppes.services.order_status import status_view, timeline
from poppes.utils.session_cart import load_cart

api_bp = Blueprint('api', __name__)


class _Collector:
    """Gathers cart outcome messages for the JSON response."""

    def __init__(self):
        self.messages = []

    def __call__(self, message, category='info'):
        self.messages.append({'message': message, 'category': category})


def _cart_json(cart):
    summary = cart.summary()
    return {
        'items': [{
            'product_id': line.product_id,
            'name': line.name,
            'price': str(line.price),
            'quantity': line.cart_quantity,
            'line_total': str(line.line_total)
        } for line in cart.items],
        'cart_count': cart.count,
        'subtotal': str(summary.subtotal),
        'tax': str(summary.tax),
        'total': str(summary.total)
    }


@api_bp.route('/cart')
def cart_summary():
    """Current cart contents and totals."""
    return jsonify(_cart_json(load_cart(quiet=True)))


@api_bp.route('/cart/add', methods=['POST'])
def add_to_cart():
    """Add product to cart via AJAX."""
    data = request.get_json(silent=True) or {}
    product_id = data.get('product_id')
    quantity = data.get('quantity', 1)

    if not isinstance(quantity, int) or isinstance(quantity, bool):
        return jsonify({'success': False, 'message': 'Quantity must be a whole number'}), 400

    try:
        product = get_store().products.get(product_id) if product_id else None
    except StoreError:
        current_app.logger.exception('Could not load product %s', product_id)
        return jsonify({'success': False, 'message': 'Store unavailable'}), 503

    if product is None:
        return jsonify({'success': False, 'message': 'Product not found'}), 404

    collector = _Collector()
    cart = load_cart(quiet=True)
    cart.notify = collector
    added = cart.add_to_cart(product, quantity)

    payload = _cart_json(cart)
    payload.update({
        'success': added,
        'message': collector.messages[-1]['message'] if collector.messages else ''
    })
    return jsonify(payload), (200 if added else 400)


@api_bp.route('/orders/<order_id>/status')
@login_required
def order_status(order_id):
    """Get order status for tracking."""
    try:
        order = get_store().orders.get(order_id)
    except StoreError:
        current_app.logger.exception('Error fetching order %s', order_id)
        return jsonify({'success': False, 'message': 'Store unavailable'}), 503

    if order is None:
        return jsonify({'success': False, 'message': 'Order not found'}), 404

    # Check access
    if order.user_id != str(current_user.id) and not current_user.is_admin():
        return jsonify({'success': False, 'message': 'Access denied'}), 403

    view = status_view(order.status)
    return jsonify({
        'success': True,
        'order_id': order.id,
        'status': order.status,
        'label': view.label,
        'percent': view.percent,
        'icon': view.icon,
        'timeline': [{
            'status': step.status,
            'label': step.label,
            'reached': step.reached
        } for step in timeline(order.status)],
        'updated_at': order.updated_at.isoformat() if order.updated_at else None
    })
