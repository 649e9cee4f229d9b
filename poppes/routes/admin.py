"""Admin panel routes."""

from decimal import Decimal
from flask import Blueprint, render_template, redirect, url_for, flash, request, abort, current_app
from flask_login import login_required
from poppes.errors import NotFoundError, StoreError
from poppes.forms.admin import ProductForm, OrderStatusForm
from poppes.repositories import get_store
from poppes.services.order_status import ORDER_STATUSES, can_transition, status_view
from poppes.utils.decorators import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/')
@login_required
@admin_required
def dashboard():
    """Admin dashboard with store overview."""
    store = get_store()
    try:
        products = store.products.list()
        orders = store.orders.list_all()
    except StoreError:
        current_app.logger.exception('Error fetching dashboard data')
        flash('Failed to load dashboard data.', 'danger')
        products, orders = [], []

    threshold = current_app.config.get('LOW_STOCK_THRESHOLD', 5)
    stats = {
        'total_products': len(products),
        'total_orders': len(orders),
        'pending_orders': sum(1 for order in orders if order.status == 'pending'),
        'total_revenue': sum((order.total for order in orders), Decimal('0')),
    }
    low_stock_products = [p for p in products if p.in_stock and p.quantity <= threshold]

    return render_template('admin/dashboard.html',
                           stats=stats,
                           recent_orders=orders[:5],
                           low_stock_products=low_stock_products)


# --- Product Management ---
@admin_bp.route('/products')
@login_required
@admin_required
def products():
    """Product management list."""
    search = request.args.get('search', '').strip()
    stock = request.args.get('stock', 'all')

    in_stock = {'in': True, 'out': False}.get(stock)

    try:
        # Admin search matches product names only
        product_list = get_store().products.list(in_stock=in_stock)
    except StoreError:
        current_app.logger.exception('Error fetching products')
        flash('Failed to fetch products', 'danger')
        product_list = []

    if search:
        product_list = [p for p in product_list if search.lower() in p.name.lower()]

    return render_template('admin/products.html',
                           products=product_list,
                           search=search,
                           current_stock=stock)


@admin_bp.route('/products/new', methods=['GET', 'POST'])
@login_required
@admin_required
def add_product():
    """Add a product."""
    form = ProductForm()

    if form.validate_on_submit():
        try:
            product_id = get_store().products.create(form.to_record())
        except StoreError:
            current_app.logger.exception('Error saving product')
            flash('Failed to save product', 'danger')
            return render_template('admin/product_form.html', form=form, product=None)

        current_app.logger.info('Product %s created', product_id)
        flash('Product added successfully', 'success')
        return redirect(url_for('admin.products'))

    return render_template('admin/product_form.html', form=form, product=None)


@admin_bp.route('/products/<product_id>/edit', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_product(product_id):
    """Edit a product."""
    store = get_store()
    try:
        product = store.products.get(product_id)
    except StoreError:
        current_app.logger.exception('Error fetching product %s', product_id)
        flash('Failed to fetch product', 'danger')
        return redirect(url_for('admin.products'))

    if product is None:
        flash('Product not found', 'danger')
        return redirect(url_for('admin.products'))

    form = ProductForm()
    if request.method == 'GET':
        form.fill(product)

    if form.validate_on_submit():
        try:
            store.products.update(form.to_record(product_id))
        except NotFoundError:
            flash('Product not found', 'danger')
            return redirect(url_for('admin.products'))
        except StoreError:
            current_app.logger.exception('Error updating product %s', product_id)
            flash('Failed to save product', 'danger')
            return render_template('admin/product_form.html', form=form, product=product)

        current_app.logger.info('Product %s updated', product_id)
        flash('Product updated successfully', 'success')
        return redirect(url_for('admin.products'))

    return render_template('admin/product_form.html', form=form, product=product)


@admin_bp.route('/products/<product_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_product(product_id):
    """Delete a product."""
    try:
        get_store().products.delete(product_id)
    except NotFoundError:
        flash('Product not found', 'danger')
    except StoreError:
        current_app.logger.exception('Error deleting product %s', product_id)
        flash('Failed to delete product', 'danger')
    else:
        current_app.logger.info('Product %s deleted', product_id)
        flash('Product deleted successfully', 'success')

    return redirect(url_for('admin.products'))


@admin_bp.route('/products/<product_id>/toggle-stock', methods=['POST'])
@login_required
@admin_required
def toggle_stock(product_id):
    """Flip a product's in-stock flag."""
    store = get_store()
    try:
        product = store.products.get(product_id)
        if product is None:
            abort(404)
        store.products.set_in_stock(product_id, not product.in_stock)
    except NotFoundError:
        abort(404)
    except StoreError:
        current_app.logger.exception('Error updating stock status of %s', product_id)
        flash('Failed to update stock status', 'danger')
        return redirect(url_for('admin.products'))

    status = 'out of stock' if product.in_stock else 'in stock'
    flash(f'Product marked as {status}', 'success')
    return redirect(url_for('admin.products'))


# --- Order Management ---
@admin_bp.route('/orders')
@login_required
@admin_required
def orders():
    """All orders."""
    status = request.args.get('status', '')

    try:
        order_list = get_store().orders.list_all(status=status or None)
    except StoreError:
        current_app.logger.exception('Error fetching orders')
        flash('Failed to fetch orders', 'danger')
        order_list = []

    return render_template('admin/orders.html',
                           orders=order_list,
                           statuses=ORDER_STATUSES,
                           current_status=status,
                           status_form=OrderStatusForm())


@admin_bp.route('/orders/<order_id>/status', methods=['POST'])
@login_required
@admin_required
def update_order_status(order_id):
    """Move an order forward in its lifecycle."""
    store = get_store()
    form = OrderStatusForm()

    if not form.validate_on_submit():
        flash('Please choose a valid status.', 'warning')
        return redirect(url_for('admin.orders'))

    new_status = form.status.data
    try:
        order = store.orders.get(order_id)
        if order is None:
            abort(404)
        if not can_transition(order.status, new_status):
            flash(f'Order cannot move back from {status_view(order.status).label} '
                  f'to {status_view(new_status).label}.', 'warning')
            return redirect(url_for('admin.orders'))
        store.orders.update_status(order_id, new_status)
    except NotFoundError:
        abort(404)
    except StoreError:
        current_app.logger.exception('Error updating order %s', order_id)
        flash('Failed to update order status', 'danger')
        return redirect(url_for('admin.orders'))

    current_app.logger.info('Order %s moved to %s', order_id, new_status)
    flash('Order status updated.', 'success')
    return redirect(url_for('admin.orders'))
