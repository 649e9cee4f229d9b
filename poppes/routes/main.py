"""Main public routes."""

from flask import Blueprint, render_template, request, current_app, flash
from poppes.errors import StoreError
from poppes.repositories import get_store
from poppes.repositories.base import PRODUCT_SORTS

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Homepage with featured products."""
    try:
        featured_products = get_store().products.list(
            in_stock=True,
            limit=current_app.config.get('FEATURED_PRODUCTS_LIMIT', 4)
        )
    except StoreError:
        current_app.logger.exception('Could not load featured products')
        featured_products = []

    return render_template('main/index.html', featured_products=featured_products)


@main_bp.route('/products')
def products():
    """List all products with search, stock filter and sorting."""
    search = request.args.get('q', '').strip()
    stock = request.args.get('stock', '')
    sort = request.args.get('sort', 'newest')

    if sort not in PRODUCT_SORTS:
        sort = 'newest'

    in_stock = None
    if stock == 'in':
        in_stock = True
    elif stock == 'out':
        in_stock = False

    try:
        product_list = get_store().products.list(in_stock=in_stock, search=search or None, sort=sort)
    except StoreError:
        current_app.logger.exception('Could not load products')
        flash('Failed to load products. Please try again.', 'danger')
        product_list = []

    return render_template('main/products.html',
                           products=product_list,
                           search=search,
                           current_stock=stock,
                           current_sort=sort)
