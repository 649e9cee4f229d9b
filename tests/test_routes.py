from decimal import Decimal

import pytest

from conftest import CUSTOMER_EMAIL, PASSWORD, login, make_product
from create_admin import create_admin_user
from poppes.repositories import get_store
from poppes.repositories.memory import MemoryOrderRepository
from poppes.errors import StoreError
from poppes.extensions import db
from poppes.models import Order
from seed_data import seed_database

CHECKOUT_FORM = {
    'name': 'Asha Rao',
    'email': CUSTOMER_EMAIL,
    'phone': '9876543210',
    'address': '12 MG Road, Bengaluru',
}


class FailingOrderRepository(MemoryOrderRepository):

    def create(self, order):
        raise StoreError('Order store unavailable')


def add(client, product_id, quantity=1, **kwargs):
    return client.post('/cart/add', data={'product_id': product_id, 'quantity': quantity},
                       **kwargs)


def checkout_token(client):
    client.get('/orders/checkout')
    with client.session_transaction() as sess:
        return sess['checkout-token']


def place_order(client, product_id, quantity=1):
    add(client, product_id, quantity)
    token = checkout_token(client)
    response = client.post('/orders/checkout', data=dict(CHECKOUT_FORM, submission_token=token))
    assert response.status_code == 302
    return response.headers['Location'].rsplit('/', 1)[-1], token


def all_orders(app):
    with app.app_context():
        return get_store().orders.list_all()


# --- Catalogue ---

def test_home_features_only_in_stock_products(app, client):
    with app.app_context():
        store = get_store()
        store.products.create(make_product(id=None, name='Raw Forest Honey'))
        store.products.create(make_product(id=None, name='Organic Turmeric Powder',
                                           in_stock=False, quantity=0))

    page = client.get('/').get_data(as_text=True)

    assert 'Raw Forest Honey' in page
    assert 'Organic Turmeric Powder' not in page


def test_products_search(client, product):
    assert 'Pure A2 Cow Ghee' in client.get('/products?q=ghee').get_data(as_text=True)
    assert 'Pure A2 Cow Ghee' not in client.get('/products?q=honey').get_data(as_text=True)


def test_unknown_page_is_404(client):
    assert client.get('/no-such-page').status_code == 404


# --- Cart ---

def test_cart_persists_across_requests(client, product):
    response = add(client, product.id, 2)

    assert response.status_code == 302
    assert 'Expires=' in response.headers['Set-Cookie']

    data = client.get('/api/cart').get_json()
    assert data['cart_count'] == 2
    assert data['items'][0]['product_id'] == product.id
    assert Decimal(data['total']) == Decimal('1887.90')


def test_add_unknown_product_is_404(client):
    assert add(client, 'missing').status_code == 404


def test_add_beyond_stock_flashes_and_keeps_cart(client, product):
    page = add(client, product.id, 26, follow_redirects=True).get_data(as_text=True)

    assert 'Not enough stock available' in page
    assert client.get('/api/cart').get_json()['cart_count'] == 0


def test_update_and_remove(client, product):
    add(client, product.id, 2)

    client.post('/cart/update', data={'product_id': product.id, 'quantity': 5})
    assert client.get('/api/cart').get_json()['cart_count'] == 5

    client.post('/cart/update', data={'product_id': product.id, 'quantity': 0})
    assert client.get('/api/cart').get_json()['cart_count'] == 0

    add(client, product.id, 1)
    client.post(f'/cart/remove/{product.id}')
    assert client.get('/api/cart').get_json()['items'] == []


def test_ajax_add_returns_json(client, product):
    response = add(client, product.id, 3, headers={'X-Requested-With': 'XMLHttpRequest'})

    assert response.get_json()['cart_count'] == 3


def test_api_add_to_cart(client, product):
    response = client.post('/api/cart/add', json={'product_id': product.id, 'quantity': 30})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Not enough stock available'

    response = client.post('/api/cart/add', json={'product_id': product.id, 'quantity': 2})
    assert response.status_code == 200
    assert response.get_json()['cart_count'] == 2

    response = client.post('/api/cart/add', json={'product_id': 'missing'})
    assert response.status_code == 404


# --- Checkout ---

def test_checkout_requires_login(client, product):
    add(client, product.id)

    response = client.get('/orders/checkout')

    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_checkout_with_empty_cart_redirects(client, customer):
    login(client, customer)

    response = client.get('/orders/checkout')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/cart/')


def test_checkout_places_order(app, client, customer, product):
    login(client, customer)

    order_id, _ = place_order(client, product.id)

    orders = all_orders(app)
    assert [o.id for o in orders] == [order_id]
    assert orders[0].total == Decimal('943.95')
    assert orders[0].status == 'pending'
    assert client.get('/api/cart').get_json()['cart_count'] == 0

    page = client.get(f'/orders/confirmation/{order_id}').get_data(as_text=True)
    assert 'Order Confirmed!' in page
    assert '943.95' in page
    assert '899.00' in page
    assert '44.95' in page


def test_repeated_submission_creates_one_order(app, client, customer, product):
    login(client, customer)
    order_id, token = place_order(client, product.id)

    response = client.post('/orders/checkout', data=dict(CHECKOUT_FORM, submission_token=token))

    assert response.status_code == 302
    assert response.headers['Location'].endswith(f'/orders/confirmation/{order_id}')
    assert len(all_orders(app)) == 1


def test_stale_token_is_refused(app, client, customer, product):
    login(client, customer)
    add(client, product.id)
    checkout_token(client)

    response = client.post('/orders/checkout',
                           data=dict(CHECKOUT_FORM, submission_token='stale'))

    assert response.status_code == 200
    assert 'This checkout form has expired' in response.get_data(as_text=True)
    assert all_orders(app) == []


def test_missing_field_rerenders_form(app, client, customer, product):
    login(client, customer)
    add(client, product.id)
    token = checkout_token(client)

    response = client.post('/orders/checkout',
                           data=dict(CHECKOUT_FORM, address='', submission_token=token))

    assert response.status_code == 200
    assert 'Address is required' in response.get_data(as_text=True)
    assert all_orders(app) == []


def test_store_failure_keeps_cart(app, client, customer, product):
    login(client, customer)
    add(client, product.id)
    token = checkout_token(client)
    app.extensions['poppes.store'].orders = FailingOrderRepository()

    response = client.post('/orders/checkout', data=dict(CHECKOUT_FORM, submission_token=token))

    assert response.status_code == 200
    assert 'Failed to place order. Please try again.' in response.get_data(as_text=True)
    assert client.get('/api/cart').get_json()['cart_count'] == 1


def test_checkout_on_memory_store(memory_app):
    with memory_app.app_context():
        store = get_store()
        store.identity.register(CUSTOMER_EMAIL, PASSWORD, 'Asha Rao')
        product_id = store.products.create(make_product(id=None))
    client = memory_app.test_client()
    login(client, CUSTOMER_EMAIL)

    order_id, _ = place_order(client, product_id, 2)

    with memory_app.app_context():
        assert get_store().orders.get(order_id).total == Decimal('1887.90')


# --- Tracking ---

def test_tracking_lists_orders_with_progress(client, customer, product):
    login(client, customer)
    order_id, _ = place_order(client, product.id)

    page = client.get('/orders/').get_data(as_text=True)

    assert order_id in page
    assert 'Pending' in page
    assert '25% Complete' in page


def test_other_customers_cannot_see_order(app, client, customer, product):
    login(client, customer)
    order_id, _ = place_order(client, product.id)
    client.get('/logout')

    with app.app_context():
        get_store().identity.register('ravi@mail.com', PASSWORD, 'Ravi')
    login(client, 'ravi@mail.com')

    assert client.get(f'/orders/confirmation/{order_id}').status_code == 404
    assert client.get(f'/api/orders/{order_id}/status').status_code == 403
    assert order_id not in client.get('/orders/').get_data(as_text=True)


def test_order_status_api(client, customer, product):
    login(client, customer)
    order_id, _ = place_order(client, product.id)

    data = client.get(f'/api/orders/{order_id}/status').get_json()

    assert data['status'] == 'pending'
    assert data['percent'] == 25
    assert [step['reached'] for step in data['timeline']] == [True, False, False, False]
    assert client.get('/api/orders/missing/status').status_code == 404


def test_missing_confirmation_is_404(client, customer):
    login(client, customer)

    assert client.get('/orders/confirmation/PN000').status_code == 404


# --- Auth ---

def test_register_then_login(client):
    response = client.post('/register', data={
        'name': 'Meera Iyer',
        'email': 'meera@mail.com',
        'password': 'secret123',
        'confirm_password': 'secret123',
    })
    assert response.headers['Location'].endswith('/login')

    response = login(client, 'meera@mail.com', 'secret123')
    assert response.status_code == 302
    assert response.headers['Location'] == '/'


def test_bad_credentials_are_refused(client, customer):
    page = login(client, customer, 'wrong-password').get_data(as_text=True)

    assert 'Invalid email or password.' in page


def test_admin_login_lands_on_dashboard(client, admin):
    assert login(client, admin).headers['Location'] == '/admin/'


# --- Admin ---

def test_admin_pages_are_gated(client, customer):
    response = client.get('/admin/')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']

    login(client, customer)
    assert client.get('/admin/').status_code == 403
    assert client.get('/admin/orders').status_code == 403


def test_admin_dashboard_lists_low_stock(app, client, admin, product):
    with app.app_context():
        get_store().products.create(make_product(id=None, name='Raw Forest Honey', quantity=3))
    login(client, admin)

    page = client.get('/admin/').get_data(as_text=True)

    assert 'Raw Forest Honey' in page
    assert 'Pure A2 Cow Ghee' not in page


def test_admin_creates_product(app, client, admin):
    login(client, admin)

    response = client.post('/admin/products/new', data={
        'name': 'Raw Forest Honey',
        'description': 'Unprocessed raw honey.',
        'price': '649.00',
        'quantity': '30',
        'unit': '500 grams',
        'category': 'Honey',
        'image': 'https://images.example.com/honey.jpeg',
        'in_stock': 'y',
    })

    assert response.status_code == 302
    with app.app_context():
        products = get_store().products.list()
    assert [(p.name, p.price, p.quantity) for p in products] == [
        ('Raw Forest Honey', Decimal('649'), 30)]


def test_admin_toggles_stock_and_deletes(app, client, admin, product):
    login(client, admin)

    client.post(f'/admin/products/{product.id}/toggle-stock')
    with app.app_context():
        assert get_store().products.get(product.id).in_stock is False

    client.post(f'/admin/products/{product.id}/delete')
    with app.app_context():
        assert get_store().products.get(product.id) is None


def test_admin_status_moves_forward_only(app, client, customer, admin, product):
    login(client, customer)
    order_id, _ = place_order(client, product.id)
    client.get('/logout')
    login(client, admin)

    client.post(f'/admin/orders/{order_id}/status', data={'status': 'shipped'})
    page = client.post(f'/admin/orders/{order_id}/status', data={'status': 'packed'},
                       follow_redirects=True).get_data(as_text=True)

    assert 'Order cannot move back from Shipped to Packed.' in page
    with app.app_context():
        assert get_store().orders.get(order_id).status == 'shipped'


# --- Scripts ---

def test_seed_database_runs_once(app):
    assert seed_database(app) is True
    assert seed_database(app) is False

    with app.app_context():
        store = get_store()
        assert len(store.products.list()) == 4
        assert len(store.products.list(in_stock=True)) == 3
        assert store.identity.authenticate('admin@poppes.com', 'admin123').is_admin()


@pytest.mark.usefixtures('customer')
def test_create_admin_promotes_existing_user(app):
    with app.app_context():
        user = create_admin_user(CUSTOMER_EMAIL, PASSWORD, 'Asha Rao', promote=lambda: True)
        assert user.is_admin()

        create_admin_user('owner@poppes.com', 'owner123', 'Owner')
        assert get_store().identity.authenticate('owner@poppes.com', 'owner123').is_admin()


def test_register_rejects_taken_email(client, customer):
    page = client.post('/register', data={
        'name': 'Asha Again',
        'email': ' ASHA@mail.com ',
        'password': 'secret123',
        'confirm_password': 'secret123',
    }).get_data(as_text=True)

    assert 'An account with this email already exists.' in page


def test_api_add_rejects_boolean_quantity(client, product):
    response = client.post('/api/cart/add', json={'product_id': product.id, 'quantity': True})

    assert response.status_code == 400
    assert client.get('/api/cart').get_json()['cart_count'] == 0


def drop_orders_table(app):
    with app.app_context():
        Order.__table__.drop(db.engine)


def test_tracking_flashes_when_orders_unavailable(app, client, customer):
    login(client, customer)
    drop_orders_table(app)

    response = client.get('/orders/')

    assert response.status_code == 200
    assert 'Failed to load your orders. Please try again.' in response.get_data(as_text=True)


def test_admin_pages_flash_when_orders_unavailable(app, client, admin):
    login(client, admin)
    drop_orders_table(app)

    dashboard = client.get('/admin/')
    orders = client.get('/admin/orders')

    assert dashboard.status_code == 200
    assert 'Failed to load dashboard data.' in dashboard.get_data(as_text=True)
    assert orders.status_code == 200
    assert 'Failed to fetch orders' in orders.get_data(as_text=True)


def test_checkout_flashes_when_orders_unavailable(app, client, customer, product):
    login(client, customer)
    add(client, product.id)
    token = checkout_token(client)
    drop_orders_table(app)

    response = client.post('/orders/checkout', data=dict(CHECKOUT_FORM, submission_token=token))

    assert response.status_code == 200
    assert 'Failed to place order. Please try again.' in response.get_data(as_text=True)
    assert client.get('/api/cart').get_json()['cart_count'] == 1
