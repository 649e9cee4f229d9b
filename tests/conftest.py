import pytest

from poppes import create_app
from poppes.extensions import db
from poppes.records import CustomerInfo, ProductRecord
from poppes.repositories import Store, get_store
from poppes.repositories.memory import MemoryOrderRepository, MemoryProductRepository
from poppes.services.cart import Cart, MemoryCartStorage

CUSTOMER_EMAIL = 'asha@mail.com'
ADMIN_EMAIL = 'admin@poppes.com'
PASSWORD = 'secret123'


def make_product(**overrides):
    data = {
        'id': '1',
        'name': 'Pure A2 Cow Ghee',
        'description': 'Premium quality A2 cow ghee made from grass-fed cows.',
        'price': '899',
        'image': 'https://images.example.com/ghee.jpeg',
        'quantity': 25,
        'unit': '500 grams',
        'in_stock': True,
        'category': 'Dairy',
    }
    data.update(overrides)
    return ProductRecord(**data)


def make_customer(**overrides):
    data = {
        'name': 'Asha Rao',
        'email': CUSTOMER_EMAIL,
        'phone': '9876543210',
        'address': '12 MG Road, Bengaluru',
    }
    data.update(overrides)
    return CustomerInfo(**data)


class Notifications(list):
    """Records ``(category, message)`` pairs passed to a cart's notify hook."""

    def __call__(self, message, category='info'):
        self.append((category, message))

    @property
    def messages(self):
        return [message for _, message in self]


@pytest.fixture
def notifications():
    return Notifications()


@pytest.fixture
def cart_storage():
    return MemoryCartStorage()


@pytest.fixture
def cart(cart_storage, notifications):
    return Cart(cart_storage, notify=notifications)


@pytest.fixture
def app():
    """Application on the SQL store (in-memory SQLite)."""
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def memory_app():
    """Application whose products and orders live in process."""
    store = Store(MemoryProductRepository(), MemoryOrderRepository())
    app = create_app('testing', store=store)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def product(app):
    """A stocked product saved through the configured store."""
    with app.app_context():
        product_id = get_store().products.create(make_product(id=None))
        return get_store().products.get(product_id)


@pytest.fixture
def customer(app):
    with app.app_context():
        get_store().identity.register(CUSTOMER_EMAIL, PASSWORD, 'Asha Rao')
    return CUSTOMER_EMAIL


@pytest.fixture
def admin(app):
    with app.app_context():
        get_store().identity.register(ADMIN_EMAIL, PASSWORD, 'Admin User', role='admin')
    return ADMIN_EMAIL


def login(client, email, password=PASSWORD):
    return client.post('/login', data={'email': email, 'password': password})
