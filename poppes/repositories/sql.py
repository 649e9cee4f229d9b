"""Flask-SQLAlchemy backed store and identity provider."""

import logging
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from poppes.errors import NotFoundError, StoreError
from poppes.extensions import db
from poppes.models import Order, Product, User
from poppes.models.user import ROLE_CUSTOMER
from poppes.repositories.base import IdentityProvider, OrderRepository, ProductRepository

logger = logging.getLogger(__name__)


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error('Database write failed: %s', e)
        raise StoreError('Database write failed') from e


@contextmanager
def _reading(what):
    try:
        yield
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error('Could not load %s: %s', what, e)
        raise StoreError(f'Could not load {what}') from e


class SqlProductRepository(ProductRepository):

    def list(self, in_stock=None, search=None, sort='newest', limit=None):
        query = Product.query

        if in_stock is not None:
            query = query.filter(Product.in_stock == in_stock)

        if search:
            query = query.filter(
                or_(
                    Product.name.ilike(f'%{search}%'),
                    Product.description.ilike(f'%{search}%')
                )
            )

        if sort == 'name':
            query = query.order_by(Product.name.asc())
        elif sort == 'price':
            query = query.order_by(Product.price.asc())
        else:
            query = query.order_by(Product.created_at.desc())

        if limit:
            query = query.limit(limit)

        with _reading('products'):
            return [product.to_record() for product in query.all()]

    def get(self, product_id):
        with _reading('product'):
            product = db.session.get(Product, product_id)
        return product.to_record() if product else None

    def _require(self, product_id):
        with _reading('product'):
            product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError('Product', product_id)
        return product

    def create(self, record):
        now = datetime.utcnow()
        product = Product(created_at=record.created_at or now, updated_at=now)
        product.apply(record)
        db.session.add(product)
        _commit()
        return product.id

    def update(self, record):
        product = self._require(record.id)
        product.apply(record)
        product.updated_at = datetime.utcnow()
        _commit()

    def delete(self, product_id):
        db.session.delete(self._require(product_id))
        _commit()

    def set_in_stock(self, product_id, in_stock):
        product = self._require(product_id)
        product.in_stock = in_stock
        product.updated_at = datetime.utcnow()
        _commit()


class SqlOrderRepository(OrderRepository):

    def create(self, record):
        order = Order.from_record(record)
        order.id = Order.generate_order_id()
        db.session.add(order)
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            # A concurrent submission with the same token won the insert.
            if record.submission_token:
                existing = self.find_by_submission_token(record.submission_token)
                if existing is not None:
                    return existing.id
            raise StoreError('Order was rejected by the database') from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreError('Could not save order') from e
        return order.id

    def get(self, order_id):
        with _reading('order'):
            order = db.session.get(Order, order_id)
        return order.to_record() if order else None

    def list_for_user(self, user_id):
        with _reading('orders'):
            orders = Order.query.filter_by(
                user_id=str(user_id)
            ).order_by(Order.created_at.desc()).all()
        return [order.to_record() for order in orders]

    def list_all(self, status=None):
        query = Order.query

        if status:
            query = query.filter_by(status=status)

        with _reading('orders'):
            orders = query.order_by(Order.created_at.desc()).all()
        return [order.to_record() for order in orders]

    def update_status(self, order_id, status):
        with _reading('order'):
            order = db.session.get(Order, order_id)
        if order is None:
            raise NotFoundError('Order', order_id)
        order.status = status
        order.updated_at = datetime.utcnow()
        _commit()

    def find_by_submission_token(self, token):
        with _reading('order'):
            order = Order.query.filter_by(submission_token=token).first()
        return order.to_record() if order else None


class SqlIdentityProvider(IdentityProvider):

    def register(self, email, password, name, role=ROLE_CUSTOMER):
        user = User(email=email.strip().lower(), name=name, role=role)
        user.set_password(password)
        db.session.add(user)
        _commit()
        logger.info('Registered %s account %s', role, user.email)
        return user

    def authenticate(self, email, password):
        user = self.find_by_email(email)
        if user and user.is_active and user.check_password(password):
            return user
        return None

    def get(self, user_id):
        with _reading('user'):
            return db.session.get(User, int(user_id))

    def find_by_email(self, email):
        with _reading('user'):
            return User.query.filter_by(email=email.strip().lower()).first()
