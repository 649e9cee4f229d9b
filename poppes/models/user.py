"""User model."""

from datetime import datetime
from flask_login import UserMixin
from poppes.extensions import db, bcrypt

ROLE_CUSTOMER = 'customer'
ROLE_ADMIN = 'admin'
ROLES = (ROLE_CUSTOMER, ROLE_ADMIN)


class User(UserMixin, db.Model):
    """A shopper or store administrator.

    Users stay in the relational database whichever backend holds
    products and orders; orders refer to them by ``str(id)``.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100))
    role = db.Column(db.String(20), nullable=False, default=ROLE_CUSTOMER)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def display_name(self):
        return self.name or self.email

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def promote(self):
        self.role = ROLE_ADMIN

    def is_admin(self):
        return self.role == ROLE_ADMIN

    def is_customer(self):
        return self.role == ROLE_CUSTOMER

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
