"""Product model."""

import uuid
from datetime import datetime
from poppes.extensions import db
from poppes.records import ProductRecord


def generate_product_id():
    return uuid.uuid4().hex


class Product(db.Model):
    """Product model."""
    __tablename__ = 'products'

    id = db.Column(db.String(32), primary_key=True, default=generate_product_id)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, default='')
    price = db.Column(db.Numeric(12, 2), nullable=False)
    image = db.Column(db.String(500), nullable=False)
    quantity = db.Column(db.Integer, default=0, nullable=False)
    unit = db.Column(db.String(50), default='')
    in_stock = db.Column(db.Boolean, default=True, nullable=False, index=True)
    category = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_record(self):
        return ProductRecord(
            id=self.id,
            name=self.name,
            description=self.description or '',
            price=self.price,
            image=self.image,
            quantity=self.quantity,
            unit=self.unit or '',
            in_stock=self.in_stock,
            category=self.category,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def apply(self, record):
        """Copy editable fields from a ProductRecord."""
        self.name = record.name
        self.description = record.description
        self.price = record.price
        self.image = record.image
        self.quantity = record.quantity
        self.unit = record.unit
        self.in_stock = record.in_stock
        self.category = record.category

    def __repr__(self):
        return f'<Product {self.name}>'
