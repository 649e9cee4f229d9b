"""Order model."""

from datetime import datetime
import uuid
from poppes.extensions import db
from poppes.records import CartLine, CustomerInfo, OrderRecord


class Order(db.Model):
    """Order model.

    Line items are stored as a JSON snapshot of the cart at submission time,
    so later product edits never alter a placed order.
    """
    __tablename__ = 'orders'

    id = db.Column(db.String(32), primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    items = db.Column(db.JSON, nullable=False, default=list)
    total = db.Column(db.Numeric(14, 4), nullable=False)

    # Status: pending, packed, shipped, delivered
    status = db.Column(db.String(20), default='pending', nullable=False, index=True)

    # Customer contact
    customer_name = db.Column(db.String(100), nullable=False)
    customer_email = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False)
    customer_address = db.Column(db.Text, nullable=False)

    submission_token = db.Column(db.String(64), unique=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    @staticmethod
    def generate_order_id():
        """Generate a unique order id."""
        timestamp = datetime.utcnow().strftime('%Y%m%d%H%M')
        unique_id = str(uuid.uuid4().hex)[:6].upper()
        return f'PN{timestamp}{unique_id}'

    @classmethod
    def from_record(cls, record):
        return cls(
            id=record.id,
            user_id=record.user_id,
            items=[item.to_dict() for item in record.items],
            total=record.total,
            status=record.status,
            customer_name=record.customer.name,
            customer_email=record.customer.email,
            customer_phone=record.customer.phone,
            customer_address=record.customer.address,
            submission_token=record.submission_token,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_record(self):
        return OrderRecord(
            id=self.id,
            user_id=self.user_id,
            items=[CartLine.from_dict(item) for item in self.items or []],
            total=self.total,
            status=self.status,
            customer=CustomerInfo(
                name=self.customer_name,
                email=self.customer_email,
                phone=self.customer_phone,
                address=self.customer_address,
            ),
            created_at=self.created_at,
            updated_at=self.updated_at,
            submission_token=self.submission_token,
        )

    def __repr__(self):
        return f'<Order {self.id}>'
