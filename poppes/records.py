"""Backend-neutral records for products, cart lines and orders.

Every store backend converts its own rows/items to and from these, and the
cart serializes its lines through ``to_dict``/``from_dict``.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


def to_decimal(value):
    """Convert a stored number to Decimal without float artefacts."""
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_datetime(value):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_datetime(value):
    return value.isoformat() if value else None


@dataclass
class ProductRecord:
    """A catalogue product."""
    name: str
    description: str
    price: Decimal
    image: str
    quantity: int
    unit: str = ''
    in_stock: bool = True
    category: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.price = to_decimal(self.price)
        self.quantity = int(self.quantity)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price': str(self.price),
            'image': self.image,
            'quantity': self.quantity,
            'unit': self.unit,
            'in_stock': self.in_stock,
            'category': self.category,
            'created_at': format_datetime(self.created_at),
            'updated_at': format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            name=data['name'],
            description=data.get('description', ''),
            price=to_decimal(data['price']),
            image=data.get('image', ''),
            quantity=int(data.get('quantity', 0)),
            unit=data.get('unit') or '',
            in_stock=bool(data.get('in_stock', True)),
            category=data.get('category') or None,
            created_at=parse_datetime(data.get('created_at')),
            updated_at=parse_datetime(data.get('updated_at')),
        )


@dataclass
class CartLine:
    """A product snapshot plus the quantity requested for it."""
    product: ProductRecord
    cart_quantity: int

    @property
    def product_id(self):
        return self.product.id

    @property
    def name(self):
        return self.product.name

    @property
    def price(self):
        return self.product.price

    @property
    def stock(self):
        """Stock bound captured when the line was created."""
        return self.product.quantity

    @property
    def line_total(self):
        return self.product.price * self.cart_quantity

    def copy(self):
        return CartLine(product=replace(self.product), cart_quantity=self.cart_quantity)

    def to_dict(self):
        data = self.product.to_dict()
        data['cart_quantity'] = self.cart_quantity
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(product=ProductRecord.from_dict(data),
                   cart_quantity=int(data['cart_quantity']))


@dataclass
class CustomerInfo:
    """Contact details captured at checkout."""
    name: str
    email: str
    phone: str
    address: str

    def missing_fields(self):
        return [name for name in ('name', 'email', 'phone', 'address')
                if not (getattr(self, name) or '').strip()]

    def to_dict(self):
        return {
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'], email=data['email'],
                   phone=data['phone'], address=data['address'])


@dataclass
class OrderRecord:
    """A placed order."""
    user_id: str
    items: List[CartLine]
    total: Decimal
    customer: CustomerInfo
    status: str = 'pending'
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    submission_token: Optional[str] = None

    def __post_init__(self):
        self.total = to_decimal(self.total)

    @property
    def item_count(self):
        return sum(item.cart_quantity for item in self.items)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'items': [item.to_dict() for item in self.items],
            'total': str(self.total),
            'status': self.status,
            'customer': self.customer.to_dict(),
            'created_at': format_datetime(self.created_at),
            'updated_at': format_datetime(self.updated_at),
            'submission_token': self.submission_token,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            user_id=data['user_id'],
            items=[CartLine.from_dict(item) for item in data.get('items', [])],
            total=to_decimal(data['total']),
            status=data.get('status', 'pending'),
            customer=CustomerInfo.from_dict(data['customer']),
            created_at=parse_datetime(data.get('created_at')),
            updated_at=parse_datetime(data.get('updated_at')),
            submission_token=data.get('submission_token'),
        )
