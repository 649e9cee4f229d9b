"""Admin panel forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, DecimalField, IntegerField, BooleanField, SelectField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, URL
from poppes.records import ProductRecord
from poppes.services.order_status import ORDER_STATUSES, STATUS_VIEWS


class ProductForm(FlaskForm):
    """Create/edit product form."""
    name = StringField('Product Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=150)
    ])
    description = TextAreaField('Description', validators=[
        DataRequired(message='Description is required')
    ])
    price = DecimalField('Price (₹)', places=2, validators=[
        InputRequired(message='Price is required'),
        NumberRange(min=0, message='Price cannot be negative')
    ])
    quantity = IntegerField('Stock Quantity', validators=[
        InputRequired(message='Quantity is required'),
        NumberRange(min=0, message='Quantity cannot be negative')
    ])
    unit = StringField('Unit (e.g. 500 grams)', validators=[
        DataRequired(message='Unit is required'),
        Length(max=50)
    ])
    category = StringField('Category', validators=[Optional(), Length(max=100)])
    image = StringField('Image URL', validators=[
        DataRequired(message='Please provide a product image URL'),
        URL(message='Please enter a valid URL'),
        Length(max=500)
    ])
    in_stock = BooleanField('In Stock', default=True)

    def to_record(self, product_id=None):
        return ProductRecord(
            id=product_id,
            name=self.name.data.strip(),
            description=self.description.data.strip(),
            price=self.price.data,
            image=self.image.data.strip(),
            quantity=self.quantity.data,
            unit=self.unit.data.strip(),
            in_stock=self.in_stock.data,
            category=(self.category.data or '').strip() or None,
        )

    def fill(self, product):
        self.name.data = product.name
        self.description.data = product.description
        self.price.data = product.price
        self.quantity.data = product.quantity
        self.unit.data = product.unit
        self.category.data = product.category or ''
        self.image.data = product.image
        self.in_stock.data = product.in_stock


class OrderStatusForm(FlaskForm):
    """Order status update form."""
    status = SelectField('Status', choices=[
        (status, STATUS_VIEWS[status].label) for status in ORDER_STATUSES
    ])
