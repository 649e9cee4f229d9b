"""Checkout form."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, HiddenField
from wtforms.validators import DataRequired, Email, Length
from poppes.records import CustomerInfo


class CheckoutForm(FlaskForm):
    """Customer contact and delivery details."""
    name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=100)
    ])
    email = StringField('Email Address', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required'),
        Length(max=20)
    ])
    address = TextAreaField('Delivery Address', validators=[
        DataRequired(message='Address is required'),
        Length(max=500)
    ])
    submission_token = HiddenField()

    def customer_info(self):
        return CustomerInfo(
            name=self.name.data.strip(),
            email=self.email.data.strip(),
            phone=self.phone.data.strip(),
            address=self.address.data.strip(),
        )
