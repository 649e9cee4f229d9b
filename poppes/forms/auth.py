"""Sign-in and sign-up forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, EqualTo, ValidationError
from poppes.errors import StoreError
from poppes.repositories import get_store


def normalize_email(value):
    return value.strip().lower() if value else value


class LoginForm(FlaskForm):
    email = StringField('Email', filters=[normalize_email], validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    remember = BooleanField('Keep me signed in')


class RegistrationForm(FlaskForm):
    """New shopper account. Admins are created with ``create_admin.py``."""
    name = StringField('Full Name', filters=[lambda v: v.strip() if v else v], validators=[
        DataRequired(message='Name is required'),
        Length(min=2, max=100, message='Name must be between 2 and 100 characters')
    ])
    email = StringField('Email', filters=[normalize_email], validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address'),
        Length(max=120)
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=6, message='Password must be at least 6 characters')
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired(message='Please confirm your password'),
        EqualTo('password', message='Passwords must match')
    ])

    def validate_email(self, field):
        try:
            taken = get_store().identity.find_by_email(field.data) is not None
        except StoreError:
            raise ValidationError('Could not check this email right now. Please try again.')
        if taken:
            raise ValidationError('An account with this email already exists.')
