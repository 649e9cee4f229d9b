"""Authentication routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import login_user, logout_user, login_required, current_user
from urllib.parse import urlparse
from poppes.errors import StoreError
from poppes.forms.auth import LoginForm, RegistrationForm
from poppes.repositories import get_store

auth_bp = Blueprint('auth', __name__)


def _safe_next(target):
    """Only follow relative redirect targets."""
    if target and not urlparse(target).netloc and target.startswith('/'):
        return target
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = LoginForm()
    if form.validate_on_submit():
        try:
            user = get_store().identity.authenticate(form.email.data, form.password.data)
        except StoreError:
            current_app.logger.exception('Sign-in lookup failed for %s', form.email.data)
            flash('Could not sign you in right now. Please try again.', 'danger')
            return render_template('auth/login.html', form=form)

        if user:
            login_user(user, remember=form.remember.data)
            flash(f'Welcome back, {user.display_name}!', 'success')

            next_page = _safe_next(request.args.get('next'))
            if next_page:
                return redirect(next_page)

            # Redirect based on role
            if user.is_admin():
                return redirect(url_for('admin.dashboard'))
            return redirect(url_for('main.index'))

        flash('Invalid email or password.', 'danger')

    return render_template('auth/login.html', form=form)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Customer registration."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = RegistrationForm()
    if form.validate_on_submit():
        try:
            get_store().identity.register(form.email.data, form.password.data, form.name.data)
        except StoreError:
            current_app.logger.exception('Registration failed for %s', form.email.data)
            flash('Registration failed. Please try again.', 'danger')
            return render_template('auth/register.html', form=form)

        flash('Registration successful! Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """User logout."""
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('main.index'))
