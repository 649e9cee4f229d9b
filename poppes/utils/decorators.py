"""Role-based access decorators."""

from functools import wraps
from flask import redirect, url_for, flash, abort, request, current_app
from flask_login import current_user


def admin_required(f):
    """Restrict a view to admins; sign-in is requested first when anonymous."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login', next=request.full_path))
        if not current_user.is_admin():
            current_app.logger.warning('User %s refused access to %s', current_user.id, request.path)
            flash('Access denied. Admin privileges required.', 'danger')
            abort(403)
        return f(*args, **kwargs)
    return decorated_function
