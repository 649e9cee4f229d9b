"""Flask application factory."""

import os
from datetime import datetime
from flask import Flask, render_template
from .config import config
from .extensions import db, migrate, login_manager, bcrypt, csrf


def create_app(config_name=None, store=None):
    """Create and configure the Flask application.

    ``store`` replaces the store built from ``STORE_BACKEND``.
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)

    # Product/order store
    from .repositories import EXTENSION_KEY, build_store
    app.extensions[EXTENSION_KEY] = store if store is not None else build_store(app)

    # Users always live in the relational database
    os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        db.create_all()

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # User loader for Flask-Login
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return render_template('errors/500.html'), 500

    # Template filters
    from .services.pricing import format_money

    @app.template_filter('money')
    def money_filter(value):
        """Render a Decimal amount with two places."""
        return format_money(value)

    @app.template_filter('format_date')
    def format_date_filter(value, format='%b %d, %Y'):
        """Format date string or datetime object."""
        if not value:
            return ''
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError:
                return value
        return value.strftime(format)

    # Context processors
    @app.context_processor
    def inject_globals():
        from .utils.session_cart import load_cart
        from .services.order_status import status_view
        return dict(cart_count=load_cart(quiet=True).count, status_view=status_view)

    return app
