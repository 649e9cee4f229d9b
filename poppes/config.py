import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # CSRF Configuration
    WTF_CSRF_ENABLED = True
    WTF_CSRF_CHECK_DEFAULT = True
    WTF_CSRF_TIME_LIMIT = 3600  # 1 hour

    # Identity store - users always live in the relational database
    basedir = os.path.dirname(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{os.path.join(basedir, "instance", "poppes.db")}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Product/order store: sql, dynamodb or memory
    STORE_BACKEND = os.environ.get('STORE_BACKEND', 'sql')

    # DynamoDB Configuration
    AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')
    DYNAMODB_PRODUCTS_TABLE = os.environ.get('DYNAMODB_PRODUCTS_TABLE', 'Poppes_Products')
    DYNAMODB_ORDERS_TABLE = os.environ.get('DYNAMODB_ORDERS_TABLE', 'Poppes_Orders')

    # Cart slot in the signed session cookie
    CART_STORAGE_KEY = 'poppes-cart'
    PERMANENT_SESSION_LIFETIME = timedelta(days=30)

    # Catalogue
    FEATURED_PRODUCTS_LIMIT = 4
    LOW_STOCK_THRESHOLD = 5

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    STORE_BACKEND = 'sql'
    WTF_CSRF_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
