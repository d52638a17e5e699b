import os
from datetime import datetime, timedelta


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///gymcloud.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'your-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_TOKEN_LOCATION = ['headers', 'cookies']
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_COOKIE_SAMESITE = 'Lax'
    JWT_ACCESS_COOKIE_NAME = 'access_token_cookie'
    JWT_ACCESS_COOKIE_PATH = '/'

    # CORS
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')

    # Rate Limiting
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_HEADERS_ENABLED = True
    LOGIN_RATE_LIMIT = "10 per 15 minutes"

    # Password Policy
    PASSWORD_MIN_LENGTH = 8
    RESET_TOKEN_TTL = timedelta(minutes=10)
    # No mail delivery yet; the token goes back in the forgot-password response.
    RESET_TOKEN_IN_RESPONSE = True

    # Subscriptions
    STAFF_SUBSCRIPTION_END = datetime(2050, 12, 31, 23, 59, 59)
    SUBSCRIPTION_WARNING_DAYS = 3
    SUBSCRIPTION_EXPIRED_MESSAGE = (
        "Your subscription has expired. Please visit the front desk to renew your access."
    )
    SUBSCRIPTION_WARNING_MESSAGE = "Heads up! Your subscription expires in {days} days."

    # Audit
    AUDIT_PAGE_SIZE = 200
    AUDIT_EXPORT_LIMIT = 10000

    # Branding defaults, used until an admin saves their own
    DEFAULT_BRANDING = {
        "logo": "https://game-icons.net/icons/000000/ffffff/1x1/delapouite/spartan-helmet.png",
        "gym_name": "Ares GYM",
        "primary_color": "#eab308",
        "secondary_color": "#000000",
        "login_bg_url": "https://images.unsplash.com/photo-1534438327276-14e5300c3a48",
        "welcome_text": "GET READY FOR GLORY",
        "contact_info": "+1 234 567 890 | ares@gym.com",
    }

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    JWT_COOKIE_SECURE = False  # allow plain HTTP while developing


class ProductionConfig(Config):
    DEBUG = False
    # must come from the environment in production
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    RESET_TOKEN_IN_RESPONSE = False

    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'testing-secret-key-with-enough-length-for-hs256'
    JWT_COOKIE_SECURE = False
    RATELIMIT_ENABLED = False
    LOG_LEVEL = 'DEBUG'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
