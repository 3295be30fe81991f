import os


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///volksfestfinder.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    # bearer tokens are valid for 7 days
    TOKEN_MAX_AGE = int(os.getenv('TOKEN_MAX_AGE', 7 * 24 * 60 * 60))
    # reject the whole region update instead of dropping unknown regions
    STRICT_REGION_SUBSCRIPTIONS = os.getenv('STRICT_REGION_SUBSCRIPTIONS', '0').lower() in ('1', 'true', 'yes')
