import logging

from flask import Flask
from dotenv import load_dotenv

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from errors import register_error_handlers  # noqa: E402
from extensions import db, login_manager  # noqa: E402  (load_dotenv needs to run first)


def create_app(config_class=Config) -> Flask:
    """Application factory for the VolksfestFinder API."""

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)

    # blueprints
    from modules.users import bp as users_bp
    from modules.festivals import bp as festivals_bp
    from modules.admin import bp as admin_bp

    app.register_blueprint(users_bp)
    app.register_blueprint(festivals_bp)
    app.register_blueprint(admin_bp)

    register_error_handlers(app)

    # DB
    with app.app_context():
        # models must be imported before create_all()
        import models  # noqa: F401
        from modules.festivals import models as festival_models  # noqa: F401

        db.create_all()

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
