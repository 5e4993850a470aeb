import logging

from flask import Flask
from flask_migrate import Migrate
from user_settings.extensions import db, cors
from user_settings.routes import register_routes
from user_settings.services.user_service import UserNotFoundError
from user_settings.utils.http import error

def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object("config.Config")
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database
    db.init_app(app)

    # Initialize Flask-Migrate
    Migrate(app, db)

    # CORS Configuration
    cors.init_app(app,
                  origins=app.config.get("CORS_ORIGINS", []),
                  supports_credentials=True,
                  allow_headers=["Content-Type", "Authorization"],
                  methods=["GET", "PATCH", "OPTIONS"],
                  expose_headers=["Content-Type", "Authorization"])

    register_routes(app)

    @app.errorhandler(UserNotFoundError)
    def user_not_found(exc):
        return error("USER_NOT_FOUND", str(exc), 404)

    return app
