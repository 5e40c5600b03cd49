import logging
import os
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask.logging import default_handler
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from auth import register_jwt_callbacks
from database import connect
from docs import docs_bp
from errors import ApiError
from routes.application_routes import application_bp
from routes.auth_routes import auth_bp
from routes.chat_routes import chat_bp
from routes.movie_routes import movie_bp
from routes.user_routes import user_bp
from services.registry import EXTENSION_KEY, build_services

load_dotenv()


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def create_app(test_config=None, mongo_client=None):
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev")
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "secretKey")
    app.config["JWT_TOKEN_LOCATION"] = ["headers"]
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(hours=1)
    app.config["MONGODB_URI"] = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    app.config["MONGODB_DB"] = os.getenv("MONGODB_DB", "movieRental")
    app.config["UPLOAD_FOLDER"] = os.getenv("UPLOAD_FOLDER", "uploads")
    app.config["MAX_UPLOAD_BYTES"] = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
    app.config["PASSWORD_PEPPER"] = os.getenv("PASSWORD_PEPPER", "")
    app.config["MOVIES_READ_REQUIRES_AUTH"] = _env_flag("MOVIES_READ_REQUIRES_AUTH")
    if test_config:
        app.config.update(test_config)

    _init_logging(app)
    CORS(app)

    jwt = JWTManager(app)
    register_jwt_callbacks(jwt)

    database = connect(app.config["MONGODB_URI"], app.config["MONGODB_DB"], client=mongo_client)
    app.extensions[EXTENSION_KEY] = build_services(database, pepper=app.config["PASSWORD_PEPPER"])

    app.register_blueprint(auth_bp)
    app.register_blueprint(movie_bp)
    app.register_blueprint(application_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(chat_bp)
    app.register_blueprint(docs_bp)
    _register_error_handlers(app)

    @app.route("/")
    def home_page():
        return "Welcome to the Movie Rental API"

    return app


_log_handler = logging.StreamHandler()
_log_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))


def _init_logging(app):
    level = logging.DEBUG if app.debug else logging.INFO
    app.logger.removeHandler(default_handler)
    # service modules log under "services.*"
    for logger in (app.logger, logging.getLogger("services")):
        logger.setLevel(level)
        if _log_handler not in logger.handlers:
            logger.addHandler(_log_handler)


def _register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"message": "Internal server error"}), 500


if __name__ == "__main__":
    create_app().run(port=int(os.getenv("PORT", "3000")), debug=True)
