import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError

from gymcloud.config import config
from gymcloud.errors import GymError
from gymcloud.extensions import db, ma, jwt, migrate, limiter
from gymcloud.models import User

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("gymcloud").setLevel(level)
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(GymError)
    def handle_gym_error(error):
        db.session.rollback()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(error):
        return jsonify({
            "msg": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "details": error.messages,
        }), 400

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.exception("Database error")
        return jsonify({"msg": "Internal server error", "code": "INTERNAL_ERROR"}), 500

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({"msg": "Not found", "code": "NOT_FOUND"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({"msg": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}), 405

    @app.errorhandler(429)
    def handle_rate_limited(error):
        return jsonify({"msg": "Too many requests", "code": "RATE_LIMITED"}), 429


def register_jwt_callbacks():
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired", "code": "TOKEN_EXPIRED"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({"msg": "Invalid token", "code": "INVALID_TOKEN"}), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(error):
        return jsonify({"msg": "Missing authorization", "code": "UNAUTHORIZED"}), 401

    @jwt.user_lookup_error_loader
    def user_lookup_error_callback(jwt_header, jwt_data):
        return jsonify({"msg": "User no longer exists", "code": "UNAUTHORIZED"}), 401


def create_app(config_name=None):
    app = Flask(__name__)

    # settings
    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config[config_name])
    configure_logging(app)

    # extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    }})

    register_jwt_callbacks()
    register_error_handlers(app)

    # Blueprints
    from gymcloud.routes.auth import auth_bp
    from gymcloud.routes.users import users_bp
    from gymcloud.routes.routines import routines_bp, independent_bp
    from gymcloud.routes.logs import logs_bp
    from gymcloud.routes.exercises import exercises_bp
    from gymcloud.routes.audit import audit_bp
    from gymcloud.routes.branding import branding_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(routines_bp, url_prefix="/api/routines")
    app.register_blueprint(independent_bp, url_prefix="/api/independent-routines")
    app.register_blueprint(logs_bp, url_prefix="/api/logs")
    app.register_blueprint(exercises_bp, url_prefix="/api/exercises")
    app.register_blueprint(audit_bp, url_prefix="/api/audit")
    app.register_blueprint(branding_bp, url_prefix="/api/branding")

    logger.debug("gymcloud app created with %s config", config_name)
    return app


# JWT callback
@jwt.user_lookup_loader
def user_lookup_callback(_jwt_header, jwt_data):
    identity = jwt_data["sub"]
    return db.session.get(User, int(identity))
