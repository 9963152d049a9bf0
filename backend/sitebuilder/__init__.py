import logging
import os

from flask import Flask, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .cli import auth_cli, layout_cli

# Registers the mappers so string relationships resolve
from .models import audit_log, form_submission, page, post, site_settings  # noqa: F401

OPENAPI_DIR = os.path.join(os.path.dirname(__file__), "api", "v1")
OPENAPI_FILE = "cms_openapi.yaml"
SWAGGER_URL = "/swagger"
OPENAPI_URL = "/openapi/cms.yaml"


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger("sitebuilder").setLevel(level)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Blueprints, errors and commands
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    app.cli.add_command(layout_cli)
    app.cli.add_command(auth_cli)

    # -------------------------------------------------
    # API docs (public)
    # -------------------------------------------------
    @app.get(OPENAPI_URL, endpoint="openapi_cms")
    def serve_openapi():
        return send_from_directory(OPENAPI_DIR, OPENAPI_FILE, mimetype="application/yaml")

    app.register_blueprint(
        get_swaggerui_blueprint(
            SWAGGER_URL,
            OPENAPI_URL,
            config={"app_name": "Site Builder CMS API", "deepLinking": True, "persistAuthorization": True},
        ),
        url_prefix=SWAGGER_URL,
    )

    app.logger.debug("Site builder CMS created with %s config", config_name)
    return app
