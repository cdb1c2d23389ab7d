import logging

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Config
from .notion import NotionError, notion

logger = logging.getLogger(__name__)


def _configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _origins(value):
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    _configure_logging(app.config["LOG_LEVEL"])

    # initialize extensions
    notion.init_app(app)
    # the browser extension calls from a chrome-extension:// origin
    CORS(app, origins=_origins(app.config["CORS_ORIGINS"]))

    from .pages.routes import pages_bp
    from .cli import register_commands

    app.register_blueprint(pages_bp)
    register_commands(app)

    @app.errorhandler(NotionError)
    def notion_failed(e):
        logger.error("Notion request failed: %s", e.message)
        return {"success": False, "error": e.message}, 500

    @app.errorhandler(HTTPException)
    def http_error(e):
        return {"success": False, "error": e.description}, e.code

    logger.info("Notion API key configured: %s", bool(app.config["NOTION_KEY"]))
    logger.info("Notion data source configured: %s", bool(app.config["NOTION_DATASOURCE_ID"]))
    return app
