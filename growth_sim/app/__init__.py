"""Application factory and app-wide configuration."""

import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from growth_sim.app.api.routes import api_bp
from growth_sim.app.config import Config
from growth_sim.database import init_db


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    load_dotenv()
    app = Flask(__name__)
    app.config.update(Config.from_env().to_flask())
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    init_db(app.config["DATABASE_PATH"])
    app.register_blueprint(api_bp, url_prefix="/api")
    return app
