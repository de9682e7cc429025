import logging
import os
import sys

from flask import Flask
from flask.logging import default_handler

from db import create_store

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s %(message)s  (in %(filename)s:%(lineno)d)"


def load_config() -> dict:
    """Read settings from the environment."""
    return {
        "SECRET_KEY":        os.environ.get('SECRET_KEY'),
        "OTP_ISSUER":        os.environ.get('OTP_ISSUER', "SecureSuite"),
        "OTP_STEP":          int(os.environ.get('OTP_STEP', 30)),
        "OTP_DIGITS":        int(os.environ.get('OTP_DIGITS', 6)),
        "OTP_VERIFY_WINDOW": int(os.environ.get('OTP_VERIFY_WINDOW', 1)),
        "ACCOUNT_STORE":     os.environ.get('ACCOUNT_STORE', "memory"),
        "DATABASE":          os.environ.get('DATABASE', "./accounts.db"),
        "LOG_LEVEL":         os.environ.get('LOG_LEVEL', "INFO").upper(),
        "PORT":              int(os.environ.get('PORT', 3001)),
    }


def configure_logging(app: Flask):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    app.logger.removeHandler(default_handler)
    for logger in (app.logger, logging.getLogger("securesuite")):
        # handlers are shared between apps built in the same process
        if not logger.handlers:
            logger.addHandler(handler)
        logger.setLevel(app.config["LOG_LEVEL"])


def create_app(config: dict = None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    configure_logging(app)
    create_store(app)

    from main import api
    app.register_blueprint(api)

    app.logger.debug("using %s account store", app.config["ACCOUNT_STORE"])
    return app


app = create_app()
