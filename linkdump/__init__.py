"""
Flask app factory: registers config, logging, queue state, blueprints, and error handlers.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional, Type

from flask import Flask
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound, RequestEntityTooLarge

from linkdump.config import Config, DevelopmentConfig, ProductionConfig
from linkdump.utils import init_logging, text_response
from linkdump.settings import LinkdumpSettings
from linkdump.transport import MailTransport
from linkdump.ports import MailTransportPort
from linkdump.managers.queue_store import LinkQueue
from linkdump.managers.flush_manager import FlushController
from linkdump.routes import links as links_bp
from linkdump.routes import dump as dump_bp

FORBIDDEN = "403 Method Not Allowed\n"


def create_app(
    config_class: Type[Config] | None = None,
    overrides: Optional[Mapping[str, Any]] = None,
    transport: MailTransportPort | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_class: Explicit config class; otherwise chosen from FLASK_ENV.
        overrides: Config keys applied on top of the class (e.g. CLI flags).
        transport: Mail transport to use instead of one built from MAILER_COMMAND.
    """
    app = Flask(__name__)

    # Config selection
    cfg: Type[Config]
    env = os.getenv("FLASK_ENV", "production").lower()
    if config_class is not None:
        cfg = config_class
    elif env.startswith("dev"):
        cfg = DevelopmentConfig
    else:
        cfg = ProductionConfig
    app.config.from_object(cfg)
    if overrides:
        app.config.update(overrides)

    # Validate once; raises pydantic.ValidationError on bad settings
    settings = LinkdumpSettings.from_config(app.config)
    app.config.update(settings.as_config())

    # Logging
    logger = init_logging(app)
    app.logger = logger  # align Flask's logger with ours

    # Shared queue state stored in extensions registry
    queue = LinkQueue(logger=logger)
    if transport is None:
        transport = MailTransport(
            command=settings.mailer_command,
            timeout=settings.mailer_timeout,
            logger=logger,
        )
    app.extensions["link_queue"] = queue
    app.extensions["flush_ctl"] = FlushController(
        queue=queue,
        config=settings.flush_config(),
        transport=transport,
        logger=logger,
    )

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        return resp

    # Error handlers: anything outside the known routes is forbidden
    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_forbidden(_e):
        return text_response(FORBIDDEN, 403)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(_e):
        return text_response("413 Request Entity Too Large\n", 413)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return text_response(f"{e.code} {e.name}\n", e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e: Exception):
        app.logger.exception("Unhandled error")
        return text_response("500 Internal Server Error\n", 500)

    # Blueprints
    app.register_blueprint(links_bp.bp)
    app.register_blueprint(dump_bp.bp)

    logger.info(
        "linkdump ready: minimum %d links, dumps go to %s via %s",
        settings.link_min,
        settings.email_addr,
        settings.mailer_command,
    )
    return app
