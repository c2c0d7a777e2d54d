# weldlog/utils/logging_config.py

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from flask import has_request_context, request
from flask.logging import default_handler


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects"""

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if has_request_context():
            payload["method"] = request.method
            payload["path"] = request.path
            payload["remote_addr"] = request.remote_addr
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(module)s:%(lineno)d - %(message)s"


def _build_formatter(log_format):
    if str(log_format).lower() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(app):
    """Configure the application logger from the monitoring config"""
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = _build_formatter(app.config.get("LOG_FORMAT", "text"))

    app.logger.removeHandler(default_handler)

    # Re-running setup (tests do) must not stack handlers
    for handler in list(app.logger.handlers):
        if getattr(handler, "_weldlog_handler", False):
            app.logger.removeHandler(handler)
            handler.close()

    app.logger.setLevel(level)

    if app.config.get("ENABLE_CONSOLE_LOGGING", True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        console_handler._weldlog_handler = True
        app.logger.addHandler(console_handler)

    if app.config.get("ENABLE_FILE_LOGGING", False):
        log_dir = app.config.get("LOG_DIR", "logs")
        if not os.path.isabs(log_dir):
            log_dir = os.path.join(app.root_path, log_dir)
        try:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, app.config.get("LOG_FILE_NAME", "weldlog.log")),
                maxBytes=app.config.get("LOG_FILE_MAX_BYTES", 10485760),
                backupCount=app.config.get("LOG_FILE_BACKUP_COUNT", 10),
            )
        except OSError as e:
            app.logger.warning(f"File logging disabled, could not open log directory {log_dir}: {str(e)}")
        else:
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            file_handler._weldlog_handler = True
            app.logger.addHandler(file_handler)

    app.logger.debug(f"Logging configured: level={level_name} format={app.config.get('LOG_FORMAT')}")

