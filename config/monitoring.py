# config/monitoring.py

import os

from .base import _coerce_bool, _parse_int


class MonitoringConfig:
    """Logging and health check settings for the weld log API"""

    HEALTH_CHECK_ENDPOINT = os.environ.get("HEALTH_CHECK_ENDPOINT", "/api/health")

    # Log output
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json")  # 'json' or 'text'
    LOG_DIR = os.environ.get("LOG_DIR", "logs")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "weldlog.log")
    LOG_FILE_MAX_BYTES = _parse_int(os.environ.get("LOG_FILE_MAX_BYTES"), 10 * 1024 * 1024, minimum=1024)
    LOG_FILE_BACKUP_COUNT = _parse_int(os.environ.get("LOG_FILE_BACKUP_COUNT"), 10, minimum=0)

    ENABLE_FILE_LOGGING = _coerce_bool(os.environ.get("ENABLE_FILE_LOGGING"), default=True)
    ENABLE_CONSOLE_LOGGING = _coerce_bool(os.environ.get("ENABLE_CONSOLE_LOGGING"), default=True)

    # Reported by the health check
    APP_NAME = os.environ.get("APP_NAME", "Welding App Backend")
    APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")


class DevelopmentMonitoringConfig(MonitoringConfig):
    """Readable debug output on the console and in logs/"""

    LOG_LEVEL = "DEBUG"
    LOG_FORMAT = "text"
    ENABLE_FILE_LOGGING = True
    ENABLE_CONSOLE_LOGGING = True


class ProductionMonitoringConfig(MonitoringConfig):
    """JSON lines to the rotating log file; stdout is left to the process manager"""

    LOG_LEVEL = "INFO"
    LOG_FORMAT = "json"
    ENABLE_FILE_LOGGING = True
    ENABLE_CONSOLE_LOGGING = False


class TestingMonitoringConfig(MonitoringConfig):
    """Quiet logging for the test suite"""

    LOG_LEVEL = "WARNING"
    LOG_FORMAT = "text"
    ENABLE_FILE_LOGGING = False
    ENABLE_CONSOLE_LOGGING = False
