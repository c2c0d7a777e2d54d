# config.py
import os


def _coerce_bool(value, default=False):
    """Convert environment-style truthy/falsey values to bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    value_str = str(value).strip().lower()
    if value_str in {"1", "true", "yes", "on"}:
        return True
    if value_str in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value, default, *, minimum=None, maximum=None):
    """
    Parse an integer environment value, falling back to ``default``.

    Values outside the optional bounds are clamped.
    """
    if value is None or str(value).strip() == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    if minimum is not None and number < minimum:
        number = minimum
    if maximum is not None and number > maximum:
        number = maximum
    return number


class Config:
    # SECRET_KEY must be set via environment variable in production
    # Generate with: python -c "import secrets; print(secrets.token_hex(32))"
    _flask_env = os.environ.get("FLASK_ENV", "development")
    _is_testing = _flask_env == "testing"
    _is_production = _flask_env == "production"

    SECRET_KEY = os.environ.get("SECRET_KEY")

    if not SECRET_KEY and _is_production:
        raise ValueError(
            "SECRET_KEY environment variable is required in production. "
            'Generate with: python -c "import secrets; print(secrets.token_hex(32))"'
        )

    if not SECRET_KEY and not _is_testing:
        import warnings

        warnings.warn(
            "SECRET_KEY not set. Using default for development only. "
            "Set SECRET_KEY environment variable before deploying.",
            UserWarning,
        )
        SECRET_KEY = "dev-secret-key-change-in-production"

    if not SECRET_KEY:
        SECRET_KEY = "test-secret-key-placeholder"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Upload configuration
    UPLOAD_DIR = os.environ.get("UPLOAD_DIR")
    UPLOAD_MAX_CSV_MB = _parse_int(os.environ.get("UPLOAD_MAX_CSV_MB"), 25, minimum=1)
    UPLOAD_MAX_IMAGE_MB = _parse_int(os.environ.get("UPLOAD_MAX_IMAGE_MB"), 5, minimum=1)
    # Hard ceiling enforced by werkzeug before any route runs
    MAX_CONTENT_LENGTH = max(UPLOAD_MAX_CSV_MB, UPLOAD_MAX_IMAGE_MB) * 1024 * 1024

    # CSV pipeline configuration
    WELD_CSV_CUSTOM_FIELDS_ENABLED = _coerce_bool(
        os.environ.get("WELD_CSV_CUSTOM_FIELDS_ENABLED"), default=False
    )
    WELD_EXPORT_FILENAME = os.environ.get("WELD_EXPORT_FILENAME", "welding-data.csv")

    # Weld list pagination
    WELDS_PAGE_SIZE_DEFAULT = _parse_int(
        os.environ.get("WELDS_PAGE_SIZE_DEFAULT"), 50, minimum=1, maximum=500
    )
    WELDS_PAGE_SIZE_MAX = 500

    JSON_SORT_KEYS = False


class DevelopmentConfig(Config):
    DEBUG = True
    # Use instance folder for the development database
    _config_dir = os.path.dirname(os.path.abspath(__file__))
    _project_root = os.path.dirname(_config_dir)
    instance_path = os.path.join(_project_root, "instance")

    if not os.path.exists(instance_path):
        os.makedirs(instance_path, exist_ok=True)

    # SQLite URI format: sqlite:///absolute/path (3 slashes for absolute path)
    db_path = os.path.join(instance_path, "weldlog_dev.db")
    db_path_normalized = db_path.replace("\\", "/")
    db_uri = f"sqlite:///{db_path_normalized}"

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", db_uri)
    SQLALCHEMY_ECHO = _coerce_bool(os.environ.get("SQLALCHEMY_ECHO"), default=False)
    if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": 5,
            }
        }
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {}


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    SECRET_KEY = os.environ.get("SECRET_KEY", "test-secret-key-for-testing-only")
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"  # In-memory database for testing
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {
            "check_same_thread": False,
            "timeout": 5,
        }
    }
    WELD_CSV_CUSTOM_FIELDS_ENABLED = False


class ProductionConfig(Config):
    DEBUG = False
    uri = os.environ.get("DATABASE_URL")
    if uri and uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = uri
    SQLALCHEMY_ECHO = False
