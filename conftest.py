# conftest.py

import os

import pytest

# Set testing environment BEFORE importing app so app.py loads TestingConfig
os.environ["FLASK_ENV"] = "testing"

# Now import app and other modules after environment is set
from app import app as flask_app  # noqa: E402
from weldlog.models import FieldDefinition, FieldType, Weld, db  # noqa: E402
from weldlog.services.weld_store import parse_weld_date  # noqa: E402
from weldlog.utils.logging_config import setup_logging  # noqa: E402


@pytest.fixture(scope="function")
def app(tmp_path):
    """Create and configure a test Flask application with fresh tables"""
    flask_app.config.update(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret-key-for-testing-only",
            "UPLOAD_DIR": str(tmp_path / "uploads"),
            "UPLOAD_MAX_CSV_MB": 25,
            "UPLOAD_MAX_IMAGE_MB": 5,
            "WELD_CSV_CUSTOM_FIELDS_ENABLED": False,
            "WELD_EXPORT_FILENAME": "welding-data.csv",
            "ENABLE_FILE_LOGGING": False,
            "ENABLE_CONSOLE_LOGGING": False,
            "LOG_LEVEL": "WARNING",
        }
    )

    # Re-initialize logging so handlers match the test config
    setup_logging(flask_app)

    with flask_app.app_context():
        # Drop any existing tables to ensure clean state
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def app_context(app):
    """Automatically provide app context for all tests"""
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    """Create a test client for the Flask application"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a test CLI runner for the Flask application"""
    return app.test_cli_runner()


@pytest.fixture
def weld_factory(app):
    """Create and commit a weld with sensible defaults"""

    def _create(**overrides):
        values = {"date": "2024-01-15", "weld_number": "W001", "welder": "John Doe"}
        values.update(overrides)
        if isinstance(values["date"], str):
            values["date"] = parse_weld_date(values["date"])
        weld = Weld(**values)
        db.session.add(weld)
        db.session.commit()
        return weld

    return _create


@pytest.fixture
def field_factory(app):
    """Create and commit a field definition"""

    def _create(field_name="heat_input", display_name="Heat Input", **overrides):
        values = {
            "field_name": field_name,
            "display_name": display_name,
            "field_type": FieldType.TEXT,
            "field_order": FieldDefinition.query.count(),
        }
        values.update(overrides)
        field = FieldDefinition(**values)
        db.session.add(field)
        db.session.commit()
        return field

    return _create


def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
