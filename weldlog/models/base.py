# weldlog/models/base.py

from datetime import datetime, timezone

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

db = SQLAlchemy()


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """Abstract base providing timestamps and error-safe persistence helpers"""

    __abstract__ = True

    created_at = db.Column(db.DateTime, default=utc_now, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    @classmethod
    def safe_create(cls, **kwargs):
        """Create and commit a new instance, returning (instance, error)"""
        try:
            instance = cls(**kwargs)
            db.session.add(instance)
            db.session.commit()
            return instance, None
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(f"Integrity error creating {cls.__name__}: {str(e.orig)}")
            return None, f"Duplicate or invalid value: {str(e.orig)}"
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Database error creating {cls.__name__}: {str(e)}")
            return None, str(e)

    def safe_update(self, **kwargs):
        """Apply attribute updates and commit, returning (success, error)"""
        try:
            for key, value in kwargs.items():
                setattr(self, key, value)
            db.session.commit()
            return True, None
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(
                f"Integrity error updating {self.__class__.__name__} {getattr(self, 'id', None)}: {str(e.orig)}"
            )
            return False, f"Duplicate or invalid value: {str(e.orig)}"
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(
                f"Database error updating {self.__class__.__name__} {getattr(self, 'id', None)}: {str(e)}"
            )
            return False, str(e)

    def safe_delete(self):
        """Delete and commit, returning (success, error)"""
        try:
            db.session.delete(self)
            db.session.commit()
            return True, None
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(
                f"Database error deleting {self.__class__.__name__} {getattr(self, 'id', None)}: {str(e)}"
            )
            return False, str(e)
