"""
Base model class for all database models.

Provides common functionality and fields for all models:
- Integer primary key plus a stable UUID column
- Timestamp fields (created_at, updated_at)
- Utility methods (to_dict)
- SQLAlchemy declarative base
"""

import uuid as uuid_lib
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base, validates

from recipe_keeper.utils.datetime_utils import utc_now

# Create the declarative base for all models
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    All models inherit from this class to get:
    - id: Primary key
    - uuid: Externally shareable identifier
    - created_at: Timestamp when record was created
    - updated_at: Timestamp when record was last modified
    - to_dict(): Convert model to dictionary
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Stored as string for SQLite compatibility
    uuid = Column(
        String(36), unique=True, nullable=False, default=lambda: str(uuid_lib.uuid4()), index=True
    )

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model column values to a dictionary.

        Datetimes are rendered as ISO 8601 strings. Subclasses add their
        relationships explicitly.
        """
        result = {}

        for column in self.__table__.columns:
            value = getattr(self, column.name)

            if isinstance(value, datetime):
                value = value.isoformat()

            result[column.name] = value

        return result

    @validates("uuid")
    def _validate_uuid(self, _key: str, value: Any) -> str:
        """Normalize UUID values to strings for SQLite compatibility."""
        if value is None:
            return value
        return str(value)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        attrs = []

        if getattr(self, "id", None) is not None:
            attrs.append(f"id={self.id}")

        if getattr(self, "title", None) is not None:
            attrs.append(f"title='{self.title}'")

        attrs_str = ", ".join(attrs)
        return f"{class_name}({attrs_str})"
