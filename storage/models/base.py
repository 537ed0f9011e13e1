"""
Base ORM Model.

============================================================
PURPOSE
============================================================
Provides the declarative base used by all ORM models in the
brokerage backend.

============================================================
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base for all ORM models.

    All models inherit from this base, which provides a common
    foundation for table creation and relationship mapping.
    """

    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }
