"""Database model base definitions."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()

__all__ = [
    "Base",
    "Mapped",
    "mapped_column",
    "Integer",
    "String",
    "Text",
]
