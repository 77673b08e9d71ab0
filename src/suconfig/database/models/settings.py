"""Settings-store tables.

Integers and booleans share the ``settings`` table (booleans as 0/1);
strings live in ``strings``.
"""

from .base import Base, Integer, Mapped, String, Text, mapped_column


class IntSetting(Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<IntSetting {self.key}={self.value}>"


class StringSetting(Base):
    __tablename__ = "strings"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<StringSetting {self.key}={self.value!r}>"
