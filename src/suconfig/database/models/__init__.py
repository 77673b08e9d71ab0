from .base import Base
from .settings import IntSetting, StringSetting

__all__ = ["Base", "IntSetting", "StringSetting"]
