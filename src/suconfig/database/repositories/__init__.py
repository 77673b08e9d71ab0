from .settings import SettingsRepository

__all__ = ["SettingsRepository"]
