from typing import Optional

from logseq_marketplace.core.settings import FetchSettings, load_settings

_settings: Optional[FetchSettings] = None


def get_settings() -> FetchSettings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def set_settings(settings: Optional[FetchSettings]) -> None:
    global _settings
    _settings = settings
