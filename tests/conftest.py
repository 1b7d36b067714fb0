"""Pytest configuration for all tests."""

from pathlib import Path
from typing import Dict, Optional

import pytest

from ableplayer_media.config.settings import core as settings_core

CHROME = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EDGE = CHROME + " Edg/120.0.0.0"
LEGACY_EDGE = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/70.0.3538.102 Safari/537.36 Edge/18.19582"
)
FIREFOX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
SAFARI = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Safari/605.1.15"
)
SAFARI_IOS = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
IE11 = "Mozilla/5.0 (Windows NT 10.0; WOW64; Trident/7.0; rv:11.0) like Gecko"
IE8 = "Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1; Trident/4.0)"


class CountingConfig:
    """Config store that records every lookup."""

    def __init__(
        self,
        videoextensions: Optional[str] = "html_video,media_source,.f4v,.flv",
        audioextensions: Optional[str] = "html_audio",
        media_default_width: int = 400,
    ) -> None:
        self.values: Dict[str, Optional[str]] = {
            "videoextensions": videoextensions,
            "audioextensions": audioextensions,
        }
        self.media_default_width = media_default_width
        self.calls = 0

    def get_config(self, plugin: str, key: str) -> Optional[str]:
        self.calls += 1
        assert plugin == "media_ableplayer"
        return self.values.get(key)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    user_settings = tmp_path / "user_settings.json"
    monkeypatch.setenv("ABLEPLAYER_USER_SETTINGS", str(user_settings))
    for var in (
        "ABLEPLAYER_APP_NAME",
        "ABLEPLAYER_ENV",
        "ABLEPLAYER_LOG_LEVEL",
        "ABLEPLAYER_WWWROOT",
        "ABLEPLAYER_DEFAULT_WIDTH",
        "ABLEPLAYER_VIDEO_EXTENSIONS",
        "ABLEPLAYER_AUDIO_EXTENSIONS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(settings_core, "_SETTINGS_SINGLETON", None)
    return user_settings


@pytest.fixture
def config() -> CountingConfig:
    return CountingConfig()
