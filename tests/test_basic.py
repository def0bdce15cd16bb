import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mediashare.config import Settings
from mediashare.core.video import VideoHost
from mediashare.core.resolver import HOSTS
from mediashare.models.video import VideoProvider
from mediashare.utils.cache import ThumbnailCache

def test_every_provider_has_a_host():
    assert {h.provider for h in HOSTS} == set(VideoProvider)
    assert all(isinstance(h, VideoHost) for h in HOSTS)

def test_settings_defaults():
    s = Settings()
    assert s.IMGBB_BASE_URL == "https://api.imgbb.com/1/upload"
    assert s.IMGBB_MAX_FILE_SIZE == 10 * 1024 * 1024
    assert s.FRAME_TIMEOUT == 30.0

def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("IMGBB_API_KEY", "from-env")
    monkeypatch.setenv("VIEWPORT_WIDTH", "700")
    s = Settings()
    assert s.IMGBB_API_KEY == "from-env"
    assert s.VIEWPORT_WIDTH == 700

def test_cache_basics():
    cache = ThumbnailCache()
    assert "a" not in cache
    cache.set("a", "1")
    cache.set("a", "2")
    assert cache.get("a") == "2"
    assert len(cache) == 1
    assert list(cache) == ["a"]
    cache.clear()
    assert cache.get("a") is None
