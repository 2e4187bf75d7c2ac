import pytest

from novel_extraction.core.config import get_settings, reload_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """每个测试都从干净的配置缓存开始，结束后按当前环境变量重新加载"""
    get_settings.cache_clear()
    yield
    reload_settings()
