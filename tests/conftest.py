import pytest

from adaptknn import config as ak_config


@pytest.fixture(autouse=True)
def _fresh_runtime_config():
    ak_config.reset_runtime_config_cache()
    yield
    ak_config.reset_runtime_config_cache()
