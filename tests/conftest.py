import pytest

from layer_graph.config import ENV_VARS


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for env_name in ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
