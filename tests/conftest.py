import os

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep IMAGEBOT_* variables from the outer environment out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("IMAGEBOT_"):
            monkeypatch.delenv(name, raising=False)
