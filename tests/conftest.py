"""Root test configuration: isolate tests from the caller's MDTREE_* environment"""

import os

import pytest

from mdtree.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDTREE_* variables so settings come only from what each test sets."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
