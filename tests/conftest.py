"""
Shared pytest fixtures for sodix tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sodix.crypto.provider import get_provider
from sodix.crypto.keys import KeyStore


@pytest.fixture(params=["sodium", "openssl"])
def provider(request):
    """Each primitive provider in turn."""
    return get_provider(request.param)


@pytest.fixture
def sodium():
    return get_provider("sodium")


@pytest.fixture
def key_dir(tmp_path):
    return tmp_path / "keys"


@pytest.fixture
def store(key_dir, provider):
    return KeyStore(key_dir, provider)


@pytest.fixture
def alice(tmp_path, provider):
    """A generated key set for one party."""
    store = KeyStore(tmp_path / "alice", provider)
    return store.generate()


@pytest.fixture
def bob(tmp_path, provider):
    """A generated key set for the other party."""
    store = KeyStore(tmp_path / "bob", provider)
    return store.generate()


@pytest.fixture
def no_config(tmp_path):
    """Path of a config file that does not exist (defaults only)."""
    return str(tmp_path / "absent.toml")
