"""Shared fixtures for the content encryption tests."""

import importlib.util

import pytest

from cbchs.crypto.aes import CryptographyAESEngine, PyCryptodomeAESEngine
from cbchs.crypto.variants import SUPPORTED_ALGORITHMS


ENGINE_PARAMS = [
    pytest.param(CryptographyAESEngine, id='cryptography'),
    pytest.param(
        PyCryptodomeAESEngine,
        id='pycryptodome',
        marks=pytest.mark.skipif(
            importlib.util.find_spec('Crypto') is None, reason="pycryptodome not installed"
        ),
    ),
]


class RecordingEngine:
    """Wraps a real engine and records every call."""

    name = 'recording'

    def __init__(self, inner=None):
        self.inner = inner or CryptographyAESEngine()
        self.calls = []

    def encrypt(self, plaintext, key, iv):
        self.calls.append(('encrypt', key, iv))
        return self.inner.encrypt(plaintext, key, iv)

    def decrypt(self, ciphertext, key, iv):
        self.calls.append(('decrypt', key, iv))
        return self.inner.decrypt(ciphertext, key, iv)


@pytest.fixture(params=ENGINE_PARAMS)
def engine(request):
    return request.param()


@pytest.fixture(params=sorted(SUPPORTED_ALGORITHMS))
def algorithm(request):
    return request.param


@pytest.fixture
def recording_engine():
    return RecordingEngine()


@pytest.fixture(autouse=True)
def clear_engine_env(monkeypatch):
    monkeypatch.delenv('CBCHS_AES_ENGINE', raising=False)
    monkeypatch.delenv('CBCHS_LOG_LEVEL', raising=False)
