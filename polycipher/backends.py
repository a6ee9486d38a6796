"""
Cipher backends
===============
Two interchangeable providers of the same capability:

    engine  -- the pure-Python repeating-key engine (polycipher.engine)
    native  -- the opaque C library behind polycipher.native

Callers pick one by name (usually from Settings.backend); nothing
inherits from anything.
"""

import logging
from typing import Protocol

from .config import DEFAULT_SETTINGS, Settings
from .engine import decrypt, encrypt
from .keys import NumericKey, parse_key
from .native import NativeCipher

logger = logging.getLogger(__name__)


class CipherBackend(Protocol):
    name: str

    def encode(self, text: str, key) -> str: ...

    def decode(self, text: str, key) -> str: ...


class EngineBackend:
    name = "engine"

    def __init__(self, unsupported: str = "keep"):
        self._unsupported = unsupported

    def encode(self, text: str, key) -> str:
        return encrypt(text, key, self._unsupported)

    def decode(self, text: str, key) -> str:
        return decrypt(text, key, self._unsupported)


class NativeBackend:
    name = "native"

    def __init__(self, cipher: NativeCipher = None, settings: Settings = None):
        self._cipher = cipher if cipher is not None else NativeCipher(settings=settings)

    def encode(self, text: str, key) -> str:
        key = parse_key(key)
        if isinstance(key, NumericKey):
            return self._cipher.encrypt_numeric(text, key.shift)
        return self._cipher.encrypt_text(text, key.keyword)

    def decode(self, text: str, key) -> str:
        key = parse_key(key)
        if isinstance(key, NumericKey):
            return self._cipher.decrypt_numeric(text, key.shift)
        return self._cipher.decrypt_text(text, key.keyword)


def get_backend(name: str = None, settings: Settings = None) -> CipherBackend:
    """Return the backend called `name` (default: settings.backend)."""
    settings = settings or DEFAULT_SETTINGS
    name = name or settings.backend
    if name == "engine":
        backend = EngineBackend(settings.unsupported)
    elif name == "native":
        backend = NativeBackend(settings=settings)
    else:
        raise ValueError(f"Unknown cipher backend {name!r}; expected 'engine' or 'native'.")
    logger.info(f"Cipher backend: {backend.name}")
    return backend
