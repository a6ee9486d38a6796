"""NATIVE CIPHER
Alternate cipher implementation living in a prebuilt C library
(libencrypt_nativelib), reached through ctypes.

The library is a black box with the same contract as the Python engine:

    char *encrypt1(char *text, int key)     numeric shift
    char *decrypt1(char *text, int key)
    char *encrypt2(char *text, char *key)   keyword
    char *decrypt2(char *text, char *key)

Keys are validated on the Python side before they cross the boundary, so
the library never sees an empty keyword or an out-of-range shift.

Lookup order: explicit path, POLYCIPHER_NATIVE_LIB, then the platform
library names below.
"""

import ctypes
import logging

from .config import DEFAULT_SETTINGS, Settings
from .errors import NativeLibraryError
from .keys import NumericKey, TextualKey

logger = logging.getLogger(__name__)


class NativeCipher:
    """ctypes binding for the four native encrypt/decrypt entry points."""

    LIBRARY_NAMES = ('libencrypt_nativelib.so', './libencrypt_nativelib.so',
                     'libencrypt_nativelib.dylib', '/usr/local/lib/libencrypt_nativelib.so',
                     '/usr/local/lib/libencrypt_nativelib.dylib',
                     'encrypt_nativelib.dll')
    ENCODING = "ascii"

    def __init__(self, lib=None, path: str = None, settings: Settings = None):
        settings = settings or DEFAULT_SETTINGS
        self._lib = lib if lib is not None else self._load_library(path or settings.native_lib)
        self._configure_signatures()

    @classmethod
    def _load_library(cls, path: str = None) -> ctypes.CDLL:
        names = (path,) if path else cls.LIBRARY_NAMES
        for name in names:
            try:
                lib = ctypes.CDLL(name)
                logger.info(f"Native cipher library loaded: {name}")
                return lib
            except OSError:
                continue
        raise NativeLibraryError(
            "Native cipher library not found. Build libencrypt_nativelib and either\n"
            "  put it on the loader path, or\n"
            "  set POLYCIPHER_NATIVE_LIB=/path/to/libencrypt_nativelib.so"
        )

    def _configure_signatures(self):
        lib = self._lib
        for fn in ('encrypt1', 'decrypt1'):
            getattr(lib, fn).argtypes = [ctypes.c_char_p, ctypes.c_int]
            getattr(lib, fn).restype = ctypes.c_char_p
        for fn in ('encrypt2', 'decrypt2'):
            getattr(lib, fn).argtypes = [ctypes.c_char_p, ctypes.c_char_p]
            getattr(lib, fn).restype = ctypes.c_char_p

    def _call(self, fn_name: str, text: str, key) -> str:
        try:
            raw = text.encode(self.ENCODING)
        except UnicodeEncodeError as exc:
            raise NativeLibraryError(f"Native cipher only accepts ASCII text: {exc}") from exc
        out = getattr(self._lib, fn_name)(raw, key)
        if out is None:
            raise NativeLibraryError(f"Native {fn_name} returned NULL.")
        return out.decode(self.ENCODING)

    def encrypt_numeric(self, text: str, shift: int) -> str:
        key = NumericKey(shift)
        return self._call('encrypt1', text, key.shift)

    def decrypt_numeric(self, text: str, shift: int) -> str:
        key = NumericKey(shift)
        return self._call('decrypt1', text, key.shift)

    def encrypt_text(self, text: str, keyword: str) -> str:
        key = TextualKey(keyword)
        return self._call('encrypt2', text, key.keyword.encode(self.ENCODING))

    def decrypt_text(self, text: str, keyword: str) -> str:
        key = TextualKey(keyword)
        return self._call('decrypt2', text, key.keyword.encode(self.ENCODING))

    def __repr__(self):
        return f"NativeCipher({getattr(self._lib, '_name', self._lib)!r})"
