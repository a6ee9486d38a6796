"""
Configuration
=============
Defaults for the cipher backend and the cryptanalysis driver.

Every field can be overridden from the environment:

    POLYCIPHER_BACKEND          engine | native
    POLYCIPHER_NATIVE_LIB       path to the native cipher shared library
    POLYCIPHER_MAX_KEY_LENGTH   longest key length the estimator scans
    POLYCIPHER_IOC_THRESHOLD    average IoC that counts as "periodic"
    POLYCIPHER_ALTERNATES       extra IoC-ranked lengths the driver retries
    POLYCIPHER_TOLERANCE        relative chi-squared slack when choosing
    POLYCIPHER_UNSUPPORTED      keep | drop | strict (non-ASCII policy)
    POLYCIPHER_DEFAULT_OUTPUT   default output file for encrypt/decrypt
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

BACKENDS = ("engine", "native")
ENV_PREFIX = "POLYCIPHER_"


@dataclass(frozen=True)
class Settings:
    backend: str = "engine"
    native_lib: Optional[str] = None
    max_key_length: int = 20
    ioc_threshold: float = 0.058
    alternates: int = 3
    tolerance: float = 0.5
    unsupported: str = "keep"
    default_output: str = "out.txt"

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.max_key_length < 1:
            raise ValueError("max_key_length must be at least 1.")
        if not 0.0 < self.ioc_threshold < 1.0:
            raise ValueError("ioc_threshold must be between 0 and 1.")
        if self.alternates < 0:
            raise ValueError("alternates must not be negative.")
        if self.tolerance < 0:
            raise ValueError("tolerance must not be negative.")
        if self.unsupported not in ("keep", "drop", "strict"):
            raise ValueError(f"unsupported must be keep, drop or strict, got {self.unsupported!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> "Settings":
        """Build settings from POLYCIPHER_* variables, defaults elsewhere."""
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.name in ("max_key_length", "alternates"):
                values[f.name] = int(raw)
            elif f.name in ("ioc_threshold", "tolerance"):
                values[f.name] = float(raw)
            else:
                values[f.name] = raw
        return cls(**values)


DEFAULT_SETTINGS = Settings()
