"""Configuration loading from environment variables and CLI flags."""

import codecs
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_ENCODING = "utf-8"

ENV_ENCODING = "FIXMATH_ENCODING"


@dataclass
class Config:
    encoding: str

    @classmethod
    def from_env(cls, encoding_override: Optional[str] = None) -> "Config":
        encoding = encoding_override or os.environ.get(ENV_ENCODING, "") or DEFAULT_ENCODING
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise RuntimeError(
                f"Unknown encoding {encoding!r}. "
                f"Pass --encoding or set {ENV_ENCODING} in your environment or .env file."
            ) from None
        return cls(encoding=encoding)
