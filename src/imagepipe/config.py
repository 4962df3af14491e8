# config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TIMEOUT = 30.0


def _flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class Settings:
    api_url: Optional[str] = None
    token: Optional[str] = None
    namespace: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            api_url=env.get("IMAGEPIPE_API_URL") or None,
            token=env.get("IMAGEPIPE_TOKEN") or None,
            namespace=env.get("IMAGEPIPE_NAMESPACE") or None,
            timeout=float(env.get("IMAGEPIPE_TIMEOUT", DEFAULT_TIMEOUT)),
            verify_tls=_flag(env.get("IMAGEPIPE_VERIFY_TLS", "true")),
        )
