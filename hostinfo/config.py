from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PORT = 3000
DEFAULT_BG_COLOR = "white"
HOST = "0.0.0.0"
SHUTDOWN_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    bg_color: str = DEFAULT_BG_COLOR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read ``PORT`` and ``BG_COLOR``, falling back to the defaults.

        Empty values count as unset. A ``PORT`` that is not an integer raises
        ``ValueError`` so the process fails at startup rather than binding
        somewhere unexpected.
        """
        env = os.environ if environ is None else environ
        port = env.get("PORT") or str(DEFAULT_PORT)
        return cls(
            port=int(port),
            bg_color=env.get("BG_COLOR") or DEFAULT_BG_COLOR,
        )
