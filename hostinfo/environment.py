from __future__ import annotations

import os
from typing import List, Mapping, Optional


class Environment:
    """Read-only view over the process environment.

    Handlers only ever look names up or list them; nothing is written back.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(name)

    def keys(self) -> List[str]:
        return list(self._environ.keys())
