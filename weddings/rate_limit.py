# weddings/rate_limit.py

# =================================================================================
# 🚦 Rate limit ligero en memoria
# ---------------------------------------------------------------------------------
# - Ventana deslizante por clave (p. ej. "login:<ip>").
# - Una instancia por aplicación (vive en app.state), sin estado global de módulo.
# - Válido para un único proceso; con varias instancias habría que moverlo a Redis
#   o al reverse-proxy.
# =================================================================================

import os
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Tuple

from loguru import logger


def get_limits_from_env(prefix: str, default_max: int, default_window: int) -> Tuple[int, int]:
    """Lee {prefix}_MAX y {prefix}_WINDOW (segundos); si faltan o son inválidos, usa los defaults."""
    try:
        max_req = int(os.getenv(f"{prefix}_MAX", str(default_max)))
        window = int(os.getenv(f"{prefix}_WINDOW", str(default_window)))
    except ValueError:
        max_req, window = default_max, default_window
    return max_req, window


class SlidingWindowLimiter:
    """Permite como máximo `max_req` acciones por clave dentro de `window_s` segundos."""

    def __init__(self, max_req: int, window_s: int, clock: Callable[[], float] = time.monotonic):
        self.max_req = max_req
        self.window_s = window_s
        self._clock = clock
        self._buckets: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()  # los endpoints sync corren en el threadpool

    def is_allowed(self, key: str) -> bool:
        if self.max_req <= 0:  # límite 0 o negativo = sin límite
            return True

        with self._lock:
            bucket = self._buckets.setdefault(key, deque())
            now = self._clock()

            cutoff = now - self.window_s
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= self.max_req:
                logger.warning(
                    "Rate limit hit for key='{}' ({}/{} in {}s)", key, len(bucket), self.max_req, self.window_s
                )
                return False

            bucket.append(now)
            return True

    def reset(self, key: str) -> None:
        with self._lock:
            self._buckets.pop(key, None)
