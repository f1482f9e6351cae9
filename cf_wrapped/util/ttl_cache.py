import time
from typing import Any, Dict


class TTLCache:
  """
  Expiring key -> payload map, bounded to `maxsize` entries.
  Every put sweeps expired entries, then evicts the oldest writes past the cap.
  """

  def __init__(self, maxsize: int = 256) -> None:
    self.maxsize = max(1, maxsize)
    # insertion order == write order; put() re-inserts to move a key to the end
    self._m: Dict[str, tuple[float, Any]] = {}

  def __len__(self) -> int:
    return len(self._m)

  def get(self, k: str) -> Any | None:
    v = self._m.get(k)
    if not v:
      return None
    exp, payload = v
    if time.time() > exp:
      self._m.pop(k, None)
      return None
    return payload

  def put(self, k: str, payload: Any, ttl: int = 300) -> None:
    now = time.time()
    self._m.pop(k, None)
    self._m[k] = (now + ttl, payload)
    self._sweep(now)

  def _sweep(self, now: float) -> None:
    for key in [key for key, (exp, _) in self._m.items() if now > exp]:
      del self._m[key]
    while len(self._m) > self.maxsize:
      del self._m[next(iter(self._m))]

  def clear(self) -> None:
    self._m.clear()
