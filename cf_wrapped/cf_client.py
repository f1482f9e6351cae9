# cf_wrapped/cf_client.py
import logging
import httpx
from typing import Optional, Any, Dict

from cf_wrapped.config import CF_API_BASE, CF_SUBMISSION_COUNT, CF_TIMEOUT

log = logging.getLogger("cf_client")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[CF] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(logging.INFO)


class CodeforcesError(Exception):
  """Any failure talking to the Codeforces API (transport, HTTP, or status != OK)."""

  def __init__(self, message: str, *, not_found: bool = False):
    super().__init__(message)
    self.not_found = not_found


def _is_not_found(comment: str) -> bool:
  # e.g. "handles: User with handle foo not found"
  return "not found" in (comment or "").lower()


class CodeforcesClient:
  def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None, base_url: str = CF_API_BASE):
    self._client: Optional[httpx.AsyncClient] = None
    self._transport = transport
    self._base = base_url

  async def __aenter__(self):
    limits = httpx.Limits(max_keepalive_connections=5, max_connections=10)
    # submission history for active handles is a few MB
    self._client = httpx.AsyncClient(
      timeout=httpx.Timeout(CF_TIMEOUT, connect=5.0),
      limits=limits,
      transport=self._transport,
    )
    return self

  async def __aexit__(self, *exc):
    if self._client:
      await self._client.aclose()

  async def _get(self, method: str, params: Dict[str, Any]) -> Any:
    """
    GET one API method and unwrap the {"status", "result", "comment"} envelope.
    Raises CodeforcesError on anything but status == "OK".
    """
    url = f"{self._base}/{method}"
    try:
      r = await self._client.get(url, params=params)
    except httpx.HTTPError as e:
      raise CodeforcesError(f"{method}: {e}") from e

    try:
      data = r.json()
    except ValueError as e:
      raise CodeforcesError(f"{method}: non-JSON response (HTTP {r.status_code})") from e

    # Codeforces reports unknown handles as HTTP 400 with a FAILED envelope
    if not isinstance(data, dict) or data.get("status") != "OK":
      comment = data.get("comment", "") if isinstance(data, dict) else ""
      log.warning("%s failed: HTTP %s %s", method, r.status_code, comment)
      raise CodeforcesError(f"{method}: {comment or r.status_code}",
                            not_found=_is_not_found(comment))
    return data.get("result")

  # -------- Profile --------
  async def user_info(self, handle: str) -> dict:
    result = await self._get("user.info", {"handles": handle})
    if not result:
      raise CodeforcesError(f"user.info: no user {handle}", not_found=True)
    return result[0]

  # -------- Submission history --------
  async def user_status(self, handle: str, *, start: int = 1, count: int = CF_SUBMISSION_COUNT) -> list[dict]:
    result = await self._get("user.status", {"handle": handle, "from": start, "count": count})
    return result if isinstance(result, list) else []
