import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from cf_wrapped.cf_client import CodeforcesClient, CodeforcesError
from cf_wrapped.config import CACHE_MAX_HANDLES, CACHE_TTL
from cf_wrapped.models import DataUnavailable, FetchResult, UserInfo, WrappedData
from cf_wrapped.util.ttl_cache import TTLCache

log = logging.getLogger("wrapped_data")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[DATA] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(logging.INFO)

# handle -> WrappedData; a year switch reuses the same submission list
CACHE = TTLCache(maxsize=CACHE_MAX_HANDLES)


def _cache_key(handle: str) -> str:
  return f"wrapped:{handle.strip().lower()}"


async def fetch_wrapped_data(handle: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> WrappedData:
  """Profile and submission history, fetched concurrently. Raises CodeforcesError."""
  async with CodeforcesClient(transport=transport) as cf:
    # both requests finish before the client closes, even when one fails
    info, submissions = await asyncio.gather(
      cf.user_info(handle),
      cf.user_status(handle),
      return_exceptions=True,
    )
  for r in (info, submissions):
    if isinstance(r, BaseException):
      raise r
  return WrappedData(profile=UserInfo.model_validate(info), submissions=submissions)


async def load_wrapped_data(handle: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> FetchResult:
  """
  Fetch (or reuse) everything the wrapped view needs for one handle.
  Never raises for fetch problems: failures come back as DataUnavailable
  so the caller never runs the aggregation on half the data.
  """
  key = _cache_key(handle)
  hit = CACHE.get(key)
  if hit is not None:
    return hit

  try:
    data = await fetch_wrapped_data(handle, transport=transport)
  except CodeforcesError as e:
    log.warning("data unavailable for %s: %s", handle, e)
    return DataUnavailable(handle=handle, reason=str(e), notFound=e.not_found)
  except ValidationError as e:
    log.warning("bad profile payload for %s: %s", handle, e)
    return DataUnavailable(handle=handle, reason="malformed user.info response")

  log.info("fetched %s: %d submissions", data.profile.handle, len(data.submissions))
  CACHE.put(key, data, ttl=CACHE_TTL)
  return data
