import calendar

import pytest

from cf_wrapped.services import wrapped_data


def ts(year: int, month: int = 6, day: int = 15, hour: int = 12) -> int:
  # mid-day mid-year, so the calendar year is the same in any local zone
  return calendar.timegm((year, month, day, hour, 0, 0))


def submission(name, tags=(), rating=None, *, verdict="OK", year=2024, contest_id=1000, index="A", **when):
  problem = {"contestId": contest_id, "index": index, "name": name, "tags": list(tags)}
  if rating is not None:
    problem["rating"] = rating
  return {
    "id": abs(hash((name, year, verdict))) % 10**8,
    "contestId": contest_id,
    "creationTimeSeconds": ts(year, **when),
    "problem": problem,
    "verdict": verdict,
  }


@pytest.fixture(autouse=True)
def _empty_cache():
  wrapped_data.CACHE.clear()
  yield
  wrapped_data.CACHE.clear()
