# cf_wrapped/routes/compare.py
import asyncio
from typing import List, Optional

from fastapi import APIRouter, HTTPException

from cf_wrapped.models import CompareResponse, DataUnavailable, YearSummary
from cf_wrapped.routes.wrapped import (
  available_years,
  clean_handle,
  raise_unavailable,
  wrapped_response,
)
from cf_wrapped.services.wrapped_agg import current_year
from cf_wrapped.services.wrapped_data import load_wrapped_data

router = APIRouter(prefix="/api", tags=["compare"])


def shared_top_tags(a: YearSummary, b: YearSummary) -> List[str]:
  """Tags in both top lists, in a's order."""
  theirs = {t.name for t in b.topTags}
  return [t.name for t in a.topTags if t.name in theirs]


@router.get("/compare", response_model=CompareResponse)
async def compare(handle: str = "", other: str = "", year: Optional[int] = None):
  a_handle = clean_handle(handle)
  b_handle = clean_handle(other)

  y = year if year is not None else current_year()
  if y > current_year():
    raise HTTPException(400, "year cannot be in the future")

  a_data, b_data = await asyncio.gather(load_wrapped_data(a_handle), load_wrapped_data(b_handle))
  for d in (a_data, b_data):
    if isinstance(d, DataUnavailable):
      raise_unavailable(d)

  # a year before someone registered is just an empty wrapped for them
  a = wrapped_response(a_data, y, available_years(a_data.profile.registrationTimeSeconds))
  b = wrapped_response(b_data, y, available_years(b_data.profile.registrationTimeSeconds))
  return CompareResponse(
    year=y,
    a=a,
    b=b,
    sharedTopTags=shared_top_tags(a.summary, b.summary),
    solvedDiff=a.summary.totalSolved - b.summary.totalSolved,
  )
