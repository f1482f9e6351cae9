# cf_wrapped/routes/wrapped.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from cf_wrapped.config import WRAPPED_TZ
from cf_wrapped.models import (
  DataUnavailable,
  ProblemCard,
  TagChart,
  UserInfo,
  WrappedData,
  WrappedResponse,
  YearSummary,
)
from cf_wrapped.services.wrapped_agg import current_year, summarize_year, year_of
from cf_wrapped.services.wrapped_data import load_wrapped_data

log = logging.getLogger("wrapped")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[WR] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(logging.INFO)

router = APIRouter(prefix="/api", tags=["wrapped"])

FETCH_FAILED = "Failed to fetch data. Please try again later."

# ----------------------------
# Presentation helpers
# ----------------------------
def available_years(registration_ts: int, now_year: Optional[int] = None, tz=WRAPPED_TZ) -> List[int]:
  """Inclusive [registration year .. current year] for the year selector."""
  start = year_of(registration_ts, tz)
  end = now_year if now_year is not None else current_year(tz)
  return list(range(start, end + 1))


def tag_chart(summary: YearSummary) -> TagChart:
  return TagChart(
    labels=[t.name for t in summary.topTags],
    data=[t.count for t in summary.topTags],
  )


def problem_cards(summary: YearSummary) -> List[ProblemCard]:
  return [
    ProblemCard(
      name=p.name,
      difficulty=p.difficulty if p.difficulty is not None else "Unrated",
      tags=p.tags,
      url=p.url,
    )
    for p in summary.topProblems
  ]


def raise_unavailable(d: DataUnavailable) -> None:
  if d.notFound:
    raise HTTPException(404, f"Codeforces user '{d.handle}' not found")
  raise HTTPException(502, FETCH_FAILED)


def clean_handle(handle: str) -> str:
  h = (handle or "").strip()
  if not h:
    raise HTTPException(400, "Username not provided")
  return h


def wrapped_response(data: WrappedData, year: int, years: List[int]) -> WrappedResponse:
  summary = summarize_year(data.submissions, year)
  return WrappedResponse(
    handle=data.profile.handle,
    year=year,
    years=years,
    profile=data.profile,
    summary=summary,
    chart=tag_chart(summary),
    problemCards=problem_cards(summary),
  )


# ----------------------------
# Endpoints
# ----------------------------
@router.get("/user", response_model=UserInfo)
async def user(handle: str = ""):
  h = clean_handle(handle)
  data = await load_wrapped_data(h)
  if isinstance(data, DataUnavailable):
    raise_unavailable(data)
  return data.profile


@router.get("/wrapped", response_model=WrappedResponse)
async def wrapped(
    handle: str = "",
    year: Optional[int] = Query(None, description="Calendar year; defaults to the current year"),
):
  """
  Example:
    /api/wrapped?handle=tourist&year=2024
  """
  h = clean_handle(handle)
  data = await load_wrapped_data(h)
  if isinstance(data, DataUnavailable):
    raise_unavailable(data)

  years = available_years(data.profile.registrationTimeSeconds)
  y = year if year is not None else current_year()
  if y not in years:
    reg_year = year_of(data.profile.registrationTimeSeconds, WRAPPED_TZ)
    raise HTTPException(400, f"year must be between {reg_year} and {current_year()}")

  log.info("wrapped %s %s", h, y)
  return wrapped_response(data, y, years)
