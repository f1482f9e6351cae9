from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import logging

from cf_wrapped.config import (
  ACCEPTED_VERDICT,
  CF_SITE_BASE,
  TOP_PROBLEMS_LIMIT,
  TOP_TAGS_LIMIT,
  WRAPPED_TZ,
)
from cf_wrapped.models import NormalizedSubmission, SolvedProblem, TagCount, YearSummary

log = logging.getLogger("wrapped_agg")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[AGG] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(logging.INFO)

# ----------------------------
# Helpers
# ----------------------------
def _is_int(x) -> bool:
  return isinstance(x, int) and not isinstance(x, bool)

def year_of(ts: int, tz=None) -> int:
  """Calendar year of an epoch timestamp, in `tz` or process local time."""
  if tz is None:
    return datetime.fromtimestamp(ts).year
  return datetime.fromtimestamp(ts, tz=tz).year

def current_year(tz=WRAPPED_TZ) -> int:
  return datetime.now(tz).year if tz is not None else datetime.now().year

def _clean_tags(tags) -> List[str]:
  if not isinstance(tags, (list, tuple, set)):
    return []
  return list(dict.fromkeys(t for t in tags if isinstance(t, str) and t))

# ----------------------------
# Normalize
# ----------------------------
def normalize_submission(raw: dict, tz=WRAPPED_TZ) -> Optional[NormalizedSubmission]:
  """
  Pull the fields the wrapped view needs out of one user.status record.
  Returns None for records that can't be used (unjudged, no problem name,
  bad timestamp) so a single bad row never sinks the whole run.
  """
  if not isinstance(raw, dict):
    return None
  verdict = raw.get("verdict")
  ts = raw.get("creationTimeSeconds")
  problem = raw.get("problem")
  if not isinstance(verdict, str) or not _is_int(ts) or not isinstance(problem, dict):
    return None
  name = problem.get("name")
  if not isinstance(name, str) or not name:
    return None

  try:
    year = year_of(ts, tz)
  except (OverflowError, OSError, ValueError):
    return None

  rating = problem.get("rating")
  contest_id = problem.get("contestId", raw.get("contestId"))
  index = problem.get("index")
  return NormalizedSubmission(
    verdict=verdict,
    solvedAtYear=year,
    problemName=name,
    tags=_clean_tags(problem.get("tags")),
    difficulty=rating if _is_int(rating) else None,
    contestId=contest_id if _is_int(contest_id) else None,
    index=index if isinstance(index, str) else "",
  )

def normalize_all(raw_submissions: Iterable[dict], tz=WRAPPED_TZ) -> List[NormalizedSubmission]:
  out = []
  skipped = 0
  for raw in raw_submissions or []:
    s = normalize_submission(raw, tz)
    if s is None:
      skipped += 1
      continue
    out.append(s)
  if skipped:
    log.debug("skipped %d malformed submissions", skipped)
  return out

# ----------------------------
# Pipeline stages
# ----------------------------
def filter_by_year(submissions: Iterable[NormalizedSubmission], year: int) -> List[NormalizedSubmission]:
  return [s for s in submissions if s.verdict == ACCEPTED_VERDICT and s.solvedAtYear == year]

def problem_url(contest_id: Optional[int], index: str, site_base: str = CF_SITE_BASE) -> str:
  if contest_id is None or not index:
    return ""
  return f"{site_base}/contest/{contest_id}/problem/{index}"

def dedupe_solved(filtered: Iterable[NormalizedSubmission], site_base: str = CF_SITE_BASE) -> Dict[str, SolvedProblem]:
  # re-assigning an existing key keeps its original position
  solved: Dict[str, SolvedProblem] = {}
  for s in filtered:
    solved[s.problemName] = SolvedProblem(
      name=s.problemName,
      tags=s.tags,
      difficulty=s.difficulty,
      url=problem_url(s.contestId, s.index, site_base),
    )
  return solved

def rank_tags(solved: Dict[str, SolvedProblem], limit: int = TOP_TAGS_LIMIT) -> List[TagCount]:
  counts = Counter()
  for p in solved.values():
    for tag in p.tags:
      counts[tag] += 1
  # sorted() is stable, so equal counts stay in first-seen order
  items = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
  return [TagCount(name=t, count=c) for t, c in items[:limit]]

def select_top_problems(
    solved: Dict[str, SolvedProblem],
    top_tags: List[TagCount],
    limit: int = TOP_PROBLEMS_LIMIT,
) -> List[SolvedProblem]:
  names = {t.name for t in top_tags}
  if not names:
    return []
  hits = [p for p in solved.values() if names.intersection(p.tags)]
  hits.sort(key=lambda p: p.difficulty or 0, reverse=True)
  return hits[:limit]

def build_summary(
    solved: Dict[str, SolvedProblem],
    top_tags: List[TagCount],
    top_problems: List[SolvedProblem],
) -> YearSummary:
  return YearSummary(
    totalSolved=len(solved),
    topTags=list(top_tags),
    topProblems=list(top_problems),
  )

# ----------------------------
# Entry point
# ----------------------------
def summarize_year(raw_submissions: Iterable[dict], year: int, tz=WRAPPED_TZ,
    *, site_base: str = CF_SITE_BASE) -> YearSummary:
  normalized = normalize_all(raw_submissions, tz)
  solved = dedupe_solved(filter_by_year(normalized, year), site_base)
  top_tags = rank_tags(solved)
  top_problems = select_top_problems(solved, top_tags)
  summary = build_summary(solved, top_tags, top_problems)
  log.info("year=%s solved=%d tags=%d problems=%d",
           year, summary.totalSolved, len(summary.topTags), len(summary.topProblems))
  return summary
