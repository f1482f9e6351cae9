from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional, Union


class NormalizedSubmission(BaseModel):
  verdict: str
  solvedAtYear: int
  problemName: str
  tags: List[str] = []
  difficulty: Optional[int] = None
  contestId: Optional[int] = None
  index: str = ""


class SolvedProblem(BaseModel):
  model_config = ConfigDict(frozen=True)

  name: str
  tags: List[str] = []
  difficulty: Optional[int] = None
  url: str = ""


class TagCount(BaseModel):
  model_config = ConfigDict(frozen=True)

  name: str
  count: int = Field(ge=1)


class YearSummary(BaseModel):
  model_config = ConfigDict(frozen=True)

  totalSolved: int = 0
  topTags: List[TagCount] = []
  topProblems: List[SolvedProblem] = []


class UserInfo(BaseModel):
  handle: str
  rank: str = "unrated"
  rating: Optional[int] = None
  maxRating: Optional[int] = None
  maxRank: Optional[str] = None
  avatar: str = ""
  registrationTimeSeconds: int = 0


# ----------------------------
# Fetch results
# ----------------------------
class WrappedData(BaseModel):
  profile: UserInfo
  submissions: List[Any] = []


class DataUnavailable(BaseModel):
  handle: str
  reason: str
  notFound: bool = False


FetchResult = Union[WrappedData, DataUnavailable]


# ----------------------------
# Presentation
# ----------------------------
class TagChart(BaseModel):
  label: str = "Problems Solved"
  labels: List[str] = []
  data: List[int] = []


class ProblemCard(BaseModel):
  name: str
  difficulty: Union[int, str]
  tags: List[str] = []
  url: str = ""


class WrappedResponse(BaseModel):
  handle: str
  year: int
  years: List[int] = []
  profile: UserInfo
  summary: YearSummary
  chart: TagChart = Field(default_factory=TagChart)
  problemCards: List[ProblemCard] = []


class CompareResponse(BaseModel):
  year: int
  a: WrappedResponse
  b: WrappedResponse
  sharedTopTags: List[str] = []
  solvedDiff: int = 0
