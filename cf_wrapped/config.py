import os
from dotenv import load_dotenv
import pytz

load_dotenv()

CF_API_BASE = os.getenv("CF_API_BASE", "https://codeforces.com/api").rstrip("/")
CF_SITE_BASE = os.getenv("CF_SITE_BASE", "https://codeforces.com").rstrip("/")

#user.status page size; one page covers the whole history
CF_SUBMISSION_COUNT = int(os.getenv("CF_SUBMISSION_COUNT", "10000"))
CF_TIMEOUT = float(os.getenv("CF_TIMEOUT", "15"))

#seconds a handle's fetched profile + submissions stay in memory
CACHE_TTL = int(os.getenv("CACHE_TTL", "900"))
#most handles held at once; oldest fetch is evicted first
CACHE_MAX_HANDLES = int(os.getenv("CACHE_MAX_HANDLES", "128"))

TOP_TAGS_LIMIT = int(os.getenv("TOP_TAGS_LIMIT", "5"))
TOP_PROBLEMS_LIMIT = int(os.getenv("TOP_PROBLEMS_LIMIT", "5"))

#year boundaries; unset = process local time
_TZ_NAME = os.getenv("WRAPPED_TZ", "").strip()
try:
  WRAPPED_TZ = pytz.timezone(_TZ_NAME) if _TZ_NAME else None
except pytz.UnknownTimeZoneError:
  raise RuntimeError(f"Unknown WRAPPED_TZ: {_TZ_NAME}")

ACCEPTED_VERDICT = "OK"
