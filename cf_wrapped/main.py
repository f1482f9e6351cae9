import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from cf_wrapped.routes.wrapped import router as wrapped_router
from cf_wrapped.routes import compare

from cf_wrapped.config import CF_API_BASE, WRAPPED_TZ

log = logging.getLogger("main")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[Startup] %(message)s"))
  log.addHandler(h)
  log.setLevel(logging.INFO)

log.info("CF_API_BASE: %s", CF_API_BASE)
log.info("WRAPPED_TZ: %s", WRAPPED_TZ or "local")
app = FastAPI(title = "Codeforces Year Wrapped")

#health check
@app.get("/api/health", response_class = PlainTextResponse)
async def health():
  return "ok"

#register API routes
app.include_router(wrapped_router)
app.include_router(compare.router)
