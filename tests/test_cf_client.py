import asyncio

import httpx
import pytest

from cf_wrapped.cf_client import CodeforcesClient, CodeforcesError
from cf_wrapped.models import DataUnavailable, WrappedData
from cf_wrapped.services import wrapped_data

from conftest import submission, ts

PROFILE = {
  "handle": "tourist",
  "rank": "legendary grandmaster",
  "rating": 3800,
  "maxRating": 4009,
  "maxRank": "tourist",
  "avatar": "https://userpic.codeforces.org/no-avatar.jpg",
  "registrationTimeSeconds": ts(2010),
  "firstName": "Gennady",
}


def _transport(handler):
  calls = []

  def _record(request: httpx.Request) -> httpx.Response:
    calls.append(request)
    return handler(request)

  return httpx.MockTransport(_record), calls


def _ok(result):
  return httpx.Response(200, json={"status": "OK", "result": result})


def _codeforces(request: httpx.Request) -> httpx.Response:
  if request.url.path.endswith("/user.info"):
    return _ok([PROFILE])
  if request.url.path.endswith("/user.status"):
    return _ok([submission("Boredom", ["dp"], 1500)])
  return httpx.Response(404)


def test_user_info_and_status_send_expected_params():
  transport, calls = _transport(_codeforces)

  async def _run():
    async with CodeforcesClient(transport=transport) as cf:
      return await cf.user_info("tourist"), await cf.user_status("tourist")

  info, subs = asyncio.run(_run())
  assert info["handle"] == "tourist"
  assert subs[0]["problem"]["name"] == "Boredom"
  assert calls[0].url.params["handles"] == "tourist"
  assert calls[1].url.params["handle"] == "tourist"
  assert calls[1].url.params["from"] == "1"
  assert calls[1].url.params["count"] == "10000"


def test_failed_envelope_for_unknown_handle_is_not_found():
  transport, _ = _transport(lambda r: httpx.Response(
    400, json={"status": "FAILED", "comment": "handles: User with handle nobody not found"}))

  async def _run():
    async with CodeforcesClient(transport=transport) as cf:
      await cf.user_info("nobody")

  with pytest.raises(CodeforcesError) as err:
    asyncio.run(_run())
  assert err.value.not_found


def test_transport_and_non_json_errors_raise_codeforces_error():
  def _boom(request):
    raise httpx.ConnectError("unreachable", request=request)

  for handler in (_boom, lambda r: httpx.Response(503, text="<html>down</html>")):
    transport, _ = _transport(handler)

    async def _run():
      async with CodeforcesClient(transport=transport) as cf:
        await cf.user_status("tourist")

    with pytest.raises(CodeforcesError) as err:
      asyncio.run(_run())
    assert not err.value.not_found


def test_load_wrapped_data_fetches_both_and_caches():
  transport, calls = _transport(_codeforces)

  data = asyncio.run(wrapped_data.load_wrapped_data("tourist", transport=transport))
  assert isinstance(data, WrappedData)
  assert data.profile.maxRank == "tourist"
  assert len(data.submissions) == 1
  assert len(calls) == 2

  again = asyncio.run(wrapped_data.load_wrapped_data("Tourist ", transport=transport))
  assert again is data
  assert len(calls) == 2


def test_load_wrapped_data_returns_unavailable_instead_of_raising():
  def _status_down(request):
    if request.url.path.endswith("/user.info"):
      return _ok([PROFILE])
    return httpx.Response(503, json={"status": "FAILED", "comment": "Call limit exceeded"})

  transport, _ = _transport(_status_down)
  result = asyncio.run(wrapped_data.load_wrapped_data("tourist", transport=transport))
  assert isinstance(result, DataUnavailable)
  assert not result.notFound
  assert "Call limit exceeded" in result.reason
  assert wrapped_data.CACHE.get("wrapped:tourist") is None


def test_unknown_handle_waits_for_history_request_before_closing():
  finished = []

  async def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/user.info"):
      return httpx.Response(400, json={"status": "FAILED", "comment": "handles: User with handle ghost not found"})
    await asyncio.sleep(0.05)
    finished.append(request.url.path)
    return _ok([])

  result = asyncio.run(wrapped_data.load_wrapped_data("ghost", transport=httpx.MockTransport(_handler)))
  assert isinstance(result, DataUnavailable)
  assert result.notFound
  assert [p.rsplit("/", 1)[-1] for p in finished] == ["user.status"]
