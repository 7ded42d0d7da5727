from unittest.mock import AsyncMock, patch

import httpx
import pytest

from git_wrapped.utils.retry import with_retry

pytestmark = pytest.mark.asyncio

REQUEST = httpx.Request("GET", "https://api.github.com/user")


def _status_error(code: int) -> httpx.HTTPStatusError:
    return httpx.HTTPStatusError("boom", request=REQUEST, response=httpx.Response(code, request=REQUEST))


async def test_returns_first_success():
    fn = AsyncMock(return_value="ok")
    assert await with_retry(fn, 1, key="v") == "ok"
    fn.assert_awaited_once_with(1, key="v")


async def test_retries_transport_errors_with_backoff():
    fn = AsyncMock(side_effect=[httpx.ConnectError("down"), _status_error(502), "ok"])
    with patch("git_wrapped.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        assert await with_retry(fn) == "ok"
    assert [c.args[0] for c in sleep.await_args_list] == [1, 2]


async def test_gives_up_after_last_attempt():
    fn = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
    with patch("git_wrapped.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        with pytest.raises(httpx.ReadTimeout):
            await with_retry(fn, max_retries=4)
    assert fn.await_count == 4
    assert [c.args[0] for c in sleep.await_args_list] == [1, 2, 4]


async def test_client_errors_are_not_retried():
    fn = AsyncMock(side_effect=_status_error(404))
    with patch("git_wrapped.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        with pytest.raises(httpx.HTTPStatusError):
            await with_retry(fn)
    assert fn.await_count == 1
    sleep.assert_not_awaited()
