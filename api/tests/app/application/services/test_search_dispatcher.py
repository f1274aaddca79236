from __future__ import annotations

import asyncio

import pytest

from vidsearch.application.errors.exceptions import ProviderError
from vidsearch.application.services.search_dispatcher import SearchDispatcher
from vidsearch.domain.models.continuation import ContinuationRequest
from vidsearch.domain.models.search import ProviderPage, SearchOptions
from vidsearch.domain.services.continuation import decode_continuation

pytestmark = pytest.mark.anyio


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


class _FakeProvider:
    def __init__(
        self,
        page: ProviderPage | None = None,
        error: Exception | None = None,
        delay_seconds: float = 0.0,
    ) -> None:
        self._page = page or ProviderPage()
        self._error = error
        self._delay_seconds = delay_seconds
        self.search_calls: list[tuple[str, SearchOptions]] = []
        self.continue_calls: list[list] = []

    async def _respond(self) -> ProviderPage:
        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)
        if self._error is not None:
            raise self._error
        return self._page

    async def search(self, term: str, options: SearchOptions) -> ProviderPage:
        self.search_calls.append((term, options))
        return await self._respond()

    async def continue_search(self, continuation: list) -> ProviderPage:
        self.continue_calls.append(continuation)
        return await self._respond()


def _dispatcher(provider: _FakeProvider, timeout_seconds: float = 1.0) -> SearchDispatcher:
    return SearchDispatcher(
        provider=provider,
        term="BONK meme",
        options=SearchOptions(limit=10, pages=1),
        timeout_seconds=timeout_seconds,
    )


async def test_fresh_request_calls_search_only() -> None:
    provider = _FakeProvider(ProviderPage(items=[{"id": "a"}], continuation=None))

    page = await _dispatcher(provider).dispatch(ContinuationRequest())

    assert provider.search_calls == [("BONK meme", SearchOptions(limit=10, pages=1))]
    assert provider.continue_calls == []
    assert page.items == [{"id": "a"}]
    assert page.continuation is None


async def test_continuation_request_calls_continue_search_only() -> None:
    provider = _FakeProvider(ProviderPage(items=[], continuation=None))

    await _dispatcher(provider).dispatch(ContinuationRequest(continuation=["abc"]))

    assert provider.search_calls == []
    assert provider.continue_calls == [["abc"]]


async def test_next_continuation_is_encoded() -> None:
    provider = _FakeProvider(ProviderPage(items=[], continuation=["key", "next"]))

    page = await _dispatcher(provider).dispatch(ContinuationRequest())

    assert decode_continuation(page.continuation) == ["key", "next"]


async def test_invalid_next_continuation_is_not_emitted() -> None:
    provider = _FakeProvider(ProviderPage(items=[], continuation=[{"bogus": True}]))

    with pytest.raises(ProviderError) as exc_info:
        await _dispatcher(provider).dispatch(ContinuationRequest())

    assert "invalid continuation" in exc_info.value.error


async def test_provider_exception_becomes_provider_error() -> None:
    provider = _FakeProvider(error=RuntimeError("backend exploded"))

    with pytest.raises(ProviderError) as exc_info:
        await _dispatcher(provider).dispatch(ContinuationRequest())

    assert exc_info.value.error == "backend exploded"
    assert exc_info.value.status_code == 500
    assert len(provider.search_calls) == 1


async def test_provider_timeout_becomes_provider_error() -> None:
    provider = _FakeProvider(delay_seconds=1.0)

    with pytest.raises(ProviderError) as exc_info:
        await _dispatcher(provider, timeout_seconds=0.1).dispatch(
            ContinuationRequest()
        )

    assert "timed out" in exc_info.value.error


async def test_cancellation_propagates() -> None:
    provider = _FakeProvider(delay_seconds=5.0)
    task = asyncio.ensure_future(
        _dispatcher(provider, timeout_seconds=10.0).dispatch(ContinuationRequest())
    )
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
