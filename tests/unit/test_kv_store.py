"""Key-value store tests: JSON round trip, optimistic writes, outages."""

import asyncio
from datetime import date

import fakeredis
import pytest
import pytest_asyncio

from roboquest.catalog.models import ContentItem
from roboquest.errors import BackendUnavailableError, ForbiddenError
from roboquest.progress.ledger import LEADERBOARD_KEY, ProgressLedger, progress_key
from roboquest.storage.kv_store import KeyValueStore, Mutation

D = date(2025, 3, 10)


@pytest.fixture
def server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def kv(server):
    client = fakeredis.FakeAsyncRedis(server=server, decode_responses=True)
    yield KeyValueStore(client, max_retries=3)
    await client.aclose()


@pytest.mark.asyncio
async def test_get_missing_returns_none(kv):
    assert await kv.get("nope") is None


@pytest.mark.asyncio
async def test_mget_keeps_order_with_gaps(kv):
    await kv.set("a", {"n": 1})
    await kv.set("c", {"n": 3})
    assert await kv.mget(["a", "b", "c"]) == [{"n": 1}, None, {"n": 3}]


@pytest.mark.asyncio
async def test_add_only_when_absent(kv):
    assert await kv.add("identity:email:x@example.com", "u1")
    assert not await kv.add("identity:email:x@example.com", "u2")
    assert await kv.get("identity:email:x@example.com") == "u1"


@pytest.mark.asyncio
async def test_transact_retries_after_conflicting_write(kv, server):
    other = fakeredis.FakeRedis(server=server, decode_responses=True)
    calls = []

    def mutate(current):
        calls.append(current)
        if len(calls) == 1:
            # A second writer lands between WATCH and EXEC
            other.set("counter", "5")
        return Mutation(value=(current or 0) + 1, result=len(calls))

    attempts = await kv.transact("counter", mutate)
    assert attempts == 2
    assert calls == [None, 5]
    assert await kv.get("counter") == 6


@pytest.mark.asyncio
async def test_transact_gives_up_after_retry_budget(kv, server):
    other = fakeredis.FakeRedis(server=server, decode_responses=True)

    def always_conflicting(current):
        other.incr("hot")
        return Mutation(value=1, result=None)

    with pytest.raises(BackendUnavailableError):
        await kv.transact("hot", always_conflicting)


@pytest.mark.asyncio
async def test_transact_noop_writes_nothing(kv):
    result = await kv.transact("untouched", lambda current: Mutation(value=None, result="same"))
    assert result == "same"
    assert await kv.get("untouched") is None


@pytest.mark.asyncio
async def test_unreachable_server_raises_backend_unavailable(server):
    server.connected = False
    kv = KeyValueStore(fakeredis.FakeAsyncRedis(server=server, decode_responses=True))
    with pytest.raises(BackendUnavailableError):
        await kv.get("anything")
    with pytest.raises(BackendUnavailableError):
        await kv.transact("anything", lambda current: Mutation(value=1, result=None))


@pytest.mark.asyncio
async def test_domain_errors_from_callback_propagate_unchanged(kv):
    def deny(current):
        raise ForbiddenError("Admin access required")

    with pytest.raises(ForbiddenError):
        await kv.transact("guarded", deny)
    assert await kv.get("guarded") is None


@pytest.mark.asyncio
async def test_concurrent_completions_count_once(kv):
    ledger = ProgressLedger(kv)
    await ledger.initialize("u1", D)
    tutorial = ContentItem(id="tutorial_python_1", title="Intro", xp_reward=50, uploaded_at="2025-01-01T00:00:00Z")

    results = await asyncio.gather(*(ledger.complete_tutorial("u1", tutorial, D) for _ in range(5)))

    progress = await kv.get(progress_key("u1"))
    assert progress["total_xp"] == 50
    assert progress["lessons_completed"] == 1
    assert sum(1 for t in results if not t.already_completed) == 1
    assert await kv.redis.zscore(LEADERBOARD_KEY, "u1") == 50
