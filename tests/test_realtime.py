"""Change feed delivery."""

from uuid import uuid4

import pytest

from web3journey.progress.realtime import ChangeEvent


@pytest.mark.asyncio
async def test_listeners_only_see_their_user_and_tables(feed) -> None:
    user_id = uuid4()
    received: list[ChangeEvent] = []

    async def listener(event: ChangeEvent) -> None:
        received.append(event)

    feed.subscribe(user_id, ["learning_progress"], listener)

    await feed.publish(ChangeEvent(table="learning_progress", user_id=user_id, key="evm"))
    await feed.publish(ChangeEvent(table="project_progress", user_id=user_id))
    await feed.publish(ChangeEvent(table="learning_progress", user_id=uuid4()))

    assert [event.key for event in received] == ["evm"]


@pytest.mark.asyncio
async def test_failing_listener_does_not_block_others(feed) -> None:
    user_id = uuid4()
    received: list[ChangeEvent] = []

    async def broken(_event: ChangeEvent) -> None:
        raise RuntimeError("boom")

    async def working(event: ChangeEvent) -> None:
        received.append(event)

    feed.subscribe(user_id, ["user_stats"], broken)
    feed.subscribe(user_id, ["user_stats"], working)

    await feed.publish(ChangeEvent(table="user_stats", user_id=user_id))

    assert len(received) == 1


@pytest.mark.asyncio
async def test_listen_queue_drops_oldest_when_full(feed) -> None:
    user_id = uuid4()

    async with feed.listen(user_id, ["learning_progress"], maxsize=2) as queue:
        for key in ("a", "b", "c"):
            await feed.publish(ChangeEvent(table="learning_progress", user_id=user_id, key=key))

        assert queue.qsize() == 2
        assert queue.get_nowait().key == "b"
        assert queue.get_nowait().key == "c"

    assert feed.subscriber_count == 0


def test_event_payload() -> None:
    user_id = uuid4()
    payload = ChangeEvent(table="project_progress", user_id=user_id, event_type="INSERT", key="dex").to_payload()

    assert payload["user_id"] == str(user_id)
    assert payload["event_type"] == "INSERT"
    assert payload["key"] == "dex"
