"""Tests for per-chat session ownership and cleanup."""
import asyncio
import random
from unittest.mock import patch

from flag_bot.quiz import registry
from tests.conftest import make_client


async def _started(chat_id, payload, **kwargs):
    kwargs.setdefault("rng", random.Random(chat_id))
    session = registry.start_session(chat_id, **kwargs)
    await session.load(make_client(payload))
    return session


class TestSessionCleanup:
    """Closing sessions cancels their scheduled advance."""

    async def test_close_cancels_pending_advance(self, five_payloads):
        session = await _started(1, five_payloads, correct_delay=10)
        session.select_option(session.current.name)
        task = session.pending_advance

        session.close()

        assert session.pending_advance is None
        await asyncio.gather(task, return_exceptions=True)
        assert task.cancelled()
        assert session.current_index == 0

    async def test_restart_cancels_previous_advance(self, five_payloads):
        old = await _started(1, five_payloads, correct_delay=10)
        old.select_option(old.current.name)
        task = old.pending_advance

        new = registry.start_session(1)

        assert registry.get_session(1) is new
        assert old.pending_advance is None
        await asyncio.gather(task, return_exceptions=True)
        assert task.cancelled()

    async def test_close_all_empties_table(self, five_payloads):
        sessions = [await _started(chat_id, five_payloads, correct_delay=10) for chat_id in (1, 2, 3)]
        tasks = []
        for session in sessions:
            session.select_option(session.current.name)
            tasks.append(session.pending_advance)

        registry.close_all()

        assert registry.session_count() == 0
        assert all(s.pending_advance is None for s in sessions)
        await asyncio.gather(*tasks, return_exceptions=True)
        assert all(t.cancelled() for t in tasks)


class TestSessionLimit:
    """The table holds at most MAX_SESSIONS chats, least recently used go first."""

    @patch.object(registry.settings, "MAX_SESSIONS", 2)
    async def test_oldest_chat_evicted(self, five_payloads):
        first = await _started(1, five_payloads, correct_delay=10)
        first.select_option(first.current.name)
        await _started(2, five_payloads)

        await _started(3, five_payloads)

        assert registry.session_count() == 2
        assert registry.get_session(1) is None
        assert first.pending_advance is None

    @patch.object(registry.settings, "MAX_SESSIONS", 2)
    async def test_recent_use_protects_chat(self, five_payloads):
        await _started(1, five_payloads)
        await _started(2, five_payloads)
        registry.get_session(1)

        await _started(3, five_payloads)

        assert registry.get_session(1) is not None
        assert registry.get_session(2) is None
        assert registry.get_session(3) is not None

    async def test_is_current(self, five_payloads):
        old = registry.start_session(1)
        assert registry.is_current(1, old)

        registry.start_session(1)

        assert not registry.is_current(1, old)
