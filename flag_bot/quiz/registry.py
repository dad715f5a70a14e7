"""Per-chat quiz sessions held in memory for the lifetime of the process.

The table is capped at settings.MAX_SESSIONS; the least recently used chat is
evicted (and its pending advance cancelled) when a new one starts.
"""
import logging
from collections import OrderedDict
from typing import Optional

from flag_bot.config import settings
from .session import QuizSession

logger = logging.getLogger(__name__)

_sessions: "OrderedDict[int, QuizSession]" = OrderedDict()


def get_session(chat_id: int) -> Optional[QuizSession]:
    session = _sessions.get(chat_id)
    if session is not None:
        _sessions.move_to_end(chat_id)
    return session


def start_session(chat_id: int, **kwargs) -> QuizSession:
    """Replace the chat's session with a fresh one; totals start from zero."""
    drop_session(chat_id)
    session = QuizSession(**kwargs)
    _sessions[chat_id] = session
    logger.debug("Started quiz session for chat %s", chat_id)

    while len(_sessions) > max(settings.MAX_SESSIONS, 1):
        old_chat_id, old_session = _sessions.popitem(last=False)
        old_session.close()
        logger.info("Evicted idle quiz session for chat %s", old_chat_id)
    return session


def is_current(chat_id: int, session: QuizSession) -> bool:
    """True while `session` is still the one registered for the chat."""
    return _sessions.get(chat_id) is session


def drop_session(chat_id: int) -> None:
    session = _sessions.pop(chat_id, None)
    if session is not None:
        session.close()


def session_count() -> int:
    return len(_sessions)


def close_all() -> None:
    """Cancel every pending advancement (on shutdown)."""
    for chat_id in list(_sessions):
        drop_session(chat_id)
