"""Start and score commands."""
import logging
from functools import partial

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message
from aiogram.fsm.context import FSMContext

from flag_bot.countries_api.client import CountriesClient
from flag_bot.quiz.registry import drop_session, get_session, is_current, start_session
from flag_bot.quiz.session import LoadStatus
from flag_bot.states import FlagQuiz
from .quiz import send_round

logger = logging.getLogger(__name__)
router = Router()

LOADING_TEXT = "Loading flags…"
LOAD_ERROR_TEXT = "Failed to load flags. Check your internet connection and try again."
NO_SESSION_TEXT = "No quiz running yet. Send /start to begin."


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext):
    """Start a new session: totals from zero, dataset fetched once."""
    chat_id = message.chat.id
    await state.set_state(FlagQuiz.loading)
    loading_msg = await message.answer(LOADING_TEXT)

    session = start_session(chat_id, on_advance=partial(send_round, message.bot, chat_id))

    client = CountriesClient()
    try:
        status = await session.load(client)
    finally:
        await client.close()

    if not is_current(chat_id, session):
        # A later /start replaced this session while it was loading
        logger.info("Discarding superseded quiz session for chat %s", chat_id)
        await loading_msg.delete()
        return

    if status is not LoadStatus.READY:
        logger.warning("Quiz for chat %s not started, status=%s", chat_id, status.value)
        drop_session(chat_id)
        await state.clear()
        await loading_msg.edit_text(LOAD_ERROR_TEXT)
        return

    await state.set_state(FlagQuiz.playing)
    await loading_msg.delete()
    await send_round(message.bot, chat_id, session)


@router.message(Command("score"))
async def cmd_score(message: Message):
    session = get_session(message.chat.id)
    if session is None:
        await message.answer(NO_SESSION_TEXT)
        return
    await message.answer(f"Score: {session.score}\nAttempts: {session.attempts}")
