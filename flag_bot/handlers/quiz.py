"""Quiz round handlers: flag display, option buttons, Skip, free text."""
import html
import logging

from aiogram import Bot, Router, F
from aiogram.types import Message, CallbackQuery

from flag_bot.keyboards.quiz_kb import options_keyboard, parse_option_callback, parse_skip_callback
from flag_bot.quiz.registry import get_session
from flag_bot.quiz.session import QuizSession, RoundView
from flag_bot.states import FlagQuiz

logger = logging.getLogger(__name__)

router = Router()

NO_DATA_TEXT = "No data."
UNPLAYABLE_TEXT = "Not enough countries to build answer options. Skip to continue."
PICK_BUTTON_TEXT = "Pick one of the buttons under the flag."


def _format_caption(view: RoundView) -> str:
    """Caption under the flag: title and running totals."""
    lines = [
        "<b>Guess the Flag</b>",
        f"Score: {view.score} · Attempts: {view.attempts}",
    ]
    if not view.options:
        lines.append("")
        lines.append(UNPLAYABLE_TEXT)
    return "\n".join(lines)


async def send_round(bot: Bot, chat_id: int, session: QuizSession) -> None:
    """Send the current flag with its answer buttons."""
    view = session.view()
    if view.flag_image_url is None:
        await bot.send_message(chat_id, NO_DATA_TEXT)
        return

    caption = _format_caption(view)
    keyboard = options_keyboard(view)

    # Telegram photos must be raster; SVG-only flags go out as a link
    if view.flag_png_url:
        await bot.send_photo(
            chat_id,
            photo=view.flag_png_url,
            caption=caption,
            parse_mode="HTML",
            reply_markup=keyboard,
        )
    else:
        link = f'<a href="{html.escape(view.flag_image_url)}">{html.escape(view.alt_text)}</a>'
        await bot.send_message(
            chat_id,
            f"{link}\n\n{caption}",
            parse_mode="HTML",
            reply_markup=keyboard,
        )


@router.callback_query(FlagQuiz.playing, F.data.startswith("opt:"))
async def answer_via_button(callback: CallbackQuery):
    """Score the picked option; the session advances by itself after the pause."""
    parsed = parse_option_callback(callback.data)
    session = get_session(callback.message.chat.id)
    if parsed is None or session is None:
        await callback.answer()
        return

    round_id, index = parsed
    options = session.options
    if round_id != session.round_id or not 0 <= index < len(options):
        # Button from an earlier flag
        await callback.answer()
        return

    result = session.select_option(options[index])
    if result is None:
        await callback.answer()
        return

    await callback.answer()
    await callback.message.edit_reply_markup(reply_markup=options_keyboard(session.view()))
    await callback.message.answer(html.escape(result.feedback), parse_mode="HTML")


@router.callback_query(FlagQuiz.playing, F.data.startswith("skip:"))
async def skip_flag(callback: CallbackQuery):
    """Move straight to the next flag; counts as an attempt."""
    round_id = parse_skip_callback(callback.data)
    session = get_session(callback.message.chat.id)
    await callback.answer()
    if round_id is None or session is None:
        return
    if round_id != session.round_id:
        # Skip under an earlier flag
        return

    session.next_flag()
    await send_round(callback.bot, callback.message.chat.id, session)


@router.message(FlagQuiz.playing, F.text)
async def answer_via_text(message: Message):
    """Typed text is kept as the guess but only buttons are scored."""
    session = get_session(message.chat.id)
    if session is None:
        return
    session.set_guess(message.text.strip())
    await message.answer(PICK_BUTTON_TEXT)


@router.callback_query(FlagQuiz.loading)
async def ignore_while_loading(callback: CallbackQuery):
    """Buttons do nothing until the country list has arrived."""
    await callback.answer("Loading flags…")
