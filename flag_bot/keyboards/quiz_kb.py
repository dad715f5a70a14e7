"""Inline keyboard for a quiz round: answer options and Skip, stamped with the round id."""
from typing import Optional, Tuple

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from flag_bot.quiz.session import OptionState, RoundView

_LABELS = ["A", "B", "C", "D"]

_STATE_MARKS = {
    OptionState.NEUTRAL: "",
    OptionState.CORRECT: "✅ ",
    OptionState.INCORRECT: "❌ ",
}


def options_keyboard(view: RoundView) -> InlineKeyboardMarkup:
    """Four answer buttons (marked once the round is locked) and a Skip button."""
    buttons = []
    for i, option in enumerate(view.options):
        label = _LABELS[i] if i < len(_LABELS) else str(i + 1)
        buttons.append([InlineKeyboardButton(
            text=f"{_STATE_MARKS[option.state]}{label}) {option.label}",
            callback_data=f"opt:{view.round_id}:{i}",
        )])
    buttons.append([InlineKeyboardButton(text="⏭ Skip", callback_data=f"skip:{view.round_id}")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def parse_option_callback(data: str) -> Optional[Tuple[int, int]]:
    """Parse 'opt:<round_id>:<index>' into (round_id, index), None if malformed."""
    parts = data.split(":")
    if len(parts) != 3 or parts[0] != "opt":
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def parse_skip_callback(data: str) -> Optional[int]:
    """Parse 'skip:<round_id>' into the round id, None if malformed."""
    parts = data.split(":")
    if len(parts) != 2 or parts[0] != "skip":
        return None
    try:
        return int(parts[1])
    except ValueError:
        return None
