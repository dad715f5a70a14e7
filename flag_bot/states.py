"""FSM states for the flag quiz flow."""
from aiogram.fsm.state import State, StatesGroup


class FlagQuiz(StatesGroup):
    """States of a chat's quiz."""

    loading = State()     # Country list is being fetched, input ignored
    playing = State()     # Rounds are running
