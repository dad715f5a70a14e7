"""Quiz session controller: dataset load, round state, scoring and advancement.

All state lives on one QuizSession instance and changes only through
load(), select_option(), next_flag() and set_guess(). Round advancement after
a selection runs as an asyncio task; the task handle doubles as the
cancellation token, so a skip during the locked window cancels it.
"""
import asyncio
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from flag_bot.config import settings
from flag_bot.countries_api.exceptions import CountriesAPIError
from flag_bot.countries_api.models import Country, country_from_payload
from .options import fisher_yates, generate_options

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class OptionState(str, Enum):
    NEUTRAL = "neutral"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass
class SelectionResult:
    """Outcome of a scored pick."""
    option: str
    is_correct: bool
    correct_name: str
    feedback: str
    delay: float


@dataclass
class OptionView:
    label: str
    state: OptionState = OptionState.NEUTRAL


@dataclass
class RoundView:
    """Everything the presentation layer needs to draw the current round."""
    status: LoadStatus
    flag_image_url: Optional[str] = None
    flag_png_url: Optional[str] = None
    alt_text: str = ""
    options: List[OptionView] = field(default_factory=list)
    score: int = 0
    attempts: int = 0
    feedback: str = ""
    locked: bool = False
    round_id: int = 0


AdvanceListener = Callable[["QuizSession"], Awaitable[None]]


class QuizSession:
    """One player's flag quiz, from dataset load through endless rounds."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        correct_delay: Optional[float] = None,
        incorrect_delay: Optional[float] = None,
        on_advance: Optional[AdvanceListener] = None,
        focus: Optional[Callable[[], None]] = None,
    ):
        """
        Args:
            rng: Random source for the dataset permutation and option draws
            correct_delay: Seconds before advancing after a correct pick
            incorrect_delay: Seconds before advancing after a wrong pick
            on_advance: Awaited after a timed advance, to redraw the round
            focus: Called after a skip to return input focus, if an input is mounted
        """
        self._rng = rng or random.Random()
        self.correct_delay = settings.CORRECT_DELAY if correct_delay is None else correct_delay
        self.incorrect_delay = settings.INCORRECT_DELAY if incorrect_delay is None else incorrect_delay
        self._on_advance = on_advance
        self._focus = focus

        self.status = LoadStatus.LOADING
        self._countries: List[Country] = []
        self._current_index: Optional[int] = None
        self._options: List[str] = []
        self._selected: Optional[str] = None
        self._locked = False
        self._round_id = 0
        self._score = 0
        self._attempts = 0
        self._feedback = ""
        self._guess = ""
        self._advance_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def countries(self) -> List[Country]:
        return list(self._countries)

    @property
    def current_index(self) -> Optional[int]:
        return self._current_index

    @property
    def current(self) -> Optional[Country]:
        if self._current_index is None:
            return None
        if 0 <= self._current_index < len(self._countries):
            return self._countries[self._current_index]
        return None

    @property
    def options(self) -> List[str]:
        return list(self._options)

    @property
    def selected(self) -> Optional[str]:
        return self._selected

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def round_id(self) -> int:
        return self._round_id

    @property
    def score(self) -> int:
        return self._score

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def feedback(self) -> str:
        return self._feedback

    @property
    def guess(self) -> str:
        return self._guess

    @property
    def pending_advance(self) -> Optional[asyncio.Task]:
        """The scheduled advancement task, if one is still waiting."""
        task = self._advance_task
        if task is None or task.done():
            return None
        return task

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self, client) -> LoadStatus:
        """Fetch, normalize and shuffle the country list. Runs once per session."""
        if self.status is not LoadStatus.LOADING or self._countries:
            logger.warning("Dataset already loaded (status=%s), ignoring reload", self.status.value)
            return self.status

        try:
            raw = await client.fetch_countries()
            countries = [c for c in (country_from_payload(entry) for entry in raw) if c]
        except CountriesAPIError as e:
            logger.error("Failed to load flags: %s", e)
            self.status = LoadStatus.ERROR
            return self.status
        except Exception:
            logger.exception("Failed to load flags: unexpected error")
            self.status = LoadStatus.ERROR
            return self.status

        if not countries:
            logger.error("Country feed had %d entries, none usable", len(raw))
            self.status = LoadStatus.ERROR
            return self.status

        fisher_yates(countries, self._rng)
        self._countries = countries
        self._set_index(0)
        self.status = LoadStatus.READY
        logger.info("Loaded %d countries (%d skipped)", len(countries), len(raw) - len(countries))
        return self.status

    def select_option(self, opt: str) -> Optional[SelectionResult]:
        """Score a pick and schedule the next round. Must run inside the event loop.

        Returns None without touching state when there is no current country,
        the round is locked, or `opt` is not one of the offered options.
        """
        current = self.current
        if current is None or self._locked or opt not in self._options:
            return None

        is_correct = opt == current.name
        self._selected = opt
        self._locked = True
        self._attempts += 1
        if is_correct:
            self._score += 1
            self._feedback = f"Correct! It is {current.name}."
        else:
            self._feedback = f"Not quite. It is {current.name}."

        delay = self.correct_delay if is_correct else self.incorrect_delay
        self._schedule_advance(delay)

        return SelectionResult(
            option=opt,
            is_correct=is_correct,
            correct_name=current.name,
            feedback=self._feedback,
            delay=delay,
        )

    def next_flag(self) -> None:
        """Skip to the next flag. Counts as an attempt, never as a point."""
        if self.status is not LoadStatus.READY:
            return

        self._cancel_pending()
        self._feedback = ""
        self._guess = ""
        self._attempts += 1
        self._step()

        if self._focus is not None:
            self._focus()

    def set_guess(self, text: str) -> None:
        """Store free-text input; cleared on every advance, never scored."""
        self._guess = text

    def close(self) -> None:
        """Cancel any pending advancement."""
        self._cancel_pending()

    def view(self) -> RoundView:
        current = self.current
        if current is None:
            return RoundView(
                status=self.status,
                score=self._score,
                attempts=self._attempts,
                feedback=self._feedback,
            )

        options = []
        for opt in self._options:
            state = OptionState.NEUTRAL
            if self._locked and opt == self._selected:
                state = OptionState.CORRECT if opt == current.name else OptionState.INCORRECT
            options.append(OptionView(label=opt, state=state))

        return RoundView(
            status=self.status,
            flag_image_url=current.flag_image_url,
            flag_png_url=current.flag_png_url,
            alt_text=f"Flag of {current.name}",
            options=options,
            score=self._score,
            attempts=self._attempts,
            feedback=self._feedback,
            locked=self._locked,
            round_id=self._round_id,
        )

    # ------------------------------------------------------------------
    # Round progression
    # ------------------------------------------------------------------

    def _step(self) -> None:
        if not self._countries:
            return
        if self._current_index is None:
            self._set_index(0)
        else:
            self._set_index((self._current_index + 1) % len(self._countries))

    def _set_index(self, index: int) -> None:
        self._current_index = index
        self._regenerate_options()

    def _regenerate_options(self) -> None:
        current = self.current
        self._options = generate_options(self._countries, current, self._rng) if current else []
        self._selected = None
        self._locked = False
        self._round_id += 1

    def _schedule_advance(self, delay: float) -> None:
        self._cancel_pending()
        self._advance_task = asyncio.get_running_loop().create_task(self._advance_after(delay))

    def _cancel_pending(self) -> None:
        task = self._advance_task
        self._advance_task = None
        if task is not None and not task.done():
            task.cancel()

    async def _advance_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self._advance_task = None
        self._feedback = ""
        self._guess = ""
        self._step()

        if self._on_advance is None:
            return
        try:
            await self._on_advance(self)
        except Exception:
            logger.exception("Failed to present round %d", self._round_id)
