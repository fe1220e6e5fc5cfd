"""Calendar date picker."""

from __future__ import annotations

import calendar
import datetime
import enum
from dataclasses import dataclass, field

from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_VIM_MODE
from pi.inquire.date_utils import get_current_date, shift_months
from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.formatter import Formatter, format_date
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.validator import Invalid, Validator, run_validators

DEFAULT_HELP_MESSAGE = "arrows to move, with ctrl to move months and years, enter to select"
DEFAULT_WEEK_START = calendar.SUNDAY


class DateSelectAction(enum.Enum):
    GO_TO_PREV_DAY = "goToPrevDay"
    GO_TO_NEXT_DAY = "goToNextDay"
    GO_TO_PREV_WEEK = "goToPrevWeek"
    GO_TO_NEXT_WEEK = "goToNextWeek"
    GO_TO_PREV_MONTH = "goToPrevMonth"
    GO_TO_NEXT_MONTH = "goToNextMonth"
    GO_TO_PREV_YEAR = "goToPrevYear"
    GO_TO_NEXT_YEAR = "goToNextYear"


@dataclass(frozen=True)
class DateSelectConfig:
    vim_mode: bool = DEFAULT_VIM_MODE
    week_start: int = DEFAULT_WEEK_START
    min_date: datetime.date | None = None
    max_date: datetime.date | None = None


_VIM_KEYS = {
    "k": DateSelectAction.GO_TO_PREV_WEEK,
    "j": DateSelectAction.GO_TO_NEXT_WEEK,
    "h": DateSelectAction.GO_TO_PREV_DAY,
    "l": DateSelectAction.GO_TO_NEXT_DAY,
}

_PLAIN_KEYS = {
    KeyKind.LEFT: DateSelectAction.GO_TO_PREV_DAY,
    KeyKind.RIGHT: DateSelectAction.GO_TO_NEXT_DAY,
    KeyKind.UP: DateSelectAction.GO_TO_PREV_WEEK,
    KeyKind.DOWN: DateSelectAction.GO_TO_NEXT_WEEK,
    KeyKind.TAB: DateSelectAction.GO_TO_NEXT_WEEK,
}

_CONTROL_KEYS = {
    KeyKind.LEFT: DateSelectAction.GO_TO_PREV_MONTH,
    KeyKind.RIGHT: DateSelectAction.GO_TO_NEXT_MONTH,
    KeyKind.UP: DateSelectAction.GO_TO_PREV_YEAR,
    KeyKind.DOWN: DateSelectAction.GO_TO_NEXT_YEAR,
}


def date_action_from_key(key: Key, config: DateSelectConfig) -> DateSelectAction | None:
    if config.vim_mode and key.kind is KeyKind.CHAR and key.modifiers == KeyModifiers.NONE:
        action = _VIM_KEYS.get(key.char or "")
        if action is not None:
            return action

    if key.modifiers == KeyModifiers.NONE:
        return _PLAIN_KEYS.get(key.kind)
    if key.modifiers == KeyModifiers.CONTROL:
        return _CONTROL_KEYS.get(key.kind)
    return None


class DateSelectPrompt(Prompt[DateSelectAction, datetime.date]):
    def __init__(self, date_select: DateSelect) -> None:
        starting_date = date_select.starting_date or get_current_date()
        min_date = date_select.min_date
        max_date = date_select.max_date

        if min_date is not None and max_date is not None and min_date > max_date:
            raise InvalidConfigurationError("Min date can not be greater than max date")
        if min_date is not None and min_date > starting_date:
            raise InvalidConfigurationError("Min date can not be greater than starting date")
        if max_date is not None and max_date < starting_date:
            raise InvalidConfigurationError("Max date can not be smaller than starting date")

        self.message = date_select.message
        self.config = DateSelectConfig(
            vim_mode=date_select.vim_mode,
            week_start=date_select.week_start,
            min_date=min_date,
            max_date=max_date,
        )
        self.help_message = date_select.help_message
        self.formatter = date_select.formatter
        self.validators = list(date_select.validators)
        self.current_date = starting_date
        self.error: Invalid | None = None

    def _shift_days(self, days: int) -> ActionResult:
        try:
            new_date = self.current_date + datetime.timedelta(days=days)
        except OverflowError:
            return ActionResult.CLEAN
        return self._update_date(new_date)

    def _shift_months(self, months: int) -> ActionResult:
        new_date = shift_months(self.current_date, months)
        if new_date is None:
            return ActionResult.CLEAN
        return self._update_date(new_date)

    def _update_date(self, new_date: datetime.date) -> ActionResult:
        if self.config.min_date is not None:
            new_date = max(new_date, self.config.min_date)
        if self.config.max_date is not None:
            new_date = min(new_date, self.config.max_date)

        if new_date == self.current_date:
            return ActionResult.CLEAN
        self.current_date = new_date
        return ActionResult.NEEDS_REDRAW

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> DateSelectAction | None:
        return date_action_from_key(key, self.config)

    def submit(self) -> datetime.date | None:
        validation = run_validators(self.validators, self.current_date)
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return self.current_date

    def handle(self, action: DateSelectAction) -> ActionResult:
        if action is DateSelectAction.GO_TO_PREV_DAY:
            return self._shift_days(-1)
        if action is DateSelectAction.GO_TO_NEXT_DAY:
            return self._shift_days(1)
        if action is DateSelectAction.GO_TO_PREV_WEEK:
            return self._shift_days(-7)
        if action is DateSelectAction.GO_TO_NEXT_WEEK:
            return self._shift_days(7)
        if action is DateSelectAction.GO_TO_PREV_MONTH:
            return self._shift_months(-1)
        if action is DateSelectAction.GO_TO_NEXT_MONTH:
            return self._shift_months(1)
        if action is DateSelectAction.GO_TO_PREV_YEAR:
            return self._shift_months(-12)
        return self._shift_months(12)

    def format_answer(self, answer: datetime.date) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        backend.render_calendar_prompt(self.message)
        backend.render_calendar(
            month=self.current_date.month,
            year=self.current_date.year,
            week_start=self.config.week_start,
            today=get_current_date(),
            selected_date=self.current_date,
            min_date=self.config.min_date,
            max_date=self.config.max_date,
        )

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class DateSelect(PromptBuilder[datetime.date]):
    """Pick a date on a calendar.

    ``week_start`` uses :mod:`calendar` weekday constants
    (``calendar.MONDAY`` ... ``calendar.SUNDAY``).
    """

    message: str
    starting_date: datetime.date | None = None
    min_date: datetime.date | None = None
    max_date: datetime.date | None = None
    week_start: int = DEFAULT_WEEK_START
    help_message: str | None = DEFAULT_HELP_MESSAGE
    vim_mode: bool = DEFAULT_VIM_MODE
    formatter: Formatter[datetime.date] = format_date
    validators: list[Validator[datetime.date]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> DateSelectPrompt:
        return DateSelectPrompt(self)
