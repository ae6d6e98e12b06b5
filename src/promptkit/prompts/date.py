"""
Calendar date picker.

Arrow keys move the selection by a day (Left/Right) or a week (Up/Down),
PageUp/PageDown (or ``[`` / ``]``) by a month.  Moves that would leave the
configured ``[min, max]`` range are refused with an inline hint, and Enter
only submits a date inside the range.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from promptkit.config import PromptSettings
from promptkit.prompts.base import Prompt, Submit
from promptkit.tui.keys import Key
from promptkit.validation import ValidatorLike


@dataclass(frozen=True)
class DateConfig:
    """
    Configuration for a date prompt.

    Attributes
    ----------
    default:
        Initially selected date (today when omitted), clamped into range.
    min, max:
        Inclusive bounds.
    week_start:
        First column of the grid, ``0`` = Monday ... ``6`` = Sunday.
    """

    message: str
    default: date | None = None
    min: date | None = None
    max: date | None = None
    week_start: int = 0
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not be after max ({self.max})")
        if not 0 <= self.week_start <= 6:
            raise ValueError("week_start must be between 0 (Monday) and 6 (Sunday)")


def add_months(day: date, months: int) -> date:
    """Shift *day* by whole months, clamping the day to the target month's length."""
    years, month0 = divmod(day.month - 1 + months, 12)
    year = day.year + years
    month = month0 + 1
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))


class DatePrompt(Prompt[date]):
    """Pick a day from a month grid."""

    config: DateConfig
    cancel_keys = frozenset({"ctrl+c", "escape"})

    def __init__(
        self,
        config: DateConfig,
        settings: PromptSettings | None = None,
        today: date | None = None,
    ) -> None:
        super().__init__(config, settings)
        self.today = today or date.today()
        self.selected = self.clamp(config.default or self.today)

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def in_bounds(self, day: date) -> bool:
        cfg = self.config
        if cfg.min is not None and day < cfg.min:
            return False
        if cfg.max is not None and day > cfg.max:
            return False
        return True

    def clamp(self, day: date) -> date:
        if self.config.min is not None and day < self.config.min:
            return self.config.min
        if self.config.max is not None and day > self.config.max:
            return self.config.max
        return day

    def bounds_hint(self) -> str:
        lo, hi = self.config.min, self.config.max
        if lo is not None and hi is not None:
            return f"Date must be between {lo.isoformat()} and {hi.isoformat()}"
        if lo is not None:
            return f"Date must be on or after {lo.isoformat()}"
        return f"Date must be on or before {hi.isoformat() if hi else ''}"

    def move_to(self, target: date) -> None:
        """Select *target* if it is in range; otherwise keep the selection."""
        if self.in_bounds(target):
            self.selected = target
        else:
            self.notice = self.bounds_hint()

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def navigate(self, name: str, day: date) -> date | None:
        """The date a navigation key leads to, ``None`` for other keys."""
        if name == "left":
            return day - timedelta(days=1)
        if name == "right":
            return day + timedelta(days=1)
        if name == "up":
            return day - timedelta(days=7)
        if name == "down":
            return day + timedelta(days=7)
        if name in ("page_up", "["):
            return add_months(day, -1)
        if name in ("page_down", "]"):
            return add_months(day, 1)
        if name == "home":
            return day.replace(day=1)
        if name == "end":
            return day.replace(day=calendar.monthrange(day.year, day.month)[1])
        if name == "t":
            return self.today
        return None

    def handle_key(self, key: Key) -> Submit[date] | None:
        self.notice = None
        day = self.selected

        if key.name == "enter":
            if self.in_bounds(day):
                return Submit(day)
            self.notice = self.bounds_hint()
            return None

        try:
            target = self.navigate(key.name, day)
        except (OverflowError, ValueError):
            # Past date.min or date.max
            self.notice = "Date is outside the supported calendar range"
            return None
        if target is not None:
            self.move_to(target)
        return None

    def render(self) -> list[str]:
        sel = self.selected
        lines = [f"{self.header()} {self.theme.primary(sel.isoformat())}"]

        title = f"{calendar.month_name[sel.month]} {sel.year}"
        lines.append("  " + self.theme.title(title.center(20)))

        cal = calendar.Calendar(firstweekday=self.config.week_start)
        weekdays = [calendar.day_abbr[(self.config.week_start + i) % 7][:2] for i in range(7)]
        lines.append("  " + self.theme.muted(" ".join(weekdays)))

        for week in cal.monthdayscalendar(sel.year, sel.month):
            cells: list[str] = []
            for num in week:
                if num == 0:
                    cells.append("  ")
                    continue
                cell = f"{num:>2}"
                current = sel.replace(day=num)
                if num == sel.day:
                    cell = self.theme.cursor(self.theme.primary(cell))
                elif not self.in_bounds(current):
                    cell = self.theme.muted(cell)
                elif current == self.today:
                    cell = self.theme.title(cell)
                cells.append(cell)
            lines.append("  " + " ".join(cells))

        lines.append(self.theme.muted("  ←→ day  ↑↓ week  PgUp/PgDn month  enter to select"))
        return lines

    def format_value(self, value: date) -> str:
        return value.isoformat()
