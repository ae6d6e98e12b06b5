"""Tests for the date picker and multi-field forms."""

from datetime import date

import pytest

from promptkit.errors import PromptCancelledError
from promptkit.prompts.date import DateConfig, DatePrompt, add_months
from promptkit.prompts.form import FormConfig, FormField, FormPrompt
from promptkit.prompts.list_prompt import ListConfig
from promptkit.prompts.number import NumberConfig
from promptkit.prompts.select import SelectConfig
from promptkit.prompts.text import TextConfig
from promptkit.tui.ansi import strip_ansi
from promptkit.tui.keys import key_for
from promptkit.validation import v

TODAY = date(2026, 10, 17)


def picker(**options) -> DatePrompt:
    return DatePrompt(DateConfig("When", **options), today=TODAY)


class TestAddMonths:
    """Tests for add_months."""

    def test_day_is_clamped(self) -> None:
        """Moving from a long month clamps to the target month's length."""
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_year_rollover(self) -> None:
        """Months wrap across year boundaries in both directions."""
        assert add_months(date(2026, 12, 15), 1) == date(2027, 1, 15)
        assert add_months(date(2026, 1, 15), -1) == date(2025, 12, 15)
        assert add_months(date(2026, 3, 10), -14) == date(2025, 1, 10)


class TestDatePrompt:
    """Tests for DatePrompt navigation and bounds."""

    def test_starts_on_default_or_today(self) -> None:
        """The selection starts at the default, or today."""
        assert picker(default=date(2026, 1, 2)).selected == date(2026, 1, 2)
        assert picker().selected == TODAY

    def test_initial_selection_is_clamped(self) -> None:
        """A default outside the range starts at the nearest bound."""
        prompt = picker(default=date(2026, 10, 1), min=date(2026, 10, 10))

        assert prompt.selected == date(2026, 10, 10)

    def test_arrow_navigation(self) -> None:
        """Left/Right move a day, Up/Down a week."""
        prompt = picker(default=date(2026, 10, 15))
        for name, expected in [
            ("right", date(2026, 10, 16)),
            ("left", date(2026, 10, 15)),
            ("up", date(2026, 10, 8)),
            ("down", date(2026, 10, 15)),
        ]:
            prompt.handle_key(key_for(name))
            assert prompt.selected == expected

    def test_month_navigation(self) -> None:
        """PageUp/PageDown and [ ] move by month."""
        prompt = picker(default=date(2026, 1, 31))

        prompt.handle_key(key_for("page_down"))
        assert prompt.selected == date(2026, 2, 28)
        prompt.handle_key(key_for("["))
        assert prompt.selected == date(2026, 1, 28)
        prompt.handle_key(key_for("]"))
        prompt.handle_key(key_for("page_up"))
        assert prompt.selected == date(2026, 1, 28)

    @pytest.mark.parametrize(
        ("start", "keys"),
        [
            (date.max, ["right", "down", "page_down", "]"]),
            (date.min, ["left", "up", "page_up", "["]),
        ],
    )
    def test_calendar_edges_refuse_moves(self, start: date, keys: list[str]) -> None:
        """Without bounds, moving past date.min or date.max keeps the selection."""
        prompt = picker(default=start)

        for name in keys:
            assert prompt.handle_key(key_for(name)) is None
            assert prompt.selected == start
            assert prompt.notice == "Date is outside the supported calendar range"
        assert prompt.render()[0] == f"? When {start.isoformat()}"

    def test_home_end(self) -> None:
        """Home/End jump to the first and last day of the month."""
        prompt = picker(default=date(2026, 2, 10))

        prompt.handle_key(key_for("end"))
        assert prompt.selected == date(2026, 2, 28)
        prompt.handle_key(key_for("home"))
        assert prompt.selected == date(2026, 2, 1)

    def test_today_key(self) -> None:
        """'t' jumps to today."""
        prompt = picker(default=date(2020, 5, 5))
        prompt.handle_key(key_for("t"))

        assert prompt.selected == TODAY

    def test_moves_out_of_bounds_are_rejected(self) -> None:
        """A move past a bound keeps the selection and explains why."""
        prompt = picker(default=date(2026, 10, 10), min=date(2026, 10, 10), max=date(2026, 10, 20))

        prompt.handle_key(key_for("left"))
        assert prompt.selected == date(2026, 10, 10)
        assert prompt.notice == "Date must be between 2026-10-10 and 2026-10-20"

        prompt.handle_key(key_for("right"))
        assert prompt.selected == date(2026, 10, 11)
        assert prompt.notice is None

    def test_enter_outside_bounds_is_noop(self) -> None:
        """Enter does not submit a selection outside the range."""
        prompt = picker(min=date(2026, 10, 10), max=date(2026, 10, 20))
        prompt.selected = date(2026, 10, 25)

        assert prompt.handle_key(key_for("enter")) is None
        assert prompt.selected == date(2026, 10, 25)
        assert prompt.notice == "Date must be between 2026-10-10 and 2026-10-20"

    def test_one_sided_bound_hints(self) -> None:
        """Hints mention only the bounds that exist."""
        assert picker(min=date(2026, 1, 1)).bounds_hint() == "Date must be on or after 2026-01-01"
        assert picker(max=date(2027, 1, 1)).bounds_hint() == "Date must be on or before 2027-01-01"

    def test_run_returns_date(self, make_terminal, screen) -> None:
        """A full session returns a datetime.date."""
        terminal = make_terminal("right", "right", "enter")
        prompt = picker(default=date(2026, 10, 15))

        assert prompt.run(terminal) == date(2026, 10, 17)
        assert screen(terminal) == ["✓ When 2026-10-17"]

    def test_escape_cancels(self, make_terminal) -> None:
        """Escape aborts the picker."""
        with pytest.raises(PromptCancelledError):
            picker().run(make_terminal("escape"))

    def test_render_grid(self) -> None:
        """The grid shows the month title, weekday header and days."""
        lines = picker(default=date(2026, 10, 15)).render()

        assert lines[0] == "? When 2026-10-15"
        assert lines[1].strip() == "October 2026"
        assert lines[2].strip() == "Mo Tu We Th Fr Sa Su"
        assert any("15" in line for line in lines[3:])

    def test_week_start(self) -> None:
        """week_start rotates the weekday header."""
        lines = picker(default=date(2026, 10, 15), week_start=6).render()

        assert lines[2].strip() == "Su Mo Tu We Th Fr Sa"

    def test_config_validation(self) -> None:
        """Inverted bounds and bad week starts are rejected."""
        with pytest.raises(ValueError):
            DateConfig("When", min=date(2026, 2, 1), max=date(2026, 1, 1))
        with pytest.raises(ValueError):
            DateConfig("When", week_start=7)


class TestFormField:
    """Tests for per-field config resolution."""

    def test_defaults_to_text(self) -> None:
        """A field without config is a text prompt labelled by its name."""
        config = FormField("name").resolved_config()

        assert config == TextConfig(message="name")

    def test_label_overrides_message(self) -> None:
        """The label replaces the config's message."""
        config = FormField("age", "Your age", config=NumberConfig("Age")).resolved_config()

        assert config.message == "Your age"

    def test_required_text_family(self) -> None:
        """required maps onto each text-family config."""
        assert FormField("n", required=True).resolved_config().required is True
        listed = FormField("tags", required=True, config=ListConfig("Tags")).resolved_config()
        assert listed.min == 1

    def test_form_config_validation(self) -> None:
        """Forms need unique field names and at least one field."""
        with pytest.raises(ValueError, match="Duplicate"):
            FormConfig("F", fields=[FormField("a"), FormField("a")])
        with pytest.raises(ValueError):
            FormConfig("F", fields=[])


class TestFormPrompt:
    """Tests for running forms."""

    def test_fields_run_in_order(self, make_terminal, screen) -> None:
        """Each field is asked in turn and the answers are collected."""
        terminal = make_terminal(
            "enter", *"Ada", "enter",
            "4", "2", "enter",
            "down", "enter",
        )
        config = FormConfig(
            "Profile",
            fields=[
                FormField("name", "Name", required=True),
                FormField("age", config=NumberConfig("Age", integer=True)),
                FormField("lang", config=SelectConfig("Language", options=["py", "go"])),
            ],
        )

        assert FormPrompt(config).run(terminal) == {"name": "Ada", "age": 42, "lang": "go"}
        assert terminal.acquisitions == 1
        assert not terminal.is_raw
        assert screen(terminal) == ["? Profile", "✓ Name Ada", "✓ Age 42", "✓ Language go"]
        assert "Required" in strip_ansi(terminal.output.getvalue())

    def test_field_validator(self, make_terminal) -> None:
        """Per-field validators run after the config's own."""
        terminal = make_terminal(*"ada", "enter", *"@x.io", "enter")
        config = FormConfig("F", fields=[FormField("email", validator=v.string().email())])

        assert FormPrompt(config).run(terminal) == {"email": "ada@x.io"}
        assert "Must be a valid email address" in strip_ansi(terminal.output.getvalue())

    def test_cancel_discards_answers(self, make_terminal) -> None:
        """Cancelling a later field cancels the form."""
        terminal = make_terminal(*"Ada", "enter", "ctrl+c")
        config = FormConfig("F", fields=[FormField("name"), FormField("city")])

        with pytest.raises(PromptCancelledError):
            FormPrompt(config).run(terminal)
        assert not terminal.is_raw
