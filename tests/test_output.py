"""Tests for spinners, drafts and progress bars."""

import threading
import time
from io import StringIO

import pytest

from conftest import render_screen
from promptkit.config import PromptSettings
from promptkit.output import Draft, ProgressBar, Spinner


@pytest.fixture
def fast_settings() -> PromptSettings:
    return PromptSettings(color="never", spinner_interval_ms=5, editor=None)


class TestSpinner:
    """Tests for Spinner."""

    def test_succeed_replaces_animation(self, fast_settings: PromptSettings) -> None:
        """succeed() leaves one permanent line."""
        out = StringIO()
        spinner = Spinner("Installing", output=out, settings=fast_settings).start()
        assert spinner.running

        spinner.update("Linking")
        spinner.succeed("Installed")

        assert spinner.phase == "succeeded"
        assert render_screen(out.getvalue()) == ["✓ Installed"]

    def test_fail_keeps_message(self, fast_settings: PromptSettings) -> None:
        """fail() without text reuses the current message."""
        out = StringIO()
        spinner = Spinner("Deploying", output=out, settings=fast_settings).start()
        spinner.fail()

        assert render_screen(out.getvalue()) == ["✗ Deploying"]

    def test_stop_without_message_clears(self, fast_settings: PromptSettings) -> None:
        """stop() with no text removes the spinner line."""
        out = StringIO()
        spinner = Spinner("Waiting", output=out, settings=fast_settings).start()
        spinner.stop()

        assert spinner.phase == "stopped"
        assert render_screen(out.getvalue()) == []

    def test_ends_only_once(self, fast_settings: PromptSettings) -> None:
        """Later succeed/fail/stop/update calls change nothing."""
        out = StringIO()
        spinner = Spinner("Working", output=out, settings=fast_settings).start()
        spinner.succeed("Done")
        written = out.getvalue()

        spinner.fail("Broken")
        spinner.stop("Stopped")
        spinner.update("Again")

        assert out.getvalue() == written
        assert spinner.phase == "succeeded"
        assert spinner.message == "Working"

    def test_start_is_idempotent(self, fast_settings: PromptSettings) -> None:
        """Starting twice keeps a single animation."""
        spinner = Spinner("x", output=StringIO(), settings=fast_settings)

        assert spinner.start() is spinner
        assert spinner.start() is spinner
        spinner.stop()

    def test_context_manager(self, fast_settings: PromptSettings) -> None:
        """The with-block succeeds normally and fails on exceptions."""
        out = StringIO()
        with Spinner("Fetching", output=out, settings=fast_settings):
            pass
        assert render_screen(out.getvalue()) == ["✓ Fetching"]

        out = StringIO()
        with pytest.raises(RuntimeError):
            with Spinner("Fetching", output=out, settings=fast_settings):
                raise RuntimeError("boom")
        assert render_screen(out.getvalue()) == ["✗ Fetching"]


class TestDraft:
    """Tests for Draft and DraftLine."""

    def test_lines_update_independently(self, settings: PromptSettings) -> None:
        """Each line repaints only its own row."""
        out = StringIO()
        draft = Draft(output=out, settings=settings)
        first = draft.add_line("Fetching index")
        second = draft.add_line("Building wheels")
        assert render_screen(out.getvalue()) == ["  Fetching index", "  Building wheels"]

        second.update("Building wheels (3/5)")
        first.done("Fetched index")

        assert render_screen(out.getvalue()) == ["✓ Fetched index", "  Building wheels (3/5)"]
        assert not draft.finished

    def test_frozen_line_ignores_updates(self, settings: PromptSettings) -> None:
        """Updating a finished line writes nothing."""
        out = StringIO()
        draft = Draft(output=out, settings=settings)
        line = draft.add_line("Step")
        draft.add_line("Other")
        line.warn("Step skipped")
        written = out.getvalue()

        line.update("Step again")
        line.done()

        assert out.getvalue() == written
        assert line.state == "warned"

    def test_commits_when_all_lines_frozen(self, settings: PromptSettings) -> None:
        """The draft finishes once every line is frozen."""
        out = StringIO()
        draft = Draft(output=out, settings=settings)
        a = draft.add_line("A")
        b = draft.add_line("B")
        a.done()
        b.fail()

        assert draft.finished
        assert render_screen(out.getvalue()) == ["✓ A", "✗ B"]
        with pytest.raises(RuntimeError, match="finished draft"):
            draft.add_line("C")

    def test_stop_keeps_pending_lines(self, settings: PromptSettings) -> None:
        """stop() commits the block as it stands."""
        out = StringIO()
        draft = Draft(output=out, settings=settings)
        draft.add_line("Pending")
        draft.stop()

        assert draft.finished
        assert render_screen(out.getvalue()) == ["  Pending"]

    def test_clear_erases(self, settings: PromptSettings) -> None:
        """clear() removes the block and finishes the draft."""
        out = StringIO()
        draft = Draft(output=out, settings=settings)
        draft.add_line("Temporary")
        draft.clear()

        assert draft.finished
        assert render_screen(out.getvalue()) == []


class SlowDraft(Draft):
    """Draft whose repaint of one particular text takes a while."""

    def __init__(self, slow_text: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.slow_text = slow_text

    def _repaint(self, index: int, text: str) -> None:
        if text.endswith(self.slow_text):
            time.sleep(0.2)
        super()._repaint(index, text)


class TestDraftConcurrency:
    """DraftLine handles are used from several threads at once."""

    def test_done_is_not_overpainted_by_earlier_update(self, settings: PromptSettings) -> None:
        """An update already in flight when done() is called cannot win on screen."""
        out = StringIO()
        draft = SlowDraft("step 5", output=out, settings=settings)
        line = draft.add_line("step 1")
        draft.add_line("other")

        worker = threading.Thread(target=line.update, args=("step 5",))
        worker.start()
        time.sleep(0.05)
        line.done("finished")
        worker.join()

        assert line.state == "done"
        assert render_screen(out.getvalue()) == ["✓ finished", "  other"]

    def test_threads_each_drive_their_own_line(self, settings: PromptSettings) -> None:
        """Concurrent updates leave every row with its final text."""
        out = StringIO()
        draft = Draft(output=out, settings=settings)
        lines = [draft.add_line(f"task {n}: queued") for n in range(6)]

        def work(n: int) -> None:
            for step in range(40):
                lines[n].update(f"task {n}: step {step}")
            lines[n].done(f"task {n}: done")

        threads = [threading.Thread(target=work, args=(n,)) for n in range(len(lines))]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert draft.finished
        assert render_screen(out.getvalue()) == [f"✓ task {n}: done" for n in range(6)]


class TestProgressBar:
    """Tests for ProgressBar."""

    def test_render(self, settings: PromptSettings) -> None:
        """The bar shows fill, percentage, counts and message."""
        bar = ProgressBar(total=10, width=10, output=StringIO(), settings=settings)
        assert bar.render() == "[░░░░░░░░░░]   0% 0/10"

        bar.update(5, "halfway")
        assert bar.render() == "[█████░░░░░]  50% 5/10 halfway"

    def test_values_are_clamped(self, settings: PromptSettings) -> None:
        """Progress stays within [0, total]."""
        bar = ProgressBar(total=10, output=StringIO(), settings=settings)

        bar.update(25)
        assert bar.current == 10
        bar.update(-3)
        assert bar.current == 0
        bar.increment(4)
        bar.increment()
        assert bar.current == 5
        assert bar.fraction == 0.5

    def test_complete_freezes(self, settings: PromptSettings) -> None:
        """complete() fills the bar, commits it and ignores later calls."""
        out = StringIO()
        bar = ProgressBar(total=4, width=4, output=out, settings=settings)
        bar.increment()
        bar.complete("done")
        written = out.getvalue()

        bar.update(1)
        bar.fail()

        assert bar.frozen
        assert bar.current == 4
        assert out.getvalue() == written
        assert render_screen(written) == ["✓ [████] 100% 4/4 done"]

    def test_fail_and_stop(self, settings: PromptSettings) -> None:
        """fail() marks the bar; stop() freezes it unmarked."""
        out = StringIO()
        bar = ProgressBar(total=2, width=2, output=out, settings=settings)
        bar.update(1)
        bar.fail("network")
        assert render_screen(out.getvalue()) == ["✗ [█░]  50% 1/2 network"]

        out = StringIO()
        bar = ProgressBar(total=2, width=2, output=out, settings=settings)
        bar.stop()
        assert bar.frozen
        assert render_screen(out.getvalue()) == ["[░░]   0% 0/2"]

    def test_invalid_arguments(self) -> None:
        """Non-positive totals and widths are rejected."""
        with pytest.raises(ValueError):
            ProgressBar(total=0, output=StringIO())
        with pytest.raises(ValueError):
            ProgressBar(width=0, output=StringIO())
