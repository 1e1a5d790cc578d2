"""Textual front end: the timer window, its key bindings and the finished modal."""

from __future__ import annotations

import logging
import time
from typing import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from lighttimer.core.controller import (
    FRAME_INTERVAL,
    PRESET_MINUTES,
    Controller,
    Frame,
)

logger = logging.getLogger(__name__)


class FinishedScreen(ModalScreen[None]):
    """Modal shown when the countdown reaches zero."""

    CSS = """
    FinishedScreen {
        align: center middle;
    }

    #finished-dialog {
        width: 36;
        height: auto;
        padding: 1 2;
        border: thick $accent;
        background: $surface;
    }

    #finished-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close")]

    def compose(self) -> ComposeResult:
        with Vertical(id="finished-dialog"):
            yield Label("Timer finished.", id="finished-title")
            with Horizontal():
                yield Button("OK", id="ok-btn", variant="primary")
                yield Label(" (Esc closes)")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok-btn":
            event.stop()
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


class TimerApp(App):
    """LightTimer window.

    All timer mutation happens on the app's event loop: key bindings and
    button handlers call one controller command each, and a ticker calls
    :meth:`Controller.frame` while there is something to animate.
    """

    TITLE = "LightTimer"
    AUTO_FOCUS = None

    CSS = """
    Screen {
        layout: vertical;
        padding: 1 2;
    }

    #title-row {
        height: 1;
    }

    #title {
        width: 1fr;
        text-style: bold;
    }

    #time {
        height: 3;
        content-align: center middle;
        text-style: bold;
        border: round $accent;
        margin: 1 0;
    }

    .row {
        height: auto;
        margin-bottom: 1;
    }

    .row Label {
        padding: 1 1 0 0;
    }

    Input {
        width: 12;
    }

    Button {
        margin: 0 1 0 0;
        min-width: 6;
    }

    #status {
        color: $text-muted;
    }
    """

    BINDINGS = [
        # Priority so the shortcuts still work while a duration field has focus.
        Binding("space", "toggle", "Start/Pause", priority=True),
        Binding("r", "reset", "Reset", priority=True),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        controller: Controller | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.controller: Controller = controller if controller is not None else Controller()
        self._clock = clock
        self._modal_open = False
        self.last_frame: Frame | None = None

    # -- layout --------------------------------------------------------------

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-row"):
            yield Static("LightTimer", id="title")
            yield Static("Space: Start/Pause   R: Reset", id="shortcuts")

        yield Static("", id="time")

        with Horizontal(classes="row"):
            yield Label("Set:")
            yield Input(str(self.controller.set_minutes), type="integer", id="minutes")
            yield Label("min")
            yield Input(str(self.controller.set_seconds), type="integer", id="seconds")
            yield Label("sec")
            yield Button("Apply", id="apply-btn")

        with Horizontal(classes="row"):
            yield Label("Presets:")
            for minutes in PRESET_MINUTES:
                yield Button(str(minutes), id=f"preset-{minutes}")

        with Horizontal(classes="row"):
            yield Button("Start", id="toggle-btn", variant="success")
            yield Button("Reset", id="reset-btn")
            yield Button("Set = Remaining", id="copy-btn")

        yield Static("Tip: Press Space to start/pause, R to reset.", id="status")

    def on_mount(self) -> None:
        # Cached: once the modal is up, queries would search the modal screen.
        self._time_display = self.query_one("#time", Static)
        self._status = self.query_one("#status", Static)
        self._toggle_button = self.query_one("#toggle-btn", Button)
        self._ticker = self.set_interval(FRAME_INTERVAL, self._tick, pause=True)
        self._tick()

    # -- input ---------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        try:
            value = int(event.value)
        except ValueError:
            return
        if event.input.id == "minutes":
            self.controller.edit_minutes(value)
            clamped = self.controller.set_minutes
        elif event.input.id == "seconds":
            self.controller.edit_seconds(value)
            clamped = self.controller.set_seconds
        else:
            return
        if clamped != value:
            event.input.value = str(clamped)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "apply-btn":
            self._command(self.controller.apply)
        elif button_id == "toggle-btn":
            self._command(self.controller.toggle)
        elif button_id == "reset-btn":
            self._command(self.controller.reset)
        elif button_id == "copy-btn":
            self._command(self.controller.copy_remaining)
            self._sync_inputs()
        elif button_id.startswith("preset-"):
            minutes = int(button_id.removeprefix("preset-"))
            self._command(lambda: self.controller.preset(minutes))
            self._sync_inputs()

    def action_toggle(self) -> None:
        self._command(self.controller.toggle)

    def action_reset(self) -> None:
        self._command(self.controller.reset)

    # -- frame loop ----------------------------------------------------------

    def _command(self, action: Callable[[], str]) -> None:
        """Run one controller command, show its message and redraw."""
        message = action()
        logger.debug("command: %s", message)
        self._status.update(message)
        self._tick()

    def _tick(self) -> None:
        self._render_frame(self.controller.frame(self._clock()))

    def _render_frame(self, frame: Frame) -> None:
        self.last_frame = frame
        self._time_display.update(frame.time_text)
        self._toggle_button.label = "Pause" if frame.running else "Start"

        if frame.completion_pending and not self._modal_open:
            self._modal_open = True
            self.push_screen(FinishedScreen(), self._on_finished_closed)

        if frame.next_frame_in is None:
            self._ticker.pause()
        else:
            self._ticker.resume()

    def _on_finished_closed(self, _result: None) -> None:
        self._modal_open = False
        self.controller.acknowledge()
        self._tick()

    def _sync_inputs(self) -> None:
        self.query_one("#minutes", Input).value = str(self.controller.set_minutes)
        self.query_one("#seconds", Input).value = str(self.controller.set_seconds)
