"""Clickable text controls for the panel title bar and the settings panel."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.widgets import Static


class Chip(Static):
    """Short text button that runs a callback, or an app action when no callback is given."""

    ALLOW_SELECT = False
    DEFAULT_CSS = """
    Chip {
        width: auto;
        height: 1;
        background: $panel-lighten-2;
        color: $text;
    }
    Chip:hover {
        background: $accent;
    }
    """

    def __init__(
        self,
        label: str,
        *,
        action: str | None = None,
        on_press: Callable[[], None] | None = None,
        **kwargs,
    ):
        super().__init__(label, **kwargs)
        self._action = action
        self._on_press = on_press

    async def on_click(self, event: events.Click) -> None:
        event.stop()
        if self._on_press is not None:
            self._on_press()
        elif self._action:
            await self.run_action(self._action)


def checkbox_text(label: str, value: bool) -> Text:
    return Text.assemble(("[x] " if value else "[ ] ", "bold"), label)


class ToggleChip(Static):
    """Checkbox line. Click, Space or Enter flips the value."""

    ALLOW_SELECT = False
    can_focus = True

    BINDINGS = [Binding("space,enter", "flip", "Toggle", show=False)]

    DEFAULT_CSS = """
    ToggleChip {
        width: 1fr;
        height: 1;
        color: $text-muted;
    }
    ToggleChip.-on {
        color: $text;
        text-style: bold;
    }
    ToggleChip:focus {
        background: $boost;
        text-style: underline;
    }
    """

    def __init__(self, label: str, *, value: bool = False, **kwargs):
        super().__init__(checkbox_text(label, value), **kwargs)
        self._label = label
        self._value = value
        self.set_class(value, "-on")

    @property
    def value(self) -> bool:
        return self._value

    def toggle(self) -> None:
        self._value = not self._value
        self.set_class(self._value, "-on")
        self.update(checkbox_text(self._label, self._value))

    def action_flip(self) -> None:
        self.toggle()

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.toggle()
