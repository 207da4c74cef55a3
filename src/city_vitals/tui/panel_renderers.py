"""Panel rendering logic - pure functions for building display text.

Kept separate from the widgets so rendering can be tested without an app.
"""

from rich.text import Text

from city_vitals.core.metrics import METER_MAX, METER_MIN

_FILL = "█"
_EMPTY = "░"
_FLAT_COLOR = "cyan"


def gradient_color(value: float) -> str:
    """Traffic-light color for gradient meters (high = bad)."""
    # [LAW:dataflow-not-control-flow] Color selection driven by data, not control flow
    if value < 33.0:
        return "green"
    if value < 66.0:
        return "yellow"
    return "red"


def filled_cells(value: float, width: int) -> int:
    if width <= 0:
        return 0
    span = METER_MAX - METER_MIN
    fraction = (value - METER_MIN) / span
    return max(0, min(width, int(round(fraction * width))))


def render_meter(value: float, width: int, gradient: bool = False) -> Text:
    """Render a horizontal meter bar of the given cell width.

    Args:
        value: Meter position, already clamped into the meter range.
        width: Available cells.
        gradient: Color by value instead of the flat meter color.
    """
    filled = filled_cells(value, width)
    color = gradient_color(value) if gradient else _FLAT_COLOR
    text = Text()
    text.append(_FILL * filled, style=color)
    text.append(_EMPTY * (width - filled), style="dim")
    return text


def render_toggle_label(visible: bool) -> str:
    marker = "▾" if visible else "▸"
    return " {} Vitals ".format(marker)
