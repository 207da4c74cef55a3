"""In-process test harness for the city-vitals Textual app.

    from tests.harness import run_app, press_and_settle, RecordingHost
"""

from tests.harness.app_runner import run_app
from tests.harness.interactions import press_and_settle, resize_and_settle, tick_and_settle
from tests.harness.recording_host import RecordingHost

__all__ = [
    "RecordingHost",
    "press_and_settle",
    "resize_and_settle",
    "run_app",
    "tick_and_settle",
]
