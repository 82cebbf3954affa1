"""ranktable - Terminal viewer for JSONL leaderboards.

The app loads view settings, opens the leaderboard modal, and exits when the
modal is closed.
"""

import logging
import multiprocessing
import os

from textual.app import App
from textual.binding import Binding

from ranktable.modals.leaderboard_modal import LeaderboardModal
from ranktable.services.config import ViewSettings, ViewSettingsManager

_log = logging.getLogger(__name__)

HF_ENV_DEFAULTS = {
    "HF_HUB_DISABLE_PROGRESS_BARS": "1",
    "HF_DATASETS_DISABLE_PROGRESS_BARS": "1",
}


class RankTableApp(App):
    """Main application - a single leaderboard modal over an empty screen."""

    TITLE = "ranktable v0.1.0"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("f1", "toggle_help", "Help"),
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(self, settings: ViewSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or ViewSettingsManager().load()

    @property
    def settings(self) -> ViewSettings:
        return self._settings

    def on_mount(self) -> None:
        """Open the leaderboard when the app mounts."""
        _log.info("Opening leaderboard from %s", self._settings.data_source)
        self.push_screen(LeaderboardModal(self._settings), callback=self._on_modal_closed)

    def _on_modal_closed(self, _result: None) -> None:
        self.exit()

    def action_toggle_help(self) -> None:
        """Show keyboard shortcuts."""
        self.notify(
            "Arrow keys: Navigate rows\n"
            "R: Reload data\n"
            "E: Export HTML page\n"
            "Esc: Close",
            title="Keyboard Shortcuts",
        )


def main() -> None:
    """Entry point for the application."""
    # Hub downloads run inside Textual worker threads; fork() there fails once
    # the driver has redirected file descriptors.
    try:
        multiprocessing.set_start_method("spawn", force=True)
    except RuntimeError:
        pass

    for key, value in HF_ENV_DEFAULTS.items():
        os.environ.setdefault(key, value)

    # Start the resource tracker before Textual takes the terminal; Hub file
    # locks create semaphores from the loader worker.
    multiprocessing.Semaphore(1)

    app = RankTableApp()
    app.run()


if __name__ == "__main__":
    main()
