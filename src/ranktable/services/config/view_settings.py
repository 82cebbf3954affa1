"""ViewSettings - Configuration for where the leaderboard comes from and how it renders."""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import ClassVar

from platformdirs import user_config_dir

_log = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(user_config_dir("ranktable")) / "view_settings.json"


@dataclass
class ViewSettings:
    """Data source and presentation settings for the leaderboard view."""

    DEFAULT_SOURCE: ClassVar[str] = "static/data/leaderboard.jsonl"
    DEFAULT_PRECISION: ClassVar[int] = 2
    DEFAULT_TABLE_ID: ClassVar[str] = "leaderboard-table"

    data_source: str = DEFAULT_SOURCE
    precision: int = DEFAULT_PRECISION
    compute_missing_overall: bool = False
    page_title: str = "Leaderboard"
    table_id: str = DEFAULT_TABLE_ID
    output_path: str = "leaderboard.html"
    timeout: float = 30.0


class ViewSettingsManager:
    """Manages view settings persistence to JSON file."""

    def __init__(self, settings_path: Path = DEFAULT_SETTINGS_PATH) -> None:
        self._path = settings_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ViewSettings:
        """Load settings from disk. Returns defaults if file missing or unreadable."""
        if not self._path.exists():
            return ViewSettings()
        try:
            data = json.loads(self._path.read_text())
        except (OSError, ValueError) as exc:
            _log.warning("Ignoring unreadable settings file %s: %s", self._path, exc)
            return ViewSettings()
        if not isinstance(data, dict):
            _log.warning("Ignoring settings file %s: expected a JSON object", self._path)
            return ViewSettings()

        defaults = ViewSettings()
        return ViewSettings(
            data_source=data.get("data_source", defaults.data_source),
            precision=data.get("precision", defaults.precision),
            compute_missing_overall=data.get("compute_missing_overall", False),
            page_title=data.get("page_title", defaults.page_title),
            table_id=data.get("table_id", defaults.table_id),
            output_path=data.get("output_path", defaults.output_path),
            timeout=data.get("timeout", defaults.timeout),
        )

    def save(self, settings: ViewSettings) -> None:
        """Save settings to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(asdict(settings), indent=2) + "\n")
