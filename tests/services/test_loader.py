"""Tests for fetching JSONL sources (mocked HTTP and Hub downloads)."""

from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from huggingface_hub.errors import HFValidationError

from ranktable.services.leaderboard.loader import (
    LoadError,
    fetch_text,
    load_records,
    split_hf_source,
)

URL = "https://example.org/static/data/leaderboard.jsonl"


def _response(status: int, text: str = "") -> httpx.Response:
    return httpx.Response(status, text=text, request=httpx.Request("GET", URL))


class TestFetchUrl:
    def test_returns_body_and_disables_caching(self) -> None:
        with patch(
            "ranktable.services.leaderboard.loader.httpx.get",
            return_value=_response(200, '{"model": "a"}\n'),
        ) as get:
            assert fetch_text(URL) == '{"model": "a"}\n'

        _, kwargs = get.call_args
        assert kwargs["headers"] == {"Cache-Control": "no-store"}

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_non_success_status_raises(self, status: int) -> None:
        with patch(
            "ranktable.services.leaderboard.loader.httpx.get",
            return_value=_response(status),
        ):
            with pytest.raises(LoadError, match=f"HTTP {status}") as exc_info:
                fetch_text(URL)

        assert exc_info.value.status_code == status

    def test_transport_error_raises_load_error(self) -> None:
        with patch(
            "ranktable.services.leaderboard.loader.httpx.get",
            side_effect=httpx.ConnectError("Network unreachable"),
        ):
            with pytest.raises(LoadError, match="Network unreachable"):
                fetch_text(URL)

    def test_strips_byte_order_mark(self) -> None:
        with patch(
            "ranktable.services.leaderboard.loader.httpx.get",
            return_value=_response(200, '\ufeff{"model": "a"}\n'),
        ):
            assert fetch_text(URL) == '{"model": "a"}\n'


class TestFetchFile:
    def test_reads_local_file(self, write_jsonl) -> None:
        path = write_jsonl([{"model": "a"}])

        assert '"model": "a"' in fetch_text(str(path))

    def test_missing_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(LoadError):
            fetch_text(str(tmp_path / "missing.jsonl"))

    def test_null_byte_in_path_raises_load_error(self) -> None:
        with pytest.raises(LoadError):
            fetch_text("static/\x00leaderboard.jsonl")

    def test_byte_order_mark_does_not_drop_first_record(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.jsonl"
        path.write_text('{"model": "a"}\n{"model": "b"}\n', encoding="utf-8-sig")

        result = load_records(str(path))

        assert result.records == [{"model": "a"}, {"model": "b"}]
        assert result.skipped_count == 0


class TestFetchHub:
    def test_downloads_dataset_file(self, write_jsonl) -> None:
        path = write_jsonl([{"model": "hub"}])

        with patch(
            "ranktable.services.leaderboard.loader.hf_hub_download",
            return_value=str(path),
        ) as download:
            result = load_records("hf://datasets/acme/board/data/leaderboard.jsonl")

        assert result.records == [{"model": "hub"}]
        download.assert_called_once_with(
            repo_id="acme/board",
            filename="data/leaderboard.jsonl",
            repo_type="dataset",
            force_download=True,
        )

    def test_os_error_raises_load_error(self) -> None:
        with patch(
            "ranktable.services.leaderboard.loader.hf_hub_download",
            side_effect=OSError("offline"),
        ):
            with pytest.raises(LoadError, match="offline"):
                fetch_text("hf://datasets/acme/board/lb.jsonl")

    def test_invalid_repo_id_raises_load_error(self) -> None:
        with patch(
            "ranktable.services.leaderboard.loader.hf_hub_download",
            side_effect=HFValidationError("Repo id must use alphanumeric chars: 'bad owner/x'"),
        ):
            with pytest.raises(LoadError, match="bad owner"):
                fetch_text("hf://datasets/bad owner/x/lb.jsonl")

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            pytest.param("hf://datasets/acme/board/lb.jsonl", ("acme/board", "lb.jsonl"), id="root_file"),
            pytest.param("hf://datasets/acme/board/a/b.jsonl", ("acme/board", "a/b.jsonl"), id="nested_file"),
        ],
    )
    def test_split_hf_source(self, source: str, expected: tuple[str, str]) -> None:
        assert split_hf_source(source) == expected

    def test_split_hf_source_rejects_missing_filename(self) -> None:
        with pytest.raises(LoadError, match="Invalid Hub source"):
            split_hf_source("hf://datasets/acme/board")


class TestLoadRecords:
    def test_counts_skipped_lines(self, write_jsonl) -> None:
        path = write_jsonl([{"model": "a"}, "{broken", {"model": "b"}])

        result = load_records(str(path))

        assert len(result.records) == 2
        assert result.skipped_count == 1
