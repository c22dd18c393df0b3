"""
Unit tests for the command line interface.
"""
import json

import pytest
from unittest.mock import AsyncMock, patch

from remarkdeck.cli import EXIT_ERROR, EXIT_OK, EXIT_RATE_LIMITED, main
from remarkdeck.client import DeckClient, DeckClientError, FetchResult
from remarkdeck.core.storage import JsonFileStore
from remarkdeck.services.cache import DeckCache
from remarkdeck.services.generation import RateLimitExceededError


@pytest.fixture
def deck_file(tmp_path, sample_deck):
    path = tmp_path / "deck.json"
    path.write_text(json.dumps(sample_deck.to_wire()), encoding="utf-8")
    return path


def seed_cache(data_dir, key, deck):
    cache = DeckCache(store=JsonFileStore(data_dir / "storage"))
    cache.put(key, deck)


class TestRenderCommand:

    def test_render_to_file(self, tmp_path, deck_file):
        out = tmp_path / "deck.md"

        code = main(["--data-dir", str(tmp_path), "render", str(deck_file), "--output", str(out)])

        assert code == EXIT_OK
        markdown = out.read_text(encoding="utf-8")
        assert markdown.startswith("name: intro\nclass: center, middle\n\n# Welcome\n")
        assert "\n???\nSay hello\n" in markdown

    def test_render_to_stdout(self, tmp_path, deck_file, capsys):
        code = main(["--data-dir", str(tmp_path), "render", str(deck_file)])

        assert code == EXIT_OK
        assert "- second point" in capsys.readouterr().out

    def test_render_html(self, tmp_path, deck_file):
        page = tmp_path / "deck.html"

        code = main(["--data-dir", str(tmp_path), "render", str(deck_file), "--html", str(page)])

        assert code == EXIT_OK
        html = page.read_text(encoding="utf-8")
        assert '<textarea id="source"' in html
        assert "<title>deck</title>" in html

    def test_render_missing_file(self, tmp_path):
        code = main(["--data-dir", str(tmp_path), "render", str(tmp_path / "missing.json")])

        assert code == EXIT_ERROR

    def test_render_invalid_deck(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"css": "", "slides": []}', encoding="utf-8")

        code = main(["--data-dir", str(tmp_path), "render", str(path)])

        assert code == EXIT_ERROR
        assert "not a valid deck" in capsys.readouterr().err


class TestCacheCommand:

    def test_list_empty(self, tmp_path, capsys):
        assert main(["--data-dir", str(tmp_path), "cache", "list"]) == EXIT_OK
        assert "No cached decks" in capsys.readouterr().out

    def test_list_and_show(self, tmp_path, sample_deck, capsys):
        seed_cache(tmp_path, "tea", sample_deck)

        assert main(["--data-dir", str(tmp_path), "cache", "list"]) == EXIT_OK
        assert "tea" in capsys.readouterr().out

        assert main(["--data-dir", str(tmp_path), "cache", "show", "tea"]) == EXIT_OK
        assert "# Welcome" in capsys.readouterr().out

    def test_remove(self, tmp_path, sample_deck):
        seed_cache(tmp_path, "tea", sample_deck)

        assert main(["--data-dir", str(tmp_path), "cache", "remove", "tea"]) == EXIT_OK
        assert main(["--data-dir", str(tmp_path), "cache", "remove", "tea"]) == EXIT_ERROR

    def test_show_defaults_to_newest(self, tmp_path, sample_deck, make_deck, capsys):
        seed_cache(tmp_path, "older", make_deck("# Older"))
        seed_cache(tmp_path, "tea", sample_deck)

        assert main(["--data-dir", str(tmp_path), "cache", "show"]) == EXIT_OK
        assert "# Welcome" in capsys.readouterr().out

    def test_show_empty_cache(self, tmp_path):
        assert main(["--data-dir", str(tmp_path), "cache", "show"]) == EXIT_ERROR

    def test_remove_requires_key(self, tmp_path):
        assert main(["--data-dir", str(tmp_path), "cache", "remove"]) == EXIT_ERROR

    def test_clear(self, tmp_path, sample_deck):
        seed_cache(tmp_path, "tea", sample_deck)

        assert main(["--data-dir", str(tmp_path), "cache", "clear"]) == EXIT_OK

        assert DeckCache(store=JsonFileStore(tmp_path / "storage")).list() == []


class TestQuotaCommand:

    def test_quota_reports_full_window(self, tmp_path, capsys):
        assert main(["--data-dir", str(tmp_path), "quota"]) == EXIT_OK
        assert "15 of 15 requests remaining" in capsys.readouterr().out


class TestGenerateCommand:

    def test_generate_prints_markdown(self, tmp_path, sample_deck, capsys):
        result = FetchResult(deck=sample_deck, from_cache=False, remaining_requests=14)
        with patch.object(DeckClient, "fetch_deck", AsyncMock(return_value=result)):
            code = main(["--data-dir", str(tmp_path), "generate", "tea"])

        assert code == EXIT_OK
        captured = capsys.readouterr()
        assert "# Welcome" in captured.out
        assert "14 requests remaining" in captured.err

    def test_generate_json(self, tmp_path, sample_deck, capsys):
        result = FetchResult(deck=sample_deck, from_cache=True, remaining_requests=15)
        with patch.object(DeckClient, "fetch_deck", AsyncMock(return_value=result)):
            code = main(["--ephemeral", "generate", "tea", "--json"])

        assert code == EXIT_OK
        assert json.loads(capsys.readouterr().out) == sample_deck.to_wire()

    def test_generate_rate_limited(self, tmp_path):
        fetch = AsyncMock(side_effect=RateLimitExceededError(remaining=0))
        with patch.object(DeckClient, "fetch_deck", fetch):
            code = main(["--data-dir", str(tmp_path), "generate", "tea"])

        assert code == EXIT_RATE_LIMITED

    def test_generate_api_error(self, tmp_path, capsys):
        fetch = AsyncMock(side_effect=DeckClientError("Failed to fetch slides", status=500))
        with patch.object(DeckClient, "fetch_deck", fetch):
            code = main(["--data-dir", str(tmp_path), "generate", "tea"])

        assert code == EXIT_ERROR
        assert "Failed to fetch slides" in capsys.readouterr().err
