"""
Test suite for the lexicon layer.

Covers the bundled word tables, the Datamuse client (with httpx mocked) and
the provider's fallback to static words.
"""

import random
from unittest.mock import Mock, patch

import httpx
import pytest

from src.lexicon import (
    DATAMUSE_API_URL,
    DatamuseLexicon,
    LexiconProvider,
    LexiconUnavailable,
    StaticLexicon,
    load_word_tables,
    pick_theme,
)


def create_mock_response(data=None, status_error=None, json_error=None) -> Mock:
    """Create a mock httpx.Response returning `data` from .json()."""
    response = Mock()
    response.status_code = 200
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = data
    return response


class FakeLexicon:
    """Remote lexicon stub returning fixed words or raising."""

    name = "fake"

    def __init__(self, words=None, error=None):
        self.words = words or []
        self.error = error
        self.calls = []

    def fetch(self, theme, max_results=12):
        self.calls.append((theme, max_results))
        if self.error is not None:
            raise self.error
        return self.words


class TestWordTables:
    """Test loading and sampling the bundled tables."""

    def test_bundled_categories(self):
        """Three categories with five themes each are bundled."""
        tables = load_word_tables()

        assert set(tables.categories) == {"nature", "pop", "general"}
        for category in tables.categories.values():
            assert len(category.themes) == 5

    def test_forest_words(self):
        """Theme word lists are loaded verbatim."""
        forest = load_word_tables().category("nature").theme("Forest")
        assert forest.words[:3] == ["TREE", "LEAF", "BARK"]
        assert len(forest.words) == 12

    def test_find_theme_across_categories(self):
        """Themes can be found by name, case-insensitively."""
        tables = load_word_tables()
        assert tables.find_theme("tv shows").name == "TV Shows"
        assert tables.find_theme("Nonexistent") is None

    def test_unknown_category(self):
        """Unknown categories raise KeyError."""
        with pytest.raises(KeyError):
            load_word_tables().category("sports")

    def test_custom_table_file(self, tmp_path):
        """A custom YAML table can replace the bundled one."""
        path = tmp_path / "tables.yaml"
        path.write_text(
            "animals:\n"
            "  name: Animals\n"
            "  themes:\n"
            "    - name: Farm\n"
            "      words: [HORSE, SHEEP, GOAT, CHICKEN, DONKEY]\n"
        )
        tables = load_word_tables(path)

        assert list(tables.categories) == ["animals"]
        assert tables.category("animals").theme("farm").words[0] == "HORSE"

    def test_missing_table_file(self, tmp_path):
        """A missing table file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_word_tables(tmp_path / "missing.yaml")

    def test_pick_theme(self):
        """Theme picks come from the category and are reproducible."""
        tables = load_word_tables()
        names = {t.name for t in tables.category("pop").themes}

        first = pick_theme(tables, "pop", random.Random(3))
        second = pick_theme(tables, "pop", random.Random(3))

        assert first.name in names
        assert first == second


class TestDatamuseLexicon:
    """Test the Datamuse client with httpx mocked."""

    @patch('httpx.get')
    def test_fetch_words(self, mock_get):
        """Words are extracted from the JSON list."""
        mock_get.return_value = create_mock_response([
            {"word": "woodland", "score": 100},
            {"word": "trees", "score": 90},
            {"score": 80},
        ])

        words = DatamuseLexicon().fetch("Forest", 12)

        assert words == ["woodland", "trees"]

    @patch('httpx.get')
    def test_request_parameters(self, mock_get):
        """The request uses the 'means like' query with a timeout."""
        mock_get.return_value = create_mock_response([])

        DatamuseLexicon(timeout=1.5).fetch("Ocean", 20)

        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        assert args[0] == DATAMUSE_API_URL
        assert kwargs["params"] == {"ml": "Ocean", "max": 20}
        assert kwargs["timeout"] == 1.5

    @patch('httpx.get')
    def test_timeout(self, mock_get):
        """A timeout is reported as LexiconUnavailable."""
        mock_get.side_effect = httpx.TimeoutException("timed out")

        with pytest.raises(LexiconUnavailable):
            DatamuseLexicon().fetch("Forest")

    @patch('httpx.get')
    def test_http_error(self, mock_get):
        """An error status is reported as LexiconUnavailable."""
        error = httpx.HTTPStatusError("500 Server Error", request=Mock(), response=Mock())
        mock_get.return_value = create_mock_response(status_error=error)

        with pytest.raises(LexiconUnavailable):
            DatamuseLexicon().fetch("Forest")

    @patch('httpx.get')
    def test_invalid_json(self, mock_get):
        """Unparseable bodies are reported as LexiconUnavailable."""
        mock_get.return_value = create_mock_response(json_error=ValueError("bad json"))

        with pytest.raises(LexiconUnavailable):
            DatamuseLexicon().fetch("Forest")

    @patch('httpx.get')
    def test_invalid_url(self, mock_get):
        """A malformed base URL is reported as LexiconUnavailable."""
        mock_get.side_effect = httpx.InvalidURL("Invalid port: ':1'")

        with pytest.raises(LexiconUnavailable):
            DatamuseLexicon(base_url="http://[::1").fetch("Forest")

    @patch('httpx.get')
    def test_unexpected_shape(self, mock_get):
        """A non-list body is reported as LexiconUnavailable."""
        mock_get.return_value = create_mock_response({"error": "nope"})

        with pytest.raises(LexiconUnavailable):
            DatamuseLexicon().fetch("Forest")


class TestLexiconProvider:
    """Test the two-stage lookup with fallback."""

    def test_primary_success(self):
        """Enough usable remote words are normalized and used."""
        primary = FakeLexicon(["woodland", "trees", "timber", "grove", "pine tree", "oak", "forest", "woods"])
        provider = LexiconProvider(primary=primary)

        result = provider.lookup("Forest", 12)

        assert result.source == "fake"
        assert result.error is None
        assert result.words == ["WOODLAND", "TREES", "TIMBER", "GROVE", "FOREST", "WOODS"]
        assert primary.calls == [("Forest", 12)]

    def test_too_few_words_falls_back(self):
        """Fewer than five usable remote words selects the static list."""
        provider = LexiconProvider(primary=FakeLexicon(["woodland", "oak", "pine tree", "grove"]))

        result = provider.lookup("Forest")

        assert result.source == "static"
        assert result.used_fallback is True
        assert "usable words" in result.error
        assert result.words[:3] == ["TREE", "LEAF", "BARK"]

    def test_primary_error_falls_back(self):
        """A failing remote lexicon selects the static list."""
        provider = LexiconProvider(primary=FakeLexicon(error=LexiconUnavailable("Datamuse request failed")))

        result = provider.lookup("Ocean")

        assert result.source == "static"
        assert result.error == "Datamuse request failed"
        assert "WAVE" in result.words

    def test_unexpected_primary_error_falls_back(self):
        """Any exception from the remote lexicon selects the static list."""
        provider = LexiconProvider(primary=FakeLexicon(error=RuntimeError("socket closed")))

        result = provider.lookup("Forest")

        assert result.source == "static"
        assert "socket closed" in result.error
        assert result.words[:3] == ["TREE", "LEAF", "BARK"]

    def test_malformed_primary_words_fall_back(self):
        """Non-string entries from the remote lexicon select the static list."""
        provider = LexiconProvider(primary=FakeLexicon([None, 42, "woodland"]))

        result = provider.lookup("Forest")

        assert result.source == "static"
        assert result.error is not None

    @patch('httpx.get')
    def test_invalid_datamuse_url_falls_back(self, mock_get):
        """A misconfigured Datamuse URL never prevents a lookup."""
        mock_get.side_effect = httpx.InvalidURL("Invalid port: ':1'")
        provider = LexiconProvider(primary=DatamuseLexicon(base_url="http://[::1"))

        result = provider.lookup("Ocean")

        assert result.source == "static"
        assert "Invalid port" in result.error
        assert "WAVE" in result.words

    def test_offline(self):
        """Without a primary the static list is used and no error is recorded."""
        result = LexiconProvider().lookup("Desert")

        assert result.source == "static"
        assert result.error is None
        # 3-letter DRY is filtered out
        assert "DRY" not in result.words
        assert "SCORPION" in result.words

    def test_static_words_override(self):
        """Explicit fallback words take precedence over a table lookup."""
        result = LexiconProvider().lookup("Anything", static_words=["horse", "sheep", "goat"])
        assert result.words == ["HORSE", "SHEEP", "GOAT"]

    def test_unknown_theme_without_fallback(self):
        """An unknown theme with no remote words yields an empty list."""
        assert LexiconProvider().get_candidate_words("Nonexistent") == []

    @patch('httpx.get')
    def test_datamuse_failure_never_raises(self, mock_get):
        """The provider swallows Datamuse failures."""
        mock_get.side_effect = httpx.ConnectError("no route")
        provider = LexiconProvider(primary=DatamuseLexicon())

        words = provider.get_candidate_words("Music")

        assert "SONG" in words
        assert all(4 <= len(w) <= 8 for w in words)

    def test_static_lexicon_custom_tables(self, tmp_path):
        """A static lexicon can be built from custom tables."""
        path = tmp_path / "tables.yaml"
        path.write_text(
            "animals:\n"
            "  name: Animals\n"
            "  themes:\n"
            "    - name: Farm\n"
            "      words: [HORSE, SHEEP]\n"
        )
        static = StaticLexicon(tables=load_word_tables(path))

        assert static.words_for("Farm") == ["HORSE", "SHEEP"]
        assert static.words_for("Forest") == []
