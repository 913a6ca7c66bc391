"""Tests for promptgen.config module."""

import pytest

from promptgen.config import (
    DEFAULT_CONFIG,
    ConfigError,
    GenerationConfig,
    clear_cache,
    load_config,
)
from promptgen.selection import SelectionMode


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def write_yaml(tmp_path):
    def _write(text: str, name: str = "promptgen.yml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestGenerationConfig:
    """Tests for GenerationConfig."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.selection_mode is SelectionMode.RANDOM
        assert DEFAULT_CONFIG.tolerate_malformed_weights is False
        assert not DEFAULT_CONFIG.deterministic

    def test_deterministic(self):
        assert GenerationConfig(SelectionMode.SHORTEST).deterministic

    def test_from_mapping(self):
        cfg = GenerationConfig.from_mapping({"mode": "Least_Likely", "tolerant": True})
        assert cfg == GenerationConfig(SelectionMode.LEAST_LIKELY, True)

    def test_from_empty_mapping(self):
        assert GenerationConfig.from_mapping({}) == DEFAULT_CONFIG

    def test_from_mapping_bad_mode(self):
        with pytest.raises(ConfigError, match="unknown selection mode"):
            GenerationConfig.from_mapping({"mode": "sideways"})

    @pytest.mark.parametrize("value", ["false", "no", 0, 1, None])
    def test_from_mapping_tolerant_must_be_bool(self, value):
        with pytest.raises(ConfigError, match="tolerant"):
            GenerationConfig.from_mapping({"tolerant": value})

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.selection_mode = SelectionMode.LONGEST


class TestLoadConfig:
    """Tests for load_config."""

    def test_load(self, write_yaml):
        path = write_yaml("mode: longest\nnum: 20\ntolerant: true\nout: out.txt\n")
        assert load_config(path) == {
            "mode": "longest",
            "num": 20,
            "tolerant": True,
            "out": "out.txt",
        }

    def test_caching(self, write_yaml):
        path = write_yaml("num: 3\n")
        assert load_config(path) is load_config(str(path))

    def test_clear_cache(self, write_yaml):
        path = write_yaml("num: 3\n")
        first = load_config(path)
        path.write_text("num: 4\n", encoding="utf-8")
        assert load_config(path) is first
        clear_cache()
        assert load_config(path) == {"num": 4}

    def test_empty_file(self, write_yaml):
        assert load_config(write_yaml("")) == {}

    def test_unknown_key(self, write_yaml):
        with pytest.raises(ConfigError, match="colour"):
            load_config(write_yaml("colour: blue\n"))

    def test_not_a_mapping(self, write_yaml):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(write_yaml("- a\n- b\n"))

    def test_bad_mode(self, write_yaml):
        with pytest.raises(ConfigError):
            load_config(write_yaml("mode: sideways\n"))

    @pytest.mark.parametrize("text, key", [
        ("dry_run: \"false\"\n", "dry_run"),
        ("tolerant: \"false\"\n", "tolerant"),
        ("verbose: 1\n", "verbose"),
        ("num: 2.9\n", "num"),
        ("num: true\n", "num"),
        ("num: \"3\"\n", "num"),
        ("out: 5\n", "out"),
        ("out: null\n", "out"),
        ("mode: 1\n", "mode"),
        ("seed: 1.5\n", "seed"),
        ("seed: [1]\n", "seed"),
    ])
    def test_wrong_value_type(self, write_yaml, text, key):
        with pytest.raises(ConfigError, match=key):
            load_config(write_yaml(text))

    def test_accepted_value_types(self, write_yaml):
        text = "tolerant: false\nverbose: true\ndry_run: false\nnum: 0\nseed: auto\n"
        assert load_config(write_yaml(text))["seed"] == "auto"
        clear_cache()
        assert load_config(write_yaml("seed: null\n")) == {"seed": None}

    def test_invalid_yaml(self, write_yaml):
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(write_yaml("mode: [longest\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml")
