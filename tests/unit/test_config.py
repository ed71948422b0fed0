"""Unit tests for config loading."""

from pathlib import Path

import pytest

from content_tag_sync.config import DEFAULT_CONFIG_PATH, load_config, parse_config


class TestLoadConfig:
    def test_default_config(self, tmp_path: Path) -> None:
        """同梱のデフォルト設定が読み込めること."""
        config = load_config(root=tmp_path)

        assert DEFAULT_CONFIG_PATH.exists()
        assert config.content_dir == tmp_path / "data" / "blog"
        assert config.extension == ".mdx"
        assert [loc.locale for loc in config.locales] == ["zh", "en"]
        assert config.dictionary_paths["zh"] == tmp_path / "messages" / "zh.json"
        assert config.translation_tables["zh"]["Development Habits"] == "开发习惯"
        assert config.translation_tables["en"]["开发习惯"] == "Development Habits"
        assert [r.tag for r in config.keyword_rules][:4] == ["Open Source", "GitHub", "Tools", "Guide"]

    def test_translation_tables_read_only(self, tmp_path: Path) -> None:
        config = load_config(root=tmp_path)
        with pytest.raises(TypeError):
            config.translation_tables["zh"]["Git"] = "changed"  # type: ignore[index]

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("locales: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)

    def test_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text(
            """
content:
  dir: posts
  extension: .md
locales:
  ja:
    translations:
      Guide: ガイド
keyword_rules:
  - tag: Guide
    matchers:
      - {literal: Guide}
""",
            encoding="utf-8",
        )

        config = load_config(path, root=tmp_path)

        assert config.content_dir == tmp_path / "posts"
        assert config.extension == ".md"
        assert config.dictionary_paths == {"ja": tmp_path / "messages" / "ja.json"}
        assert config.keyword_rules[0].matches("A Guide") is True
        assert config.keyword_rules[0].matches("a guide") is False


class TestParseConfig:
    def test_locales_required(self) -> None:
        with pytest.raises(ValueError, match="'locales' must be a non-empty mapping"):
            parse_config({"content": {"dir": "posts"}})

    def test_rule_without_matchers(self) -> None:
        with pytest.raises(ValueError, match=r"keyword_rules\[0\]\.matchers"):
            parse_config({"locales": {"en": {}}, "keyword_rules": [{"tag": "Git", "matchers": []}]})

    def test_bad_matcher_names_rule(self) -> None:
        with pytest.raises(ValueError, match=r"keyword_rules\[0\]' \(Git\)"):
            parse_config({"locales": {"en": {}}, "keyword_rules": [{"tag": "Git", "matchers": ["(unclosed"]}]})

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        dictionary = tmp_path / "i18n" / "en.json"
        config = parse_config({"locales": {"en": {"dictionary": str(dictionary)}}}, root="/elsewhere")
        assert config.dictionary_paths["en"] == dictionary
