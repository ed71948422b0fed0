"""設定（キーワードルール・翻訳テーブル・パス）の読み込み.

設定はYAMLで記述し、読み込み後は変更不可のdataclassとして抽出器/同期処理へ明示的に渡す
（モジュールレベルの可変状態は持たない）。

YAML形式:
    content:
      dir: data/blog
      extension: .mdx
    locales:
      zh:
        dictionary: messages/zh.json
        translations:
          Guide: 指南
    keyword_rules:
      - tag: Guide
        matchers: ['指南', 'guide']

使用例:
    >>> config = load_config(root=Path("."))
    >>> [loc.locale for loc in config.locales]
    ['zh', 'en']
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from loguru import logger

from content_tag_sync.core.extract import KeywordRule
from content_tag_sync.core.matchers import build_matcher

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yml"


@dataclass(frozen=True)
class LocaleConfig:
    """ロケール1つ分の設定."""

    locale: str
    dictionary_path: Path
    translations: Mapping[str, str]


@dataclass(frozen=True)
class SyncConfig:
    """パイプライン全体の設定."""

    content_dir: Path
    extension: str
    locales: tuple[LocaleConfig, ...]
    keyword_rules: tuple[KeywordRule, ...]

    @property
    def dictionary_paths(self) -> dict[str, Path]:
        return {loc.locale: loc.dictionary_path for loc in self.locales}

    @property
    def translation_tables(self) -> dict[str, Mapping[str, str]]:
        return {loc.locale: loc.translations for loc in self.locales}


def _resolve(root: Path, value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value:
        raise ValueError(f"Config '{key}' must be a non-empty path string")
    p = Path(value)
    return p if p.is_absolute() else root / p


def _parse_translations(locale: str, value: Any) -> Mapping[str, str]:
    if value is None:
        return MappingProxyType({})
    if not isinstance(value, dict):
        raise ValueError(f"Config 'locales.{locale}.translations' must be a mapping, got {type(value).__name__}")
    table: dict[str, str] = {}
    for tag, label in value.items():
        if label is None:
            continue
        table[str(tag)] = str(label)
    return MappingProxyType(table)


def _parse_rules(value: Any) -> tuple[KeywordRule, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f"Config 'keyword_rules' must be a list, got {type(value).__name__}")

    rules: list[KeywordRule] = []
    for i, item in enumerate(value):
        if not isinstance(item, dict) or not item.get("tag"):
            raise ValueError(f"Config 'keyword_rules[{i}]' must be a mapping with a 'tag'")
        matchers = item.get("matchers")
        if not isinstance(matchers, list) or not matchers:
            raise ValueError(f"Config 'keyword_rules[{i}].matchers' must be a non-empty list")
        try:
            built = tuple(build_matcher(m) for m in matchers)
        except ValueError as e:
            raise ValueError(f"Config 'keyword_rules[{i}]' ({item['tag']}): {e}") from e
        rules.append(KeywordRule(tag=str(item["tag"]), matchers=built))
    return tuple(rules)


def parse_config(data: Mapping[str, Any], root: Path | str = ".") -> SyncConfig:
    """設定辞書を SyncConfig に変換する.

    Args:
        data: YAMLを読み込んだ辞書
        root: 相対パスの基準ディレクトリ

    Raises:
        ValueError: 設定が不正な場合
    """
    root = Path(root)

    content = data.get("content") or {}
    if not isinstance(content, dict):
        raise ValueError("Config 'content' must be a mapping")
    content_dir = _resolve(root, content.get("dir", "data/blog"), "content.dir")
    extension = str(content.get("extension", ".mdx"))

    locales_data = data.get("locales")
    if not isinstance(locales_data, dict) or not locales_data:
        raise ValueError("Config 'locales' must be a non-empty mapping")

    locales: list[LocaleConfig] = []
    for locale, spec in locales_data.items():
        locale = str(locale)
        spec = spec or {}
        if not isinstance(spec, dict):
            raise ValueError(f"Config 'locales.{locale}' must be a mapping")
        locales.append(
            LocaleConfig(
                locale=locale,
                dictionary_path=_resolve(
                    root, spec.get("dictionary", f"messages/{locale}.json"), f"locales.{locale}.dictionary"
                ),
                translations=_parse_translations(locale, spec.get("translations")),
            )
        )

    return SyncConfig(
        content_dir=content_dir,
        extension=extension,
        locales=tuple(locales),
        keyword_rules=_parse_rules(data.get("keyword_rules")),
    )


def load_config(config_path: Path | str | None = None, root: Path | str = ".") -> SyncConfig:
    """YAML設定ファイルを読み込む（省略時は同梱のデフォルト設定）.

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: YAML形式が不正、または設定値が不正な場合
    """
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {config_path}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")

    config = parse_config(data, root=root)
    logger.info(
        f"Loaded config from {config_path}: {len(config.locales)} locales, "
        f"{len(config.keyword_rules)} keyword rules"
    )
    return config
