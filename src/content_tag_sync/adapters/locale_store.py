"""ロケール辞書ストア（messages/<locale>.json の読み書き）.

辞書は `tags`（タグ → 表示ラベル）と、それ以外のUI文言キーを持つJSONオブジェクト:

    {
      "common": {"home": "首页", ...},
      "tags": {"Git": "Git", "开源": "开源"}
    }

- `tags` 以外のキーは解釈せずにそのまま書き戻す
- 出力は indent=2 + 末尾改行、キー順は読み込み時のまま
- 内容が変わらない場合は書き込まない
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Mapping
from pathlib import Path

from loguru import logger

from content_tag_sync.adapters.fileio import atomic_write_text
from content_tag_sync.core.exceptions import MissingDictionaryError, WriteError
from content_tag_sync.core.models import LocaleDictionary


def serialize(dictionary: LocaleDictionary) -> str:
    """辞書をファイル内容の文字列にする."""
    return json.dumps(dictionary.to_json_object(), indent=2, ensure_ascii=False) + "\n"


class LocaleDictionaryStore:
    """ロケール → 辞書ファイルの対応を持つストア.

    Args:
        paths: ロケール名 → 辞書JSONのパス
    """

    def __init__(self, paths: Mapping[str, Path | str]) -> None:
        self.paths = {locale: Path(p) for locale, p in paths.items()}

    @property
    def locales(self) -> list[str]:
        return list(self.paths)

    def path_for(self, locale: str) -> Path:
        if locale not in self.paths:
            raise ValueError(f"Unknown locale: {locale!r} (configured: {self.locales})")
        return self.paths[locale]

    def read(self, locale: str) -> LocaleDictionary:
        """辞書を読み込む.

        Returns:
            LocaleDictionary（`tags` キーが無い場合は空の `tags` を補う）

        Raises:
            MissingDictionaryError: ファイルが無い、JSONが不正、構造が不正な場合
        """
        path = self.path_for(locale)
        if not path.exists():
            raise MissingDictionaryError(locale, path, "file not found")

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MissingDictionaryError(locale, path, f"invalid JSON: {e}") from e
        except OSError as e:
            raise MissingDictionaryError(locale, path, f"unreadable: {e}") from e

        if not isinstance(data, dict):
            raise MissingDictionaryError(locale, path, f"expected a JSON object, got {type(data).__name__}")

        tags = data.get("tags", {})
        if not isinstance(tags, dict):
            raise MissingDictionaryError(locale, path, f"'tags' must be an object, got {type(tags).__name__}")

        extra = {k: v for k, v in data.items() if k != "tags"}
        return LocaleDictionary(
            locale=locale,
            tags=dict(tags),
            extra=extra,
            key_order=tuple(data.keys()),
            source_path=path,
        )

    def load(self, locale: str) -> LocaleDictionary:
        """辞書を読み込む（読めない場合は空の辞書で継続する）.

        戻り値の `recovered_from` に理由が入っていれば、呼び出し側で異常として報告する。
        """
        try:
            return self.read(locale)
        except MissingDictionaryError as e:
            logger.warning(f"{e}; starting from an empty dictionary")
            return LocaleDictionary(locale=locale, source_path=e.path, recovered_from=e.reason)

    def save(self, dictionary: LocaleDictionary) -> bool:
        """辞書を保存する（内容が同じなら書き込まない）.

        読めなかった既存ファイルを置き換える場合は、先に `<name>.bak` へ退避する。

        Returns:
            実際に書き込んだ場合 True

        Raises:
            WriteError: 書き込みに失敗した場合
        """
        path = self.path_for(dictionary.locale)
        text = serialize(dictionary)

        if path.exists():
            try:
                if path.read_text(encoding="utf-8") == text:
                    logger.debug(f"[{dictionary.locale}] {path} unchanged, skip write")
                    return False
            except (OSError, UnicodeDecodeError):
                pass  # 読めないファイルは置き換え対象

            if dictionary.recovered_from is not None:
                backup = path.with_name(path.name + ".bak")
                try:
                    shutil.copyfile(path, backup)
                except OSError as e:
                    raise WriteError(backup, f"failed to back up unreadable dictionary: {e}") from e
                logger.warning(f"[{dictionary.locale}] Backed up unreadable dictionary to {backup}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(path, str(e)) from e
        atomic_write_text(path, text)
        logger.info(f"[{dictionary.locale}] Wrote {path}")
        return True

