"""パイプラインで扱うデータ型.

- Document: 記事1件（フロントマター + 本文）
- LocaleDictionary: ロケール1つ分の辞書（`tags` + それ以外のキー）
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Document:
    """記事ドキュメント.

    metadata はフロントマターの内容をキー順そのままで保持する。
    title/tags 以外のフィールドは意味を解釈せず、書き戻し時にそのまま通す。
    newline はフロントマター部分の改行コード（書き戻し時に合わせる）。
    """

    path: Path
    metadata: dict[str, Any]
    body: str
    newline: str = "\n"

    @property
    def title(self) -> str:
        value = self.metadata.get("title")
        return str(value) if value else ""

    @property
    def raw_tags(self) -> Any:
        """フロントマターの `tags` の値（未検証のまま）."""
        return self.metadata.get("tags")


@dataclass
class LocaleDictionary:
    """ロケール辞書.

    Attributes:
        locale: ロケール名（例: "zh", "en"）
        tags: タグ → 表示ラベル
        extra: `tags` 以外のトップレベルキー（UI文言など）。中身は解釈せずそのまま保持する
        key_order: 読み込み時のトップレベルキー順（`tags` の位置を保つため）
        source_path: 辞書ファイルのパス
        recovered_from: 既存ファイルが読めず空辞書で置き換えた場合、その理由
    """

    locale: str
    tags: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: tuple[str, ...] = ("tags",)
    source_path: Path | None = None
    recovered_from: str | None = None

    def to_json_object(self) -> dict[str, Any]:
        """シリアライズ用の辞書（読み込み時のキー順を維持、`tags` が無ければ末尾に追加）."""
        out: dict[str, Any] = {}
        for key in self.key_order:
            if key == "tags":
                out["tags"] = self.tags
            elif key in self.extra:
                out[key] = self.extra[key]
        for key, value in self.extra.items():
            if key not in out:
                out[key] = value
        if "tags" not in out:
            out["tags"] = self.tags
        return out
