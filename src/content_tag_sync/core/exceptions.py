"""Tag sync exceptions.

パイプラインが扱うカスタム例外クラスを定義します。
どれも「その1件だけを諦めて次へ進む」ための例外で、実行全体を止める用途には使いません。
"""

from __future__ import annotations

from pathlib import Path


class TagSyncError(Exception):
    """パイプライン例外の基底クラス."""


class DocumentParseError(TagSyncError):
    """記事のフロントマターが読めない場合の例外.

    該当記事は集計から除外され、実行サマリーに列挙されます。

    Attributes:
        path: 記事ファイルのパス
        reason: 失敗理由
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        """例外初期化.

        Args:
            path: 記事ファイルのパス
            reason: 失敗理由
        """
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to parse front matter: {self.path} ({reason})")


class MissingDictionaryError(TagSyncError):
    """ロケール辞書が存在しない、またはJSONとして不正な場合の例外.

    ストア側で空の辞書に置き換えて処理を継続します。

    Attributes:
        locale: ロケール名（例: "zh"）
        path: 辞書ファイルのパス
        reason: 失敗理由
    """

    def __init__(self, locale: str, path: Path | str, reason: str) -> None:
        self.locale = locale
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Locale dictionary unavailable: {locale} -> {self.path} ({reason})")


class WriteError(TagSyncError):
    """ファイル書き込みに失敗した場合の例外.

    そのファイルの更新のみ中止し、残りのファイルは処理を続けます（終了コードは非0）。

    Attributes:
        path: 書き込み先のパス
        reason: 失敗理由
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write: {self.path} ({reason})")
