"""content_tag_sync: 記事タグとロケール辞書の同期ツール.

記事（MDX等）のフロントマターからタグを集め、各ロケールの翻訳辞書に不足分を補完する。
既存の翻訳（手動編集）は上書きしない。
"""

__version__ = "0.1.0"
