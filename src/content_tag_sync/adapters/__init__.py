"""ファイルシステム側の入出力（記事ストア / ロケール辞書ストア）."""

from .document_store import DocumentStore, ScanResult, parse_document, read_document, render_document, write_tags
from .locale_store import LocaleDictionaryStore, serialize

__all__ = [
    "DocumentStore",
    "ScanResult",
    "parse_document",
    "read_document",
    "render_document",
    "write_tags",
    "LocaleDictionaryStore",
    "serialize",
]
