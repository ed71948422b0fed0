"""記事ストア（読み込み + フロントマター書き戻し）.

記事ファイルは先頭に `---` で囲まれたYAMLフロントマターを持ち、その後ろに本文が続く形式:

    ---
    title: 开源工具指南
    tags: [Git, GitHub]
    date: 2024-01-01
    ---
    本文...

読み込みは副作用なし。書き戻しは `tags` だけを差し替え、他のフィールドと本文はそのまま残す。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from content_tag_sync.adapters.fileio import atomic_write_text
from content_tag_sync.core.exceptions import DocumentParseError
from content_tag_sync.core.models import Document

_FRONT_MATTER = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<meta>.*?)\r?\n)??---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


@dataclass
class ScanResult:
    """コーパス走査結果（読めた記事と読めなかった記事）."""

    documents: list[Document] = field(default_factory=list)
    failures: list[DocumentParseError] = field(default_factory=list)


def parse_document(path: Path | str, text: str) -> Document:
    """記事テキストをフロントマターと本文に分解する.

    Args:
        path: 記事ファイルのパス（エラー表示用）
        text: 記事全体のテキスト

    Returns:
        Document

    Raises:
        DocumentParseError: 区切りが無い、YAMLが不正、マッピングでない場合
    """
    path = Path(path)
    if text.startswith("\ufeff"):
        text = text[1:]

    match = _FRONT_MATTER.match(text)
    if match is None:
        if text.startswith("---"):
            raise DocumentParseError(path, "missing closing '---' delimiter")
        raise DocumentParseError(path, "missing front matter delimiter")

    try:
        metadata = yaml.safe_load(match.group("meta") or "")
    except yaml.YAMLError as e:
        raise DocumentParseError(path, f"invalid YAML: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise DocumentParseError(path, f"front matter must be a mapping, got {type(metadata).__name__}")

    opening = text[: text.index("\n") + 1]
    newline = "\r\n" if opening.endswith("\r\n") else "\n"
    return Document(path=path, metadata=metadata, body=text[match.end() :], newline=newline)


def read_document(path: Path | str) -> Document:
    """記事ファイルを読み込む（読めない場合も DocumentParseError にまとめる）."""
    path = Path(path)
    try:
        # 改行コードは変換しない
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentParseError(path, f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise DocumentParseError(path, f"unreadable: {e}") from e
    return parse_document(path, text)


def render_document(document: Document, tags: list[object]) -> str:
    """`tags` だけを差し替えた記事テキストを作る.

    - `tags` のキー位置は維持（無ければ末尾に追加）
    - 他のフィールドは同じデータとして再シリアライズ
    - フロントマターの改行コードは元の記事に合わせる
    - 本文はバイト単位でそのまま
    """
    metadata: dict[str, Any] = dict(document.metadata)
    metadata["tags"] = list(tags)
    dumped = yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=None,
        width=4096,
    )
    nl = document.newline
    if nl != "\n":
        dumped = dumped.replace("\n", nl)
    return f"---{nl}{dumped}---{nl}{document.body}"


def write_tags(document: Document, tags: list[object]) -> Path:
    """記事のフロントマターの `tags` を書き換える.

    一時ファイルに書いてから置き換えるので、失敗しても元の記事は残る。

    Raises:
        WriteError: 書き込みに失敗した場合
    """
    atomic_write_text(document.path, render_document(document, tags))
    logger.debug(f"Rewrote front matter: {document.path}")
    return document.path


class DocumentStore:
    """記事ディレクトリ.

    Args:
        content_dir: 記事ディレクトリ
        extension: 対象とする拡張子
    """

    def __init__(self, content_dir: Path | str, extension: str = ".mdx") -> None:
        """ストア初期化.

        Raises:
            FileNotFoundError: ディレクトリが存在しない場合
        """
        self.content_dir = Path(content_dir)
        if not self.content_dir.is_dir():
            raise FileNotFoundError(f"Content directory not found: {self.content_dir}")
        self.extension = extension

    def list_paths(self) -> list[Path]:
        """対象記事のパス（ファイル名の辞書順、再現性のため固定）."""
        return sorted(
            (p for p in self.content_dir.iterdir() if p.is_file() and p.name.endswith(self.extension)),
            key=lambda p: p.name,
        )

    def scan(self, paths: list[Path] | None = None) -> ScanResult:
        """記事をまとめて読み込む.

        読めない記事は failures に入れて走査を継続する（全体は止めない）。
        """
        result = ScanResult()
        for path in self.list_paths() if paths is None else paths:
            try:
                result.documents.append(read_document(path))
            except DocumentParseError as e:
                logger.warning(f"Skipped document: {e}")
                result.failures.append(e)

        logger.info(
            f"Scanned {len(result.documents) + len(result.failures)} documents in {self.content_dir} "
            f"({len(result.failures)} skipped)"
        )
        return result
