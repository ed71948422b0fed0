"""ファイル書き込みの共通処理."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from content_tag_sync.core.exceptions import WriteError


def atomic_write_text(path: Path, text: str) -> None:
    """同じディレクトリの一時ファイルに書いてから置き換える.

    途中で失敗しても元のファイルはそのまま残る（切り詰められない）。
    改行はそのまま書く（変換しない）。

    Raises:
        WriteError: 書き込み/置き換えに失敗した場合
    """
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(text)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteError(path, str(e)) from e
