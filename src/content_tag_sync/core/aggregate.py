"""コーパス全体のタグ集合の構築.

記事ごとのタグ列を、初出順（記事の走査順 → 記事内の順）で1本の重複なしリストに畳み込む。
"""

from __future__ import annotations

from collections.abc import Iterable

from content_tag_sync.core.extract import explicit_tags
from content_tag_sync.core.models import Document


def aggregate_tags(tag_sequences: Iterable[Iterable[object]]) -> list[str]:
    """タグ列の和集合を初出順で返す.

    Args:
        tag_sequences: 記事ごとのタグ列（走査順）

    Returns:
        重複除去済みのタグ列。空文字・非文字列はエラーにせず捨てる。
    """
    seen: set[str] = set()
    out: list[str] = []
    for tags in tag_sequences:
        for tag in tags:
            if not isinstance(tag, str):
                continue
            key = tag.strip()
            if not key or key in seen:
                continue
            seen.add(key)
            out.append(key)
    return out


def collect_corpus_tags(documents: Iterable[Document]) -> list[str]:
    """記事群の明示タグからコーパスタグ集合を作る（記事は渡された順に走査）."""
    return aggregate_tags(explicit_tags(doc) for doc in documents)
