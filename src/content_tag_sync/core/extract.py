"""記事からのタグ抽出.

2つの抽出方法を提供します（用途に応じて組み合わせる）:
    - 明示タグ: フロントマターの `tags` をそのまま（順序維持）読む
    - 推定タグ: タイトル + 本文をキーワードルールで走査し、候補タグを得る

どの関数も入力を変更しない純粋関数です。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from content_tag_sync.core.matchers import Matcher
from content_tag_sync.core.models import Document


@dataclass(frozen=True)
class KeywordRule:
    """キーワードルール（タグ + マッチャー群）.

    マッチャーはそれぞれ独立に評価され、どれか1つでもマッチすればルールが発火する。
    """

    tag: str
    matchers: tuple[Matcher, ...]

    def matches(self, text: str) -> bool:
        return any(m.matches(text) for m in self.matchers)


def explicit_tags(document: Document) -> list:
    """フロントマターに宣言されたタグを順序どおりに返す.

    `tags` が無い、またはリストでない場合は空リスト（エラーにはしない）。
    要素の型チェックは集計側の責務なので、ここでは中身をそのまま返す。
    """
    value = document.raw_tags
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"{document.path}: 'tags' is not a list ({type(value).__name__}), ignored")
        return []
    return list(value)


def scan_text(document: Document) -> str:
    """推定に使う走査テキスト（タイトル + 本文）."""
    return f"{document.title}\n{document.body}"


def infer_candidate_tags(text: str, rules: Sequence[KeywordRule]) -> list[str]:
    """テキストにマッチしたルールのタグを返す.

    集合としての意味が契約だが、返す順序はルールの宣言順で固定する（再現性のため）。
    """
    if not text:
        return []

    out: list[str] = []
    for rule in rules:
        if rule.tag not in out and rule.matches(text):
            out.append(rule.tag)
    return out


def infer_document_tags(document: Document, rules: Sequence[KeywordRule]) -> list[str]:
    """記事に追加すべき推定タグ（既存の明示タグと重複するものは除外）."""
    existing = {t.strip() for t in explicit_tags(document) if isinstance(t, str)}
    return [t for t in infer_candidate_tags(scan_text(document), rules) if t not in existing]


def augment_tags(existing: Iterable[object], additions: Iterable[object]) -> list[object]:
    """既存タグの後ろに追加タグを並べた新しいタグ列を返す.

    - 既存タグは型・表記・重複を含めてそのまま残す（数値や真偽値も消さない）
    - 追加タグは前後の空白を除き、空文字/非文字列/既存と重複するものは捨てる
    """
    out: list[object] = list(existing)
    seen = {t.strip() for t in out if isinstance(t, str)}
    for tag in additions:
        if not isinstance(tag, str):
            continue
        key = tag.strip()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(key)
    return out
