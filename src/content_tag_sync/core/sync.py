"""ロケール辞書の同期（差分計算と補完）.

設計方針:
    - 辞書に無いタグだけを追加する（既存の値は手動編集・自動補完を問わず絶対に変更しない）
    - ラベルは翻訳テーブルから引き、無ければタグ文字列そのものを使う
    - 追加はコーパスの順序どおり
    - ファイルI/Oはここでは行わない（保存は LocaleDictionaryStore 側）
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from loguru import logger

from content_tag_sync.core.models import LocaleDictionary


@dataclass(frozen=True)
class TagAddition:
    """辞書に追加する1エントリ."""

    tag: str
    label: str
    from_table: bool  # False ならタグ自身をラベルに使ったフォールバック


@dataclass(frozen=True)
class LocalePlan:
    """ロケール1つ分の同期計画.

    Attributes:
        locale: ロケール名
        additions: 追加するエントリ（コーパス順）
        divergent: 既存値が翻訳テーブルと異なるエントリ (tag, 既存値, テーブル値)。
            報告のみで値は変更しない。
    """

    locale: str
    additions: tuple[TagAddition, ...] = ()
    divergent: tuple[tuple[str, str, str], ...] = ()

    @property
    def has_changes(self) -> bool:
        return len(self.additions) > 0


def missing_tags(corpus_tags: Sequence[str], dictionary: LocaleDictionary) -> list[str]:
    """辞書にエントリが無いタグ（コーパス順）."""
    return [t for t in corpus_tags if t not in dictionary.tags]


def plan_locale(
    corpus_tags: Sequence[str],
    dictionary: LocaleDictionary,
    table: Mapping[str, str],
) -> LocalePlan:
    """ロケール1つ分の追加エントリを計算する.

    Args:
        corpus_tags: コーパスタグ集合（順序付き）
        dictionary: 現在のロケール辞書
        table: そのロケール向けの翻訳テーブル

    Returns:
        同期計画（辞書は変更しない）
    """
    additions: list[TagAddition] = []
    for tag in missing_tags(corpus_tags, dictionary):
        label = table.get(tag)
        if label:
            additions.append(TagAddition(tag=tag, label=label, from_table=True))
        else:
            additions.append(TagAddition(tag=tag, label=tag, from_table=False))

    divergent: list[tuple[str, str, str]] = []
    for tag in corpus_tags:
        if tag not in dictionary.tags:
            continue
        expected = table.get(tag)
        current = dictionary.tags[tag]
        if expected and current != expected:
            divergent.append((tag, current, expected))

    return LocalePlan(locale=dictionary.locale, additions=tuple(additions), divergent=tuple(divergent))


def apply_plan(dictionary: LocaleDictionary, plan: LocalePlan) -> LocaleDictionary:
    """計画を適用した新しい辞書を返す（既存キーは上書きしない）."""
    tags = dict(dictionary.tags)
    for addition in plan.additions:
        if addition.tag in tags:
            # 計画作成後に辞書側が変わっていても既存値を優先する
            continue
        tags[addition.tag] = addition.label
    return replace(dictionary, tags=tags)


def synchronize(
    corpus_tags: Sequence[str],
    dictionaries: Mapping[str, LocaleDictionary],
    tables: Mapping[str, Mapping[str, str]],
) -> dict[str, tuple[LocalePlan, LocaleDictionary]]:
    """全ロケールの同期計画と適用後辞書を計算する.

    Returns:
        locale → (計画, 適用後の辞書)
    """
    results: dict[str, tuple[LocalePlan, LocaleDictionary]] = {}
    for locale, dictionary in dictionaries.items():
        plan = plan_locale(corpus_tags, dictionary, tables.get(locale, {}))
        for addition in plan.additions:
            suffix = "" if addition.from_table else " (no translation found)"
            logger.debug(f"[{locale}] + {addition.tag!r} -> {addition.label!r}{suffix}")
        results[locale] = (plan, apply_plan(dictionary, plan))
    return results
