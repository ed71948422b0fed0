"""Unit tests for locale dictionary synchronization."""

from content_tag_sync.core.models import LocaleDictionary
from content_tag_sync.core.sync import (
    TagAddition,
    apply_plan,
    missing_tags,
    plan_locale,
    synchronize,
)


class TestPlanLocale:
    def test_empty_dictionary(self) -> None:
        """空の辞書にコーパスの全タグが追加されること."""
        dictionary = LocaleDictionary(locale="zh")
        plan = plan_locale(["Git", "GitHub"], dictionary, {"Git": "Git", "GitHub": "GitHub"})

        assert plan.additions == (
            TagAddition(tag="Git", label="Git", from_table=True),
            TagAddition(tag="GitHub", label="GitHub", from_table=True),
        )
        assert apply_plan(dictionary, plan).tags == {"Git": "Git", "GitHub": "GitHub"}

    def test_existing_value_is_sticky(self) -> None:
        """既存の値は翻訳テーブルと異なっても変更されないこと."""
        dictionary = LocaleDictionary(locale="zh", tags={"Git": "自定义标签"})
        plan = plan_locale(["Git"], dictionary, {"Git": "Git"})

        assert plan.has_changes is False
        assert plan.divergent == (("Git", "自定义标签", "Git"),)
        assert apply_plan(dictionary, plan).tags == {"Git": "自定义标签"}

    def test_fallback_to_tag_text(self) -> None:
        plan = plan_locale(["加拿大旅行"], LocaleDictionary(locale="en"), {})
        assert plan.additions == (TagAddition(tag="加拿大旅行", label="加拿大旅行", from_table=False),)

    def test_empty_label_falls_back(self) -> None:
        plan = plan_locale(["Git"], LocaleDictionary(locale="en"), {"Git": ""})
        assert plan.additions[0].label == "Git"
        assert plan.additions[0].from_table is False

    def test_corpus_order(self) -> None:
        dictionary = LocaleDictionary(locale="en", tags={"B": "b"})
        assert missing_tags(["C", "B", "A"], dictionary) == ["C", "A"]

    def test_empty_existing_value_not_overwritten(self) -> None:
        dictionary = LocaleDictionary(locale="en", tags={"Git": ""})
        plan = plan_locale(["Git"], dictionary, {"Git": "Git"})
        assert plan.has_changes is False


class TestApplyPlan:
    def test_does_not_mutate_input(self) -> None:
        dictionary = LocaleDictionary(locale="zh", tags={"Math": "数学"})
        plan = plan_locale(["Math", "Git"], dictionary, {})
        updated = apply_plan(dictionary, plan)

        assert dictionary.tags == {"Math": "数学"}
        assert updated.tags == {"Math": "数学", "Git": "Git"}
        assert list(updated.tags) == ["Math", "Git"]

    def test_keeps_extra_fields(self) -> None:
        dictionary = LocaleDictionary(locale="zh", extra={"common": {"home": "首页"}}, key_order=("common", "tags"))
        updated = apply_plan(dictionary, plan_locale(["Git"], dictionary, {}))
        assert updated.extra == {"common": {"home": "首页"}}
        assert updated.key_order == ("common", "tags")


class TestSynchronize:
    def test_completeness_and_idempotence(self) -> None:
        corpus = ["开发习惯", "Git", "随笔"]
        dictionaries = {
            "zh": LocaleDictionary(locale="zh", tags={"Git": "Git"}),
            "en": LocaleDictionary(locale="en", tags={"随笔": "Essay (edited)"}),
        }
        tables = {"zh": {}, "en": {"开发习惯": "Development Habits", "随笔": "Essay"}}

        first = synchronize(corpus, dictionaries, tables)
        for locale, (_, updated) in first.items():
            assert all(tag in updated.tags for tag in corpus), locale
        assert first["en"][1].tags["随笔"] == "Essay (edited)"
        assert first["en"][1].tags["开发习惯"] == "Development Habits"

        second = synchronize(corpus, {loc: d for loc, (_, d) in first.items()}, tables)
        assert all(not plan.has_changes for plan, _ in second.values())

    def test_locale_without_table(self) -> None:
        result = synchronize(["Git"], {"fr": LocaleDictionary(locale="fr")}, {})
        assert result["fr"][1].tags == {"Git": "Git"}
