"""タグ同期のコア処理群.

- 抽出（明示タグ / キーワードルールによる推定タグ）
- 集計（コーパス全体のタグ集合）
- 同期（ロケール辞書の差分計算と補完）

ファイルI/Oは持たない（adapters 側の責務）。
"""

from .aggregate import aggregate_tags, collect_corpus_tags
from .extract import KeywordRule, augment_tags, explicit_tags, infer_candidate_tags, infer_document_tags
from .sync import LocalePlan, TagAddition, plan_locale, synchronize

__all__ = [
    "aggregate_tags",
    "collect_corpus_tags",
    "KeywordRule",
    "augment_tags",
    "explicit_tags",
    "infer_candidate_tags",
    "infer_document_tags",
    "LocalePlan",
    "TagAddition",
    "plan_locale",
    "synchronize",
]
