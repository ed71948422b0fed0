"""キーワードルール用のマッチャー.

記事本文からタグを推定する際の「テキストにマッチするか」を判定する部品群です。
実装（リテラル / 大文字小文字無視リテラル / 正規表現）は差し替え可能で、
ルール側は `matches(text) -> bool` だけに依存します。

設定での書き方:
    - "开源|open\\s*source"          → RegexMatcher（大文字小文字無視）
    - {"regex": "...", "ignore_case": false}
    - {"literal": "MooTool"}         → LiteralMatcher（大文字小文字を区別）
    - {"icontains": "github"}        → CaseInsensitiveMatcher
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class Matcher(ABC):
    """テキストマッチャーの基底クラス."""

    @abstractmethod
    def matches(self, text: str) -> bool:
        """text にマッチすれば True."""
        ...


@dataclass(frozen=True)
class LiteralMatcher(Matcher):
    """部分文字列の完全一致（大文字小文字を区別）."""

    needle: str

    def matches(self, text: str) -> bool:
        return self.needle in text


@dataclass(frozen=True)
class CaseInsensitiveMatcher(Matcher):
    """部分文字列一致（大文字小文字を無視）."""

    needle: str

    def matches(self, text: str) -> bool:
        return self.needle.casefold() in text.casefold()


@dataclass(frozen=True)
class RegexMatcher(Matcher):
    r"""正規表現マッチャー.

    `\b` はASCII基準で評価する（re.ASCII）。CJK文字をword文字として扱うと
    `学习java编程` の `java` が単語境界で拾えなくなるため。
    """

    pattern: str
    ignore_case: bool = True
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        flags = re.ASCII
        if self.ignore_case:
            flags |= re.IGNORECASE
        try:
            compiled = re.compile(self.pattern, flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {self.pattern!r} ({e})") from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, text: str) -> bool:
        return self._compiled.search(text) is not None


def build_matcher(spec: Any) -> Matcher:
    """設定値（文字列 or 辞書）からマッチャーを生成する.

    Args:
        spec: マッチャー定義

    Returns:
        生成されたマッチャー

    Raises:
        ValueError: 定義が不正な場合
    """
    if isinstance(spec, str):
        return RegexMatcher(spec)

    if not isinstance(spec, dict):
        raise ValueError(f"Invalid matcher spec: expected str or mapping, got {type(spec).__name__}")

    if "regex" in spec:
        return RegexMatcher(str(spec["regex"]), ignore_case=bool(spec.get("ignore_case", True)))
    if "literal" in spec:
        return LiteralMatcher(str(spec["literal"]))
    if "icontains" in spec:
        return CaseInsensitiveMatcher(str(spec["icontains"]))

    raise ValueError(f"Unknown matcher spec keys: {sorted(spec)} (expected regex/literal/icontains)")
