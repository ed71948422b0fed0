"""実行サマリーとレポート出力.

1回の実行で何が追加され、何がスキップ/失敗したかを集約し、
コンソール表示用の行とCSVレポート（--report-dir 指定時）を作ります。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import polars as pl

from content_tag_sync.core.sync import LocalePlan

# 終了コードに影響する失敗種別（辞書の読み込み失敗は空辞書で継続するので含めない）
FATAL_FAILURE_KINDS = frozenset({"parse", "write"})


@dataclass(frozen=True)
class RunFailure:
    """スキップ/失敗した1件.

    kind: "parse"（記事が読めない）/ "write"（書き込み失敗）/ "dictionary"（辞書が読めない）
    """

    kind: str
    target: str
    reason: str


@dataclass
class LocaleOutcome:
    locale: str
    path: Path
    plan: LocalePlan
    written: bool = False


@dataclass
class DocumentOutcome:
    path: Path
    added: list[str]
    tags: list[object]
    written: bool = False


@dataclass
class RunSummary:
    """1回の実行結果."""

    command: str
    dry_run: bool = False
    documents_scanned: int = 0
    corpus_tags: list[str] = field(default_factory=list)
    locales: list[LocaleOutcome] = field(default_factory=list)
    documents: list[DocumentOutcome] = field(default_factory=list)
    failures: list[RunFailure] = field(default_factory=list)

    @property
    def has_fatal_failures(self) -> bool:
        return any(f.kind in FATAL_FAILURE_KINDS for f in self.failures)

    @property
    def pending_locales(self) -> list[LocaleOutcome]:
        """追加が必要だが書き込まれていないロケール."""
        return [o for o in self.locales if o.plan.has_changes and not o.written]


def format_summary(summary: RunSummary) -> list[str]:
    """コンソール表示用のサマリー行."""
    lines: list[str] = []
    prefix = "[dry-run] " if summary.dry_run else ""

    if summary.command in {"sync", "report"}:
        lines.append(f"Found {len(summary.corpus_tags)} unique tags in {summary.documents_scanned} documents")
        for outcome in summary.locales:
            if not outcome.plan.has_changes:
                lines.append(f"  [{outcome.locale}] no changes ({outcome.path})")
                continue
            state = "updated" if outcome.written else "pending"
            lines.append(
                f"  {prefix}[{outcome.locale}] {len(outcome.plan.additions)} tags {state} ({outcome.path})"
            )
            for a in outcome.plan.additions:
                suffix = "" if a.from_table else " (no translation found)"
                lines.append(f'    + "{a.tag}" -> "{a.label}"{suffix}')
            for tag, current, expected in outcome.plan.divergent:
                lines.append(f'    ! "{tag}" kept "{current}" (translation table: "{expected}")')

    changed = [d for d in summary.documents if d.added]
    for doc in changed:
        lines.append(f"  {prefix}{doc.path.name} -> add: {', '.join(doc.added)}")
        if doc.written:
            lines.append(f"    updated tags: [{', '.join(map(str, doc.tags))}]")
    if summary.command == "generate":
        written = sum(1 for d in summary.documents if d.written)
        if written:
            lines.append(f"Done. {written} file(s) updated.")
        elif changed:
            lines.append(f"{len(changed)} file(s) would be updated.")
        else:
            lines.append("No files updated.")

    for failure in summary.failures:
        lines.append(f"  ! {failure.kind}: {failure.target} ({failure.reason})")

    return lines


def export_run_report(summary: RunSummary, output_dir: Path | str) -> dict[str, Path | None]:
    """実行結果をCSVファイルとして出力する.

    Args:
        summary: 実行結果
        output_dir: 出力ディレクトリ

    Returns:
        出力したCSVのパス（該当行が無ければ None）
        - "locale_additions": locale_additions.csv
        - "document_tag_additions": document_tag_additions.csv
        - "failures": failures.csv
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    result_paths: dict[str, Path | None] = {}

    additions = [
        {
            "locale": o.locale,
            "tag": a.tag,
            "label": a.label,
            "from_table": a.from_table,
            "written": o.written,
        }
        for o in summary.locales
        for a in o.plan.additions
    ]
    result_paths["locale_additions"] = _write_rows(output_dir / "locale_additions.csv", additions)

    doc_rows = [
        {
            "path": str(d.path),
            "added": ", ".join(d.added),
            "tags": ", ".join(map(str, d.tags)),
            "written": d.written,
        }
        for d in summary.documents
        if d.added
    ]
    result_paths["document_tag_additions"] = _write_rows(output_dir / "document_tag_additions.csv", doc_rows)

    failure_rows = [{"kind": f.kind, "target": f.target, "reason": f.reason} for f in summary.failures]
    result_paths["failures"] = _write_rows(output_dir / "failures.csv", failure_rows)

    return result_paths


def _write_rows(path: Path, rows: list[dict[str, object]]) -> Path | None:
    # 前回実行分が残ると紛らわしいので、0件なら消しておく
    if not rows:
        path.unlink(missing_ok=True)
        return None
    pl.DataFrame(rows).write_csv(path)
    return path
