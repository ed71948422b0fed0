"""CLI エントリポイント.

使用例:
    content-tag-sync sync                 # ロケール辞書を補完して保存
    content-tag-sync sync --dry-run       # 差分の表示のみ
    content-tag-sync sync --check         # 不足があれば終了コード1（pre-commit 用）
    content-tag-sync generate --file data/blog/hello.mdx
    content-tag-sync report --report-dir reports/tags

終了コード:
    0: 成功（変更なしを含む）
    1: 記事の読み込み/ファイルの書き込みに失敗した（--best-effort 指定時を除く）、または --check で不足あり
    2: 設定・引数の誤り
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from content_tag_sync.config import load_config
from content_tag_sync.pipeline import generate_document_tags, report_corpus, sync_dictionaries
from content_tag_sync.report import RunSummary, export_run_report, format_summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-tag-sync",
        description="Keep locale tag dictionaries consistent with the tags used in content documents",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config (keyword rules, translation tables, paths). Default: bundled config",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root that relative config paths are resolved against (default: current directory)",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=None,
        help="Optional directory for CSV reports of additions and failures",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show per-tag debug logs")
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Exit 0 even if some documents fail to parse or files fail to write",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_report = sub.add_parser("report", help="Scan and report tags and missing dictionary entries (no writes)")
    p_report.add_argument("--file", type=Path, default=None, help="Only scan this document")

    p_sync = sub.add_parser("sync", help="Add missing tags to every locale dictionary")
    p_sync.add_argument("--dry-run", action="store_true", help="Compute and print the diff without writing")
    p_sync.add_argument(
        "--check",
        action="store_true",
        help="Do not write; exit 1 if any locale dictionary is missing tags",
    )

    p_generate = sub.add_parser("generate", help="Append inferred tags to document front matter")
    p_generate.add_argument("--file", type=Path, default=None, help="Only process this document")
    p_generate.add_argument("--dry-run", action="store_true", help="Print the tags that would be added")

    return parser


def _exit_code(summary: RunSummary, best_effort: bool, check: bool = False) -> int:
    if check and summary.pending_locales:
        return 1
    if summary.has_fatal_failures and not best_effort:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI エントリポイント."""
    args = _build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    try:
        config = load_config(args.config, root=args.root)
        if args.command == "sync":
            summary = sync_dictionaries(config, dry_run=args.dry_run or args.check)
        elif args.command == "generate":
            summary = generate_document_tags(config, file=args.file, dry_run=args.dry_run, base_dir=args.root)
        else:
            summary = report_corpus(config, file=args.file, base_dir=args.root)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 2

    for line in format_summary(summary):
        print(line)

    if args.report_dir is not None:
        paths = export_run_report(summary, args.report_dir)
        written = [str(p) for p in paths.values() if p is not None]
        logger.info(f"Reports: {', '.join(written) if written else 'nothing to report'}")

    if any(o.written for o in summary.locales):
        print("Tip: You may want to review and improve the auto-generated translations.")

    return _exit_code(summary, args.best_effort, check=getattr(args, "check", False))


if __name__ == "__main__":
    sys.exit(main())
