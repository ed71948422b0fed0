"""タグ同期パイプライン（オーケストレーター）.

記事ストア → タグ抽出 → タグ集合 → ロケール辞書の同期、の流れを1回分まとめて実行する。
記事1件・ロケール1つの失敗はサマリーに記録して処理を続け、途中で全体を止めない。

- sync_dictionaries: コーパスのタグをロケール辞書へ補完する
- generate_document_tags: キーワードルールで推定したタグを記事のフロントマターへ追記する
- report_corpus: 書き込みなしで現状と差分を集計する
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from content_tag_sync.adapters.document_store import DocumentStore, ScanResult, read_document, write_tags
from content_tag_sync.adapters.locale_store import LocaleDictionaryStore
from content_tag_sync.config import SyncConfig
from content_tag_sync.core.aggregate import collect_corpus_tags
from content_tag_sync.core.exceptions import DocumentParseError, WriteError
from content_tag_sync.core.extract import augment_tags, explicit_tags, infer_document_tags
from content_tag_sync.core.models import LocaleDictionary
from content_tag_sync.core.sync import synchronize
from content_tag_sync.report import DocumentOutcome, LocaleOutcome, RunFailure, RunSummary


def scan_corpus(
    config: SyncConfig,
    file: Path | str | None = None,
    base_dir: Path | str | None = None,
) -> ScanResult:
    """記事を読み込む（file 指定時はその1件のみ）.

    Raises:
        FileNotFoundError: 記事ディレクトリ、または指定ファイルが存在しない場合
    """
    if file is None:
        return DocumentStore(config.content_dir, config.extension).scan()

    path = Path(file)
    if not path.is_absolute():
        path = Path(base_dir or Path.cwd()) / path
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    result = ScanResult()
    try:
        result.documents.append(read_document(path))
    except DocumentParseError as e:
        logger.warning(f"Skipped document: {e}")
        result.failures.append(e)
    return result


def _record_parse_failures(summary: RunSummary, scan: ScanResult) -> None:
    summary.documents_scanned = len(scan.documents) + len(scan.failures)
    for e in scan.failures:
        summary.failures.append(RunFailure(kind="parse", target=str(e.path), reason=e.reason))


def _load_dictionaries(store: LocaleDictionaryStore, summary: RunSummary) -> dict[str, LocaleDictionary]:
    dictionaries: dict[str, LocaleDictionary] = {}
    for locale in store.locales:
        dictionary = store.load(locale)
        if dictionary.recovered_from is not None:
            target = f"{locale}:{store.path_for(locale)}"
            summary.failures.append(RunFailure(kind="dictionary", target=target, reason=dictionary.recovered_from))
        dictionaries[locale] = dictionary
    return dictionaries


def _plan_locales(
    config: SyncConfig,
    corpus_tags: list[str],
    summary: RunSummary,
) -> tuple[LocaleDictionaryStore, dict[str, LocaleDictionary]]:
    store = LocaleDictionaryStore(config.dictionary_paths)
    dictionaries = _load_dictionaries(store, summary)
    updated: dict[str, LocaleDictionary] = {}
    for locale, (plan, dictionary) in synchronize(corpus_tags, dictionaries, config.translation_tables).items():
        summary.locales.append(LocaleOutcome(locale=locale, path=store.path_for(locale), plan=plan))
        updated[locale] = dictionary
        if plan.divergent:
            logger.info(f"[{locale}] {len(plan.divergent)} existing labels differ from the translation table (kept)")
    return store, updated


def sync_dictionaries(config: SyncConfig, dry_run: bool = False) -> RunSummary:
    """コーパスで使われている全タグを、全ロケール辞書に補完する.

    既存のエントリは変更しない。追加が無いロケールは書き込まない。

    Args:
        config: 設定
        dry_run: True なら差分の計算と表示のみ

    Returns:
        実行結果
    """
    summary = RunSummary(command="sync", dry_run=dry_run)

    logger.info(f"[scan] Scanning {config.content_dir} for tags")
    scan = scan_corpus(config)
    _record_parse_failures(summary, scan)
    summary.corpus_tags = collect_corpus_tags(scan.documents)
    logger.info(f"[scan] Found {len(summary.corpus_tags)} unique tags")

    store, updated = _plan_locales(config, summary.corpus_tags, summary)

    for outcome in summary.locales:
        if not outcome.plan.has_changes:
            logger.info(f"[sync] [{outcome.locale}] No new tags to add to {outcome.path}")
            continue
        if dry_run:
            logger.info(f"[sync] [{outcome.locale}] {len(outcome.plan.additions)} tags would be added (dry-run)")
            continue
        try:
            outcome.written = store.save(updated[outcome.locale])
        except WriteError as e:
            logger.error(f"[sync] {e}")
            summary.failures.append(RunFailure(kind="write", target=str(e.path), reason=e.reason))
            continue
        logger.info(f"[sync] [{outcome.locale}] Added {len(outcome.plan.additions)} tags to {outcome.path}")

    return summary


def generate_document_tags(
    config: SyncConfig,
    file: Path | str | None = None,
    dry_run: bool = False,
    base_dir: Path | str | None = None,
) -> RunSummary:
    """キーワードルールで推定したタグを、記事のフロントマターに追記する.

    既存タグは先頭に残し、推定タグを後ろに追加する（重複は追加しない）。

    Args:
        config: 設定
        file: 単一ファイルモードの対象（省略時は記事ディレクトリ全体）
        dry_run: True なら書き込まない
        base_dir: file が相対パスの場合の基準ディレクトリ
    """
    summary = RunSummary(command="generate", dry_run=dry_run)

    scan = scan_corpus(config, file=file, base_dir=base_dir)
    _record_parse_failures(summary, scan)

    for doc in scan.documents:
        added = infer_document_tags(doc, config.keyword_rules)
        if not added:
            continue
        if doc.raw_tags is not None and not isinstance(doc.raw_tags, list):
            # リスト以外の tags は上書きしない
            reason = f"'tags' is not a list ({type(doc.raw_tags).__name__}); front matter left unchanged"
            logger.warning(f"[generate] {doc.path}: {reason}")
            summary.failures.append(RunFailure(kind="parse", target=str(doc.path), reason=reason))
            continue
        next_tags = augment_tags(explicit_tags(doc), added)
        outcome = DocumentOutcome(path=doc.path, added=added, tags=next_tags)
        summary.documents.append(outcome)
        logger.info(f"[generate] {doc.path.name} -> add: {', '.join(added)}")

        if dry_run:
            continue
        try:
            write_tags(doc, next_tags)
        except WriteError as e:
            logger.error(f"[generate] {e}")
            summary.failures.append(RunFailure(kind="write", target=str(e.path), reason=e.reason))
            continue
        outcome.written = True

    return summary


def report_corpus(
    config: SyncConfig,
    file: Path | str | None = None,
    base_dir: Path | str | None = None,
) -> RunSummary:
    """書き込みなしで、コーパスのタグ・辞書の不足分・推定タグを集計する."""
    summary = RunSummary(command="report")

    scan = scan_corpus(config, file=file, base_dir=base_dir)
    _record_parse_failures(summary, scan)
    summary.corpus_tags = collect_corpus_tags(scan.documents)
    _plan_locales(config, summary.corpus_tags, summary)

    for doc in scan.documents:
        added = infer_document_tags(doc, config.keyword_rules)
        if added:
            summary.documents.append(
                DocumentOutcome(path=doc.path, added=added, tags=augment_tags(explicit_tags(doc), added))
            )

    return summary
