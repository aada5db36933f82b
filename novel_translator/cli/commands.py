"""CLI command implementations.

Contains all cmd_* functions for CLI subcommands.
"""

import asyncio
import logging
import signal
import sys
from argparse import Namespace
from pathlib import Path

from novel_translator.errors import NovelTranslatorError
from novel_translator.formatting import apply_formatting_pipeline, chunk_text
from novel_translator.models import Progress, TranslationResult
from novel_translator.orchestrator import CancelToken, run_translation
from novel_translator.storage.preview import render_header

logger = logging.getLogger(__name__)


def _read_input(path: str) -> str:
    """Read text from a file path, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"📄 Written to: {output}", file=sys.stderr)
    else:
        print(text)


def _print_progress(progress: Progress) -> None:
    print(
        f"   ⏳ {progress.current}/{progress.total} ({progress.percent}%)",
        file=sys.stderr,
    )


async def _translate_with_signals(text: str, translate) -> TranslationResult:
    """Run a translation that Ctrl-C cancels cleanly."""
    token = CancelToken()
    loop = asyncio.get_running_loop()
    installed = True
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel)
    except NotImplementedError:
        installed = False
        logger.debug("Signal handlers unavailable; Ctrl-C will not cancel cleanly")

    try:
        return await run_translation(
            text, translate, cancel_token=token, on_progress=_print_progress
        )
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


def cmd_translate(args: Namespace) -> None:
    """Translate a file (or a fetched URL) and print the formatted result."""
    from novel_translator.sources import fetch_article
    from novel_translator.storage import HistoryDB
    from novel_translator.translator import ChunkTranslator

    if args.url:
        try:
            article = fetch_article(args.url, cookie=args.cookie)
        except NovelTranslatorError as e:
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)
        text = article.text
        print(f"🌐 Fetched: {article.title or args.url}", file=sys.stderr)
    elif args.file:
        text = _read_input(args.file)
    else:
        print("❌ Provide a FILE or --url", file=sys.stderr)
        sys.exit(1)

    print("\n🚀 Translating", file=sys.stderr)
    try:
        translator = ChunkTranslator(provider=args.provider, model=args.model)
        result = asyncio.run(_translate_with_signals(text, translator))
    except NovelTranslatorError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if not result.text:
        print("❌ Nothing to translate", file=sys.stderr)
        sys.exit(1)

    print(f"✅ Done: {result.chunk_count} chunk(s)", file=sys.stderr)
    _write_output(result.text, args.output)

    if args.save:
        db = HistoryDB()
        item = db.add_item(
            source_text=text.strip(),
            translated_text=result.text,
            series_title=args.series_title,
            episode_no=args.episode or result.episode_number or 1,
            subtitle=args.subtitle,
            url=args.url,
            folder_id=args.folder,
            show_header=bool(args.url),
        )
        print(f"💾 Saved to history: {item.id}", file=sys.stderr)


def cmd_chunk(args: Namespace) -> None:
    """Show how a file would be split into translation requests."""
    chunks = chunk_text(_read_input(args.file), args.max_chars)

    print(f"\n📦 {len(chunks)} chunk(s) (max {args.max_chars} chars):\n")
    for index, chunk in enumerate(chunks, start=1):
        first_line = chunk.split("\n", 1)[0]
        print(f"{index:>3}. {len(chunk):>5} chars  {first_line[:40]}")
    print()


def cmd_format(args: Namespace) -> None:
    """Apply the formatting pipeline to an existing translation."""
    source = _read_input(args.source) if args.source else ""
    translated = _read_input(args.translated)
    _write_output(apply_formatting_pipeline(source, translated), args.output)


def cmd_history(args: Namespace) -> None:
    """List saved translations, one page at a time."""
    from novel_translator.storage import HistoryDB

    db = HistoryDB()
    total_pages = db.total_pages(args.folder)
    page = min(max(1, args.page), total_pages)
    items = db.list_items(folder_id=args.folder, page=page)

    print(f"\n📂 {' / '.join(db.breadcrumb(args.folder))}")
    if not items:
        print("No translations saved.")
        return

    print(f"\n📋 Page {page}/{total_pages}:\n")
    print(f"{'ID':<18} {'Episode':<28} {'Saved':<20}")
    print("-" * 66)
    for item in items:
        header = render_header(item.series_title, item.episode_no, item.subtitle)
        print(f"{item.id:<18} {header.episode_line[:28]:<28} {item.created_at.isoformat()[:19]}")
    print()


def cmd_show(args: Namespace) -> None:
    """Print one saved translation with its header."""
    from novel_translator.storage import HistoryDB

    db = HistoryDB()
    item = db.get_item(args.item_id)
    if item is None:
        print(f"❌ No history item with id: {args.item_id}")
        sys.exit(1)

    if item.show_header:
        header = render_header(item.series_title, item.episode_no, item.subtitle)
        print(f"{header.title}\n{header.episode_line}\n")
    print(item.translated_text)

    older, newer = db.neighbors(item.id)
    print()
    if older:
        print(f"◀ prev: {older.id}")
    if newer:
        print(f"▶ next: {newer.id}")


def cmd_folders(args: Namespace) -> None:
    """Show the folder tree."""
    from novel_translator.storage import HistoryDB

    db = HistoryDB()
    nodes = db.folder_tree()
    if not nodes:
        print("No folders.")
        return

    for node in nodes:
        indent = "  " * node.depth
        print(f"{indent}📁 {node.folder.name}  ({node.folder.id})")


def cmd_serve(args: Namespace) -> None:
    """Start the HTTP API."""
    import uvicorn

    from novel_translator.api.app import create_app

    logging.basicConfig(level=logging.INFO)
    print(f"\n🌐 Serving on http://{args.host}:{args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port)
