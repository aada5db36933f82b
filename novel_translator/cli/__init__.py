"""Novel Translator CLI - chunked LLM translation of web fiction.

Usage:
    novel-translator translate episode.txt --output episode.ko.txt
    novel-translator translate --url https://example.com/novel/1 --save
    novel-translator chunk episode.txt --max-chars 2000
    novel-translator format translated.txt --source episode.txt
    novel-translator history --page 2
    novel-translator serve --port 8000
"""

import argparse

from novel_translator.cli import commands
from novel_translator.cli.commands import (
    cmd_chunk,
    cmd_folders,
    cmd_format,
    cmd_history,
    cmd_serve,
    cmd_show,
    cmd_translate,
)
from novel_translator.config import MAX_CHARS

__all__ = [
    # Submodules
    "commands",
    # Entry points
    "main",
    "create_parser",
]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser.

    Returns:
        Configured ArgumentParser for testing and main().
    """
    parser = argparse.ArgumentParser(
        description="Novel Translator - chunked LLM translation for web fiction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Translate command
    translate_parser = subparsers.add_parser(
        "translate", help="Translate a text file or URL"
    )
    translate_parser.add_argument(
        "file", nargs="?", help="Source text file ('-' for stdin)"
    )
    translate_parser.add_argument("--url", "-u", help="Fetch the source from a URL")
    translate_parser.add_argument("--cookie", help="Cookie header for Pixiv URLs")
    translate_parser.add_argument(
        "--output", "-o", type=str, help="Output file (default: stdout)"
    )
    translate_parser.add_argument("--provider", help="LLM provider override")
    translate_parser.add_argument("--model", help="Model name override")
    translate_parser.add_argument(
        "--save", "-s", action="store_true", help="Save the result to history"
    )
    translate_parser.add_argument(
        "--series-title", default="", help="Series title for the history entry"
    )
    translate_parser.add_argument(
        "--episode", "-e", type=int, default=None, help="Episode number"
    )
    translate_parser.add_argument("--subtitle", default="", help="Episode subtitle")
    translate_parser.add_argument("--folder", help="Folder ID for the history entry")
    translate_parser.set_defaults(func=cmd_translate)

    # Chunk command
    chunk_parser = subparsers.add_parser("chunk", help="Preview chunk boundaries")
    chunk_parser.add_argument("file", help="Source text file ('-' for stdin)")
    chunk_parser.add_argument(
        "--max-chars", "-m", type=int, default=MAX_CHARS, help="Chunk size limit"
    )
    chunk_parser.set_defaults(func=cmd_chunk)

    # Format command
    format_parser = subparsers.add_parser(
        "format", help="Format an existing translation"
    )
    format_parser.add_argument("translated", help="Translated text file ('-' for stdin)")
    format_parser.add_argument(
        "--source", help="Original source file (enables header reconciliation)"
    )
    format_parser.add_argument(
        "--output", "-o", type=str, help="Output file (default: stdout)"
    )
    format_parser.set_defaults(func=cmd_format)

    # History commands
    history_parser = subparsers.add_parser("history", help="List saved translations")
    history_parser.add_argument("--folder", "-f", help="Folder ID (default: all)")
    history_parser.add_argument("--page", "-p", type=int, default=1, help="Page number")
    history_parser.set_defaults(func=cmd_history)

    show_parser = subparsers.add_parser("show", help="Show a saved translation")
    show_parser.add_argument("item_id", help="History item ID")
    show_parser.set_defaults(func=cmd_show)

    folders_parser = subparsers.add_parser("folders", help="Show the folder tree")
    folders_parser.set_defaults(func=cmd_folders)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main():
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
