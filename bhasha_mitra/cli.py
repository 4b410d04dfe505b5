"""Command-line interface for checking a text file.

The file is loaded into an in-memory document, checked once, and the
suggestions are printed per category. ``--apply-all`` accepts the first
alternative of every spelling suggestion and writes the file back.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import Settings, load_settings, save_settings
from .document.memory import InMemoryDocument
from .llm.gemini_llm import GeminiSuggestionProvider
from .llm.provider import SuggestionProvider
from .models import BranchStatus, DocType, LanguageStyle, SuggestionCategory
from .prompt.render_prompt import TONE_OPTIONS
from .review.orchestrator import CheckOrchestrator, CheckRefusedError, CheckResult
from .review.store import StoreSnapshot, SuggestionStore


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="bhasha-mitra",
        description="Proofread Bangla text with Gemini suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a whole file
  python -m bhasha_mitra check letter.txt

  # Check characters 0-120 only, converting to cholito bhasha in a formal tone
  python -m bhasha_mitra check letter.txt --selection 0:120 --style cholito --tone formal

  # Accept every first spelling suggestion and save the file
  python -m bhasha_mitra check letter.txt --apply-all

  # Persist the API key, model and document type to .env
  python -m bhasha_mitra save-settings --api-key KEY --doc-type official

Environment Variables:
  GEMINI_API_KEY           Gemini API key (required for checks)
  BHASHA_MITRA_MODEL       Model id (default: gemini-2.5-flash)
  BHASHA_MITRA_DOC_TYPE    Document type (default: generic)
  BHASHA_MITRA_LOG_LEVEL   Logging level (default: WARNING)
        """,
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        help="Path to .env file for settings",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check a UTF-8 text file")
    check.add_argument("file", type=Path, help="Text file to check")
    check.add_argument(
        "--tone",
        help=f"Tone to convert to ({', '.join(TONE_OPTIONS)}); omit to skip tone suggestions",
    )
    check.add_argument(
        "--style",
        choices=[style.value for style in LanguageStyle],
        default=LanguageStyle.NONE.value,
        help="Register to convert to (default: none)",
    )
    check.add_argument(
        "--doc-type",
        choices=[doc_type.value for doc_type in DocType],
        help="Document type (default: BHASHA_MITRA_DOC_TYPE or generic)",
    )
    check.add_argument("--model", help="Model id (default: BHASHA_MITRA_MODEL)")
    check.add_argument(
        "--selection",
        help="Check only the START:END character range of the file",
    )
    check.add_argument(
        "--apply-all",
        action="store_true",
        help="Apply the first suggestion of every spelling error and save the file",
    )
    check.add_argument(
        "--json",
        action="store_true",
        help="Print the suggestions as JSON instead of text",
    )

    save = subparsers.add_parser("save-settings", help="Write settings to the .env file")
    save.add_argument("--api-key", help="Gemini API key")
    save.add_argument("--model", help="Model id")
    save.add_argument(
        "--doc-type",
        choices=[doc_type.value for doc_type in DocType],
        help="Document type",
    )

    return parser.parse_args(args)


def build_provider() -> SuggestionProvider:
    return GeminiSuggestionProvider()


def _parse_selection(value: str) -> tuple[int, int]:
    start_text, sep, end_text = value.partition(":")
    if not sep:
        raise ValueError(f"Selection must look like START:END, got {value!r}")
    return int(start_text), int(end_text)


def _print_report(snapshot: StoreSnapshot, result: CheckResult, *, show_mixing: bool = True) -> None:
    stats = result.stats
    print(f"Words: {stats.total_words}  Errors: {stats.error_count}  Accuracy: {stats.accuracy}%")

    if snapshot.spelling:
        print("\nSpelling:")
        for item in snapshot.spelling:
            print(f"  {item.wrong} -> {', '.join(item.suggestions) or '?'}")
    if snapshot.tone:
        print("\nTone:")
        for item in snapshot.tone:
            print(f"  {item.current} -> {item.suggestion} ({item.reason})")
    if snapshot.style:
        print("\nStyle:")
        for item in snapshot.style:
            print(f"  {item.current} -> {item.suggestion} [{item.type}]")
    if show_mixing and snapshot.mixing is not None and snapshot.mixing.detected:
        mixing = snapshot.mixing
        print("\nStyle mixing detected")
        if mixing.recommended_style:
            print(f"  Recommended: {mixing.recommended_style}")
        if mixing.reason:
            print(f"  {mixing.reason}")
        for item in mixing.corrections or ():
            print(f"  {item.current} -> {item.suggestion} [{item.type}]")
    if snapshot.punctuation:
        print("\nPunctuation:")
        for item in snapshot.punctuation:
            print(f"  {item.issue}: {item.current_sentence} -> {item.corrected_sentence}")
    if snapshot.euphony:
        print("\nEuphony:")
        for item in snapshot.euphony:
            print(f"  {item.current} -> {', '.join(item.suggestions)} ({item.reason})")
    if snapshot.content is not None:
        content = snapshot.content
        print(f"\nContent: {content.content_type}")
        if content.description:
            print(f"  {content.description}")
        for element in content.missing_elements:
            print(f"  missing: {element}")
        for suggestion in content.suggestions:
            print(f"  tip: {suggestion}")

    failed = [b.value for b, status in result.branch_statuses.items() if status is BranchStatus.FAILURE]
    if failed:
        print(f"\nNo results from: {', '.join(failed)}", file=sys.stderr)


async def _check(args: argparse.Namespace, settings: Settings) -> int:
    document = InMemoryDocument.from_path(args.file)
    if args.selection:
        start, end = _parse_selection(args.selection)
        document.select(start, end)

    store = SuggestionStore(document)
    orchestrator = CheckOrchestrator(document, build_provider(), store)
    result = await orchestrator.run_check(
        settings.api_key,
        model_id=args.model or settings.model,
        doc_type=args.doc_type or settings.doc_type,
        tone=args.tone,
        style=args.style,
    )

    snapshot = store.snapshot
    if args.json:
        print(json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_report(snapshot, result, show_mixing=args.style == LanguageStyle.NONE.value)

    if args.apply_all:
        applied = 0
        for item in snapshot.spelling:
            # An earlier apply prunes duplicates of the same word
            if item.canonical_key not in store.snapshot.live_keys()[SuggestionCategory.SPELLING]:
                continue
            if item.suggestions and await store.apply(item.wrong, item.suggestions[0]):
                applied += 1
        document.save(args.file)
        print(
            f"\nApplied {applied} of {len(snapshot.spelling)} spelling correction(s) to {args.file}",
            file=sys.stderr if args.json else sys.stdout,
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 2 when the check was refused, 1 on other errors)
    """
    args = parse_args(argv)
    settings = load_settings(args.dotenv)
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))

    if args.command == "save-settings":
        if args.api_key is not None:
            settings.api_key = args.api_key.strip()
        if args.model:
            settings.model = args.model.strip()
        if args.doc_type:
            settings.doc_type = DocType.parse(args.doc_type)
        path = save_settings(settings, args.dotenv or Path(".env"))
        print(f"Settings saved to {path}")
        return 0

    try:
        return asyncio.run(_check(args, settings))
    except CheckRefusedError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
