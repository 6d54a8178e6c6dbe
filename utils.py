"""Utility helpers for canonical forms, formatting, config, and exports."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from models import QueryResult, SearchOptions, SearchReport


def _choose_app_dir() -> Path:
    """
    Pick a writable app directory.

    Preferred location is user home, with local workspace fallback when blocked.
    """
    preferred = Path.home() / ".agram"
    try:
        preferred.mkdir(parents=True, exist_ok=True)
        return preferred
    except OSError:
        fallback = Path(".agram")
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


APP_DIR = _choose_app_dir()
CONFIG_PATH = APP_DIR / "config.json"
LOG_PATH = APP_DIR / "agram.log"

DEFAULT_DICTIONARY = "/usr/share/dict/words"


def ensure_app_dirs() -> None:
    """Create the app directory if it does not already exist."""
    APP_DIR.mkdir(parents=True, exist_ok=True)


def setup_logging() -> None:
    """Configure file logging once per run."""
    ensure_app_dirs()
    logging.basicConfig(
        filename=str(LOG_PATH),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config() -> dict[str, Any]:
    """Load config from the user home config file."""
    ensure_app_dirs()
    if not CONFIG_PATH.exists():
        return {}
    try:
        return json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        logging.exception("Failed to load config from %s", CONFIG_PATH)
        return {}


def save_config(config: dict[str, Any]) -> None:
    """Persist config to disk."""
    ensure_app_dirs()
    try:
        CONFIG_PATH.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception:
        logging.exception("Failed to save config to %s", CONFIG_PATH)


def resolve_dictionary_path(cli_path: str | None, config: dict[str, Any]) -> str:
    """Command line wins, then the configured dictionary, then the system word list."""
    return cli_path or config.get("dictionary") or DEFAULT_DICTIONARY


CanonicalForm = tuple[str, ...]


def canonical_form(word: str, base_letters: bool = False) -> CanonicalForm:
    """
    Canonical letters of a word, used for anagram comparison.

    Each character is lower-cased on its own and the results sorted, so the
    form has one entry per character even when lower-casing widens one
    (``"İ".lower()`` is two code points). In base-letter mode each distinct
    letter is kept once, so length and repetition count no longer matter.
    """
    letters = sorted(ch.lower() for ch in word)
    if base_letters:
        letters = list(dict.fromkeys(letters))
    return tuple(letters)


def is_anagram(first: CanonicalForm, second: CanonicalForm) -> bool:
    """Two canonical forms match when they are equal."""
    return first == second


def parse_query_words(words: Iterable[str]) -> list[str]:
    """Drop repeated query words, keeping command-line order."""
    return list(dict.fromkeys(words))


def words_left(count: int) -> str:
    return f"{count} word{'' if count == 1 else 's'} left"


def format_result_line(result: QueryResult) -> str:
    """`<word> <count>: <matches...>` for one query word."""
    line = f"{result.word} {result.count}:"
    if result.matches:
        line += " " + " ".join(result.matches)
    return line


def export_report(json_path: Path, csv_path: Path, report: SearchReport, options: SearchOptions) -> None:
    """Export a search report to both JSON and CSV."""
    payload = {
        "generated_at_utc": report.generated_at_utc,
        "dictionary_path": report.dictionary_path,
        "options": {
            "only_find_one": options.only_find_one,
            "use_base_letters": options.use_base_letters,
        },
        "query_words": report.query_words,
        "results": [
            {
                "word": r.word,
                "canonical": r.canonical,
                "status": r.status,
                "count": r.count,
                "matches": r.matches,
            }
            for r in report.results
        ],
    }

    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    with csv_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["word", "status", "count", "matches"])
        for row in report.results:
            writer.writerow([row.word, row.status, row.count, "|".join(row.matches)])
