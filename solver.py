"""Dictionary scanner, search orchestration and two-word comparison."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator

from models import QueryResult, SearchOptions, SearchReport
from utils import CanonicalForm, canonical_form, is_anagram, parse_query_words, words_left

StatusCallback = Callable[[str], None]

logger = logging.getLogger(__name__)


class PreconditionError(ValueError):
    """Raised when no query word can possibly have an anagram."""


class DictionarySource:
    """
    Word list read one word per line, rewindable between queries.

    Use as a context manager; the file handle is closed on every exit path.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._handle: BinaryIO | None = None

    def __enter__(self) -> DictionarySource:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open(self) -> None:
        if not self.path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {self.path}")
        self._handle = self.path.open("rb")

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def rewind(self) -> None:
        """Move back to the first line."""
        if self._handle is None:
            raise ValueError(f"Dictionary {self.path} is not open")
        if self._handle.tell() > 0:
            self._handle.seek(0)

    def __iter__(self) -> Iterator[str]:
        if self._handle is None:
            raise ValueError(f"Dictionary {self.path} is not open")
        for line_number, raw_line in enumerate(self._handle, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("Skipping undecodable line %d in %s", line_number, self.path)
                continue
            yield line.rstrip("\r\n")


class AnagramFinder:
    """Find anagrams of query words by scanning a word list."""

    def __init__(self, options: SearchOptions, status_callback: StatusCallback | None = None) -> None:
        self.options = options
        self.status_callback = status_callback

    def _status(self, message: str) -> None:
        logger.info(message)
        if self.status_callback and not self.options.quiet:
            self.status_callback(message)

    def canonical(self, word: str) -> CanonicalForm:
        return canonical_form(word, base_letters=self.options.use_base_letters)

    def scan(self, dictionary: DictionarySource, word: str, word_form: CanonicalForm) -> list[str]:
        """
        Scan the whole dictionary for anagrams of one query word.

        Candidates shorter than the query's canonical form are skipped, and
        in exact mode so is every candidate whose length differs from the
        query. Only survivors are canonicalized and compared.
        """
        dictionary.rewind()
        found: list[str] = []
        lines_read = 0
        compared = 0

        for candidate in dictionary:
            lines_read += 1
            if len(candidate) < len(word_form):
                continue
            if not self.options.use_base_letters and len(candidate) != len(word):
                continue

            compared += 1
            if is_anagram(word_form, self.canonical(candidate)):
                found.append(candidate)
                if self.options.only_find_one:
                    break

        logger.info(
            "Scanned %d lines for %s, compared %d, found %d",
            lines_read,
            word,
            compared,
            len(found),
        )
        return found

    def search(self, query_words: Iterable[str], dictionary_path: str | Path) -> SearchReport:
        """Search the dictionary for each query word in order."""
        words = parse_query_words(query_words)
        if all(len(word) <= 1 for word in words):
            raise PreconditionError("Can't find anagrams of single-letter words")

        results: list[QueryResult] = []
        remaining = len(words)

        with DictionarySource(dictionary_path) as dictionary:
            for word in words:
                remaining -= 1
                word_form = self.canonical(word)

                if len(word) <= 1:
                    self._status(f"Skipping {word} -- {words_left(remaining)}")
                    results.append(QueryResult(word=word, canonical="".join(word_form), status="skipped"))
                    continue

                self._status(f"Now searching for {word} -- {words_left(remaining)}")
                matches = self.scan(dictionary, word, word_form)
                results.append(
                    QueryResult(
                        word=word,
                        canonical="".join(word_form),
                        status="found" if matches else "not found",
                        matches=matches,
                    )
                )

        self._status("Done")
        return SearchReport(dictionary_path=str(dictionary_path), query_words=words, results=results)

    def compare(self, first: str, second: str) -> bool:
        """Whether two words are anagrams under the active matching mode."""
        return is_anagram(self.canonical(first), self.canonical(second))
