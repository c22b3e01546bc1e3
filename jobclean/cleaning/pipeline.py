"""The description cleaning pipeline.

Cleaning is a left fold of pure str -> str stages over the raw text. Stage
order is significant: each stage assumes the output shape of the previous
one (for example header detection only understands ASCII decoration, so
symbol canonicalization must run first).
"""

import time
from functools import lru_cache
from typing import Callable, Optional, Tuple

from jobclean.logging import get_logger

from .boilerplate import remove_boilerplate
from .bullets import normalize_bullets
from .decorations import remove_decorative_lines
from .entities import decode_entities
from .escapes import normalize_escapes
from .finalize import finalize_description
from .headers import detect_section_headers
from .markup import strip_markup
from .paragraphs import segment_paragraphs
from .symbols import canonicalize_symbols

logger = get_logger(__name__, component="cleaning")

Stage = Callable[[str], str]

CLEANING_STAGES: Tuple[Tuple[str, Stage], ...] = (
    ("entities", decode_entities),
    ("escapes", normalize_escapes),
    ("markup", strip_markup),
    ("boilerplate", remove_boilerplate),
    ("decorations", remove_decorative_lines),
    ("symbols", canonicalize_symbols),
    ("headers", detect_section_headers),
    ("paragraphs", segment_paragraphs),
    ("bullets", normalize_bullets),
    ("finalize", finalize_description),
)


class StageFailure(Exception):
    """Raised inside the fold when a stage fails, carrying the last good text.

    Escaping the memoized fold as an exception keeps partial output out of
    the cache, so a later call retries the stages.
    """

    def __init__(self, stage: str, partial_text: str):
        super().__init__(f"Cleaning stage '{stage}' failed")
        self.stage = stage
        self.partial_text = partial_text


class DescriptionCleaner:
    """
    Runs raw descriptions through the cleaning stages.

    Cleaning never raises. If a stage fails unexpectedly, the failure is
    logged with the stage name and the output of the last successful stage
    is returned, so callers get degraded formatting rather than an error.

    With a positive cache_size, results are memoized per raw text with
    functools.lru_cache. The stages are pure, so cached and fresh results
    are identical.
    """

    def __init__(
        self,
        cache_size: int = 0,
        stages: Tuple[Tuple[str, Stage], ...] = CLEANING_STAGES,
    ):
        """
        Initialize the cleaner.

        Args:
            cache_size: Cleaned descriptions kept in memory (0 disables the cache)
            stages: Ordered (name, function) pairs to apply

        Raises:
            ValueError: If cache_size is negative
        """
        if cache_size < 0:
            raise ValueError(f"cache_size must be >= 0, got {cache_size}")

        self.cache_size = cache_size
        self.stages = stages
        self._run = lru_cache(maxsize=cache_size)(self._fold) if cache_size else self._fold

    def clean(self, raw_description: Optional[str]) -> str:
        """
        Clean a raw description.

        Args:
            raw_description: Raw description text (None is treated as empty)

        Returns:
            Cleaned description, "" for empty input
        """
        if not raw_description:
            return ""

        try:
            return self._run(raw_description)
        except StageFailure as failure:
            return failure.partial_text.strip()

    def cache_info(self):
        """Hit/miss statistics of the memoized fold, or None without a cache."""
        return self._run.cache_info() if self.cache_size else None

    def cache_clear(self) -> None:
        if self.cache_size:
            self._run.cache_clear()

    def _fold(self, raw_description: str) -> str:
        started = time.perf_counter()
        text = raw_description

        for name, stage in self.stages:
            try:
                text = stage(text)
            except Exception as e:
                logger.error(
                    f"Cleaning stage '{name}' failed, returning partially cleaned text",
                    extra={
                        "event": "cleaning.stage.failed",
                        "stage": name,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
                raise StageFailure(name, text) from e

        logger.debug(
            "Description cleaned",
            extra={
                "event": "cleaning.description.cleaned",
                "input_length": len(raw_description),
                "output_length": len(text),
                "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            },
        )
        return text


_default_cleaner = DescriptionCleaner()


def clean_description(raw_description: Optional[str], fallback: str = "") -> str:
    """Clean a description with the default (uncached) cleaner.

    Args:
        raw_description: Raw description text, possibly None or empty
        fallback: Text cleaned in place of a missing description

    Returns:
        Cleaned description

    Example:
        >>> clean_description(None, fallback="No description available")
        'No description available'
    """
    return _default_cleaner.clean(raw_description or fallback)
