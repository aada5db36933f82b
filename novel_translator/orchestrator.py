"""Translation orchestrator.

Runs a full episode through the chunker, the translate callable and the
formatting pipeline. Chunks are translated strictly one after another;
a CancelToken lets the caller abort the in-flight request and skip the
rest.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from novel_translator.config import MAX_CHARS, MAX_CHUNKS
from novel_translator.errors import (
    ChunkCountExceededError,
    NovelTranslatorError,
    TranslateError,
    TranslationCancelled,
)
from novel_translator.formatting import (
    apply_formatting_pipeline,
    chunk_text,
    extract_leading_episode_marker,
    join_chunks,
)
from novel_translator.formatting.text import normalize_newlines
from novel_translator.models import Progress, TranslationResult

logger = logging.getLogger(__name__)

TranslateFn = Callable[[str], Awaitable[str]]
ProgressFn = Callable[[Progress], None]


class CancelToken:
    """Cooperative cancellation signal for one translation request."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise TranslationCancelled("Translation was cancelled")


async def _translate_chunk(
    translate: TranslateFn, chunk: str, cancel_token: CancelToken | None
) -> str:
    """Await one translate call, aborting it if the token fires first."""
    if cancel_token is None:
        return await translate(chunk)

    call = asyncio.ensure_future(translate(chunk))
    waiter = asyncio.ensure_future(cancel_token.wait())
    try:
        done, _ = await asyncio.wait(
            {call, waiter}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        call.cancel()
        waiter.cancel()
        raise

    if call in done:
        waiter.cancel()
        return call.result()

    call.cancel()
    try:
        await call
    except asyncio.CancelledError:
        pass
    except Exception as e:
        logger.debug(f"In-flight translate call ended after cancel: {e}")
    raise TranslationCancelled("Translation was cancelled")


async def run_translation(
    source_text: str,
    translate: TranslateFn,
    *,
    max_chars: int = MAX_CHARS,
    max_chunks: int = MAX_CHUNKS,
    cancel_token: CancelToken | None = None,
    on_progress: ProgressFn | None = None,
) -> TranslationResult:
    """Translate and format a whole episode.

    Args:
        source_text: Raw source text
        translate: Async callable translating one chunk
        max_chars: Chunk size limit
        max_chunks: Reject texts that split into more chunks than this
        cancel_token: Optional token to abort the request
        on_progress: Called with Progress before each chunk and at the end

    Returns:
        TranslationResult with the formatted text. Blank input yields an
        empty result without calling translate.

    Raises:
        ChunkCountExceededError: Too many chunks (no translate call was made)
        TranslateError: A translate call failed; earlier output is discarded
        TranslationCancelled: cancel_token fired
    """
    source_text = normalize_newlines(source_text).strip()
    if not source_text:
        return TranslationResult(text="")

    chunks = chunk_text(source_text, max_chars)
    total = len(chunks)
    if total > max_chunks:
        raise ChunkCountExceededError(total, max_chunks)

    logger.info(f"🚀 Translating {len(source_text)} chars in {total} chunk(s)")

    outputs: list[str] = []
    for index, chunk in enumerate(chunks):
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        if on_progress:
            on_progress(Progress(current=index, total=total))

        try:
            translated = await _translate_chunk(translate, chunk, cancel_token)
        except NovelTranslatorError:
            raise
        except Exception as e:
            raise TranslateError(f"Chunk {index + 1}/{total} failed: {e}") from e

        logger.debug(f"Chunk {index + 1}/{total} translated ({len(translated)} chars)")
        outputs.append(translated.strip())

    if on_progress:
        on_progress(Progress(current=total, total=total))

    raw_text = join_chunks(outputs)
    marker = extract_leading_episode_marker(source_text)

    logger.info(f"✅ Translation complete: {total} chunk(s), {len(raw_text)} chars")
    return TranslationResult(
        text=apply_formatting_pipeline(source_text, raw_text),
        raw_text=raw_text,
        chunk_count=total,
        episode_number=marker.number if marker else None,
    )
