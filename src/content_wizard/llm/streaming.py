"""
Single-pass text stream over a remote streaming generation.

Opening a stream includes receiving its first chunk, since SDK streams only
send the request on first iteration. The router guards that opening; once
chunks flow, a failure is surfaced to the consumer as-is (partial output
cannot be replayed safely).
"""

from typing import Any, AsyncIterator, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


def _chunk_text(chunk: Any) -> str:
    return getattr(chunk, "text", None) or ""


class TextStream:
    """
    Async iterator of text chunks.

    - Iterable exactly once; a second `async for` raises RuntimeError
    - `cancel()` stops the stream at the next chunk boundary and closes
      the underlying response
    - `text` holds everything received so far
    - `prime()` pulls the first chunk ahead of iteration so request errors
      are raised by whoever opens the stream
    """

    def __init__(
        self,
        chunks: AsyncIterator[Any],
        *,
        model: str,
        extract: Callable[[Any], str] = _chunk_text,
    ):
        self.model = model
        self._chunks = chunks
        self._extract = extract
        self._parts: list[str] = []
        self._head: list[Any] = []
        self._consumed = False
        self._cancelled = False
        self._closed = False

    def __aiter__(self) -> AsyncIterator[str]:
        if self._consumed:
            raise RuntimeError("TextStream can only be iterated once")
        self._consumed = True
        return self._iterate()

    async def prime(self) -> "TextStream":
        """
        Receive the first chunk now and hold it for iteration.

        Any failure closes the upstream and propagates. An empty stream
        primes fine.
        """
        try:
            self._head.append(await self._chunks.__anext__())
        except StopAsyncIteration:
            pass
        except BaseException:
            await self.aclose()
            raise
        return self

    async def _received(self) -> AsyncIterator[Any]:
        while self._head:
            yield self._head.pop(0)
        async for chunk in self._chunks:
            yield chunk

    async def _iterate(self) -> AsyncIterator[str]:
        received = self._received()
        try:
            async for chunk in received:
                if self._cancelled:
                    break
                text = self._extract(chunk)
                if not text:
                    continue
                self._parts.append(text)
                yield text
        finally:
            await received.aclose()
            await self.aclose()

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    async def cancel(self) -> None:
        """Stop consuming and release the upstream response."""
        if not self._cancelled:
            logger.info("Stream cancelled by consumer", model=self.model, chars=len(self.text))
        self._cancelled = True
        await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        aclose: Optional[Callable] = getattr(self._chunks, "aclose", None)
        if aclose is not None:
            await aclose()

    async def collect(self) -> str:
        """Drain the stream and return the full text."""
        async for _ in self:
            pass
        return self.text
