"""
Unit tests for TextStream.
"""

from types import SimpleNamespace

import pytest

from content_wizard.llm.streaming import TextStream


class FakeChunks:
    """Async iterator of text chunks that records whether it was closed."""

    def __init__(self, *texts):
        self.texts = list(texts)
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self.texts:
            raise StopAsyncIteration
        text = self.texts.pop(0)
        if isinstance(text, Exception):
            raise text
        return SimpleNamespace(text=text)

    async def aclose(self):
        self.closed = True


class TestTextStream:
    """Tests for single-pass streaming."""

    @pytest.mark.asyncio
    async def test_yields_chunks_in_order_and_accumulates(self):
        stream = TextStream(FakeChunks("# Title\n", "", "Body"), model="m")

        received = [chunk async for chunk in stream]

        assert received == ["# Title\n", "Body"]
        assert stream.text == "# Title\nBody"

    @pytest.mark.asyncio
    async def test_collect(self):
        chunks = FakeChunks("a", "b")

        assert await TextStream(chunks, model="m").collect() == "ab"
        assert chunks.closed

    @pytest.mark.asyncio
    async def test_second_iteration_rejected(self):
        stream = TextStream(FakeChunks("a"), model="m")
        await stream.collect()

        with pytest.raises(RuntimeError):
            async for _ in stream:
                pass

    @pytest.mark.asyncio
    async def test_cancel_stops_at_chunk_boundary(self):
        chunks = FakeChunks("one", "two", "three")
        stream = TextStream(chunks, model="m")

        received = []
        async for chunk in stream:
            received.append(chunk)
            await stream.cancel()

        assert received == ["one"]
        assert stream.cancelled
        assert chunks.closed

    @pytest.mark.asyncio
    async def test_mid_stream_failure_reaches_consumer(self):
        chunks = FakeChunks("partial ", ConnectionResetError("dropped"))
        stream = TextStream(chunks, model="m")

        with pytest.raises(ConnectionResetError):
            await stream.collect()

        assert stream.text == "partial "
        assert chunks.closed

    @pytest.mark.asyncio
    async def test_custom_extractor(self):
        stream = TextStream(FakeChunks("x"), model="m", extract=lambda chunk: chunk.text.upper())

        assert await stream.collect() == "X"


class TestPrime:
    """Tests for receiving the first chunk ahead of iteration."""

    @pytest.mark.asyncio
    async def test_first_chunk_is_held_for_iteration(self):
        chunks = FakeChunks("one", "two")
        stream = await TextStream(chunks, model="m").prime()

        assert chunks.texts == ["two"]
        assert stream.text == ""
        assert await stream.collect() == "onetwo"

    @pytest.mark.asyncio
    async def test_empty_stream_primes(self):
        stream = await TextStream(FakeChunks(), model="m").prime()

        assert await stream.collect() == ""

    @pytest.mark.asyncio
    async def test_failure_on_first_chunk_raises_and_closes(self):
        chunks = FakeChunks(ConnectionResetError("refused"), "never")

        with pytest.raises(ConnectionResetError):
            await TextStream(chunks, model="m").prime()

        assert chunks.closed

    @pytest.mark.asyncio
    async def test_cancel_after_prime_skips_held_chunk(self):
        chunks = FakeChunks("one", "two")
        stream = await TextStream(chunks, model="m").prime()

        await stream.cancel()

        assert await stream.collect() == ""
        assert chunks.closed
