"""
Server-Sent Events line decoder.

Turns a stream of byte chunks of any size into complete text lines. Chunk
boundaries may fall anywhere, including inside a multi-byte UTF-8
character; bytes are decoded incrementally so such characters are never
split. A trailing partial line left when the stream ends is discarded.
"""

import codecs
from typing import AsyncGenerator, AsyncIterable, List

from ..observability.logging import SDKLogger


logger = SDKLogger("streaming")


class LineDecoder:
    """Incremental bytes-to-lines decoder.

    Feed chunks with `feed()`; each call returns the lines completed by that
    chunk, with the line terminator (LF or CRLF) stripped. Empty lines are
    returned as "".
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last complete line."""
        return self._buffer

    def feed(self, chunk: bytes) -> List[str]:
        if not chunk:
            return []
        self._buffer += self._decoder.decode(chunk)

        lines = []
        start = 0
        while True:
            end = self._buffer.find("\n", start)
            if end < 0:
                break
            line = self._buffer[start:end]
            if line.endswith("\r"):
                line = line[:-1]
            lines.append(line)
            start = end + 1

        self._buffer = self._buffer[start:]
        return lines

    def close(self) -> str:
        """Finish decoding and return the discarded trailing remainder."""
        remainder = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return remainder


async def iter_sse_lines(chunks: AsyncIterable[bytes], encoding: str = "utf-8") -> AsyncGenerator[str, None]:
    """Yield complete lines from an async stream of byte chunks."""
    decoder = LineDecoder(encoding)
    async for chunk in chunks:
        for line in decoder.feed(chunk):
            yield line

    remainder = decoder.close()
    if remainder:
        logger.debug("Discarding incomplete trailing line", length=len(remainder))
