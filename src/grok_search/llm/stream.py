"""Decoder for streamed chat completions (``data: <json>`` event lines).

Chunks arrive in transport order but may cut an event line (or a UTF-8
character) anywhere.  Only complete lines are parsed; the tail waits in the
buffer for the next chunk.
"""

from __future__ import annotations

import codecs
import json
import logging
from collections.abc import AsyncIterable
from typing import Any

from grok_search.errors import EmptyResponseError

_logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def extract_delta(event: Any) -> str:
    """Return ``choices[0].delta.content`` from a parsed event, or ``""``."""
    if not isinstance(event, dict):
        return ""
    choices = event.get("choices") or []
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    delta = first.get("delta") or {}
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""


class StreamDecoder:
    """Accumulates text deltas from an event stream.

    ``[DONE]`` is skipped like any other non-content line; the stream ends
    when the transport closes and :meth:`finish` is called.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._parts: list[str] = []
        self.bytes_received = 0
        self.malformed_lines = 0

    @property
    def content(self) -> str:
        return "".join(self._parts)

    def feed(self, chunk: bytes | str) -> list[str]:
        """Consume one chunk.  Returns the deltas it completed, in order."""
        if isinstance(chunk, bytes):
            self.bytes_received += len(chunk)
            text = self._decoder.decode(chunk)
        else:
            self.bytes_received += len(chunk.encode("utf-8"))
            text = chunk
        self._buffer += text

        lines = self._buffer.split("\n")
        self._buffer = lines.pop()

        deltas: list[str] = []
        for line in lines:
            delta = self._process_line(line)
            if delta:
                deltas.append(delta)
        return deltas

    def finish(self) -> str:
        """Flush the decoder and any unterminated last line; return the text."""
        self._buffer += self._decoder.decode(b"", final=True)
        if self._buffer:
            self._process_line(self._buffer)
            self._buffer = ""
        return self.content

    def _process_line(self, line: str) -> str:
        line = line.strip()
        if not line.startswith(DATA_PREFIX):
            return ""
        data = line[len(DATA_PREFIX):]
        if data == DONE_SENTINEL:
            return ""
        try:
            event = json.loads(data)
        except json.JSONDecodeError:
            self.malformed_lines += 1
            return ""
        delta = extract_delta(event)
        if delta:
            self._parts.append(delta)
        return delta


async def decode_stream(chunks: AsyncIterable[bytes] | None) -> str:
    """Drain *chunks* through a :class:`StreamDecoder` and return the text.

    Raises :class:`EmptyResponseError` when there is no body at all.  A body
    that closes without sending anything decodes to ``""``.
    """
    if chunks is None:
        raise EmptyResponseError()

    decoder = StreamDecoder()
    async for chunk in chunks:
        decoder.feed(chunk)

    content = decoder.finish()
    if decoder.malformed_lines:
        _logger.debug("Skipped %d malformed stream events", decoder.malformed_lines)
    return content
