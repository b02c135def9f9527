"""Grok API client, stream decoding and retry."""

from grok_search.llm.client import DEFAULT_RETRY_POLICY, GrokSearchProvider
from grok_search.llm.retry import RetryPolicy, backoff_delays, retry_with_backoff
from grok_search.llm.stream import StreamDecoder, decode_stream

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "GrokSearchProvider",
    "RetryPolicy",
    "StreamDecoder",
    "backoff_delays",
    "decode_stream",
    "retry_with_backoff",
]
