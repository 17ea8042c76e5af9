"""
Search source and search parameter builders.

A ``chat_pb2.Source`` is a closed tagged variant: its ``source`` oneof holds
exactly one of ``x``, ``web``, ``news`` or ``rss``. Every builder leaves an
optional scalar *unset* (no proto3 presence) when the caller does not supply
it, so the service applies its own default instead of receiving an explicit
zero:

* ``country``: ``None`` or ``""`` is unset.
* ``post_favorite_count`` / ``post_view_count``: ``None`` is unset, ``0`` is sent.
* ``max_search_results``: ``None`` or a value ``<= 0`` is unset.
* ``from_date`` / ``to_date``: ``None`` is unset. Datetimes must be
  timezone-aware.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Literal, Optional, Union

from google.protobuf.timestamp_pb2 import Timestamp

from ..proto import chat_pb2

SEARCH_MODE_OFF = chat_pb2.SearchMode.OFF_SEARCH_MODE
SEARCH_MODE_ON = chat_pb2.SearchMode.ON_SEARCH_MODE
SEARCH_MODE_AUTO = chat_pb2.SearchMode.AUTO_SEARCH_MODE

SearchModeName = Literal["off", "on", "auto"]
SourceKind = Literal["x", "web", "news", "rss"]

_MODE_BY_NAME: Dict[str, int] = {
    "off": SEARCH_MODE_OFF,
    "on": SEARCH_MODE_ON,
    "auto": SEARCH_MODE_AUTO,
}
SOURCE_KINDS = ("x", "web", "news", "rss")


def _resolve_mode(mode: Union[SearchModeName, int]) -> int:
    if isinstance(mode, str):
        try:
            return _MODE_BY_NAME[mode.strip().lower()]
        except KeyError:
            raise ValueError(f"unknown search mode {mode!r}; expected one of off, on, auto") from None
    if mode not in _MODE_BY_NAME.values():
        raise ValueError(f"unknown search mode value {mode!r}")
    return mode


def _timestamp(value: datetime, name: str) -> Timestamp:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        raise ValueError(f"{name} must be timezone-aware")
    ts = Timestamp()
    ts.FromDatetime(value)
    return ts


def x_source(
    included_x_handles: Optional[Iterable[str]] = None,
    excluded_x_handles: Optional[Iterable[str]] = None,
    post_favorite_count: Optional[int] = None,
    post_view_count: Optional[int] = None,
) -> chat_pb2.Source:
    """An X (formerly Twitter) source; with no arguments it applies no filters."""
    sx = chat_pb2.XSource(
        included_x_handles=list(included_x_handles or ()),
        excluded_x_handles=list(excluded_x_handles or ()),
    )
    if post_favorite_count is not None:
        sx.post_favorite_count = post_favorite_count
    if post_view_count is not None:
        sx.post_view_count = post_view_count
    return chat_pb2.Source(x=sx)


def web_source(
    excluded_websites: Optional[Iterable[str]] = None,
    allowed_websites: Optional[Iterable[str]] = None,
    country: Optional[str] = None,
    safe_search: bool = False,
) -> chat_pb2.Source:
    """A web search source with site filters, optional country and safe search."""
    ws = chat_pb2.WebSource(
        excluded_websites=list(excluded_websites or ()),
        allowed_websites=list(allowed_websites or ()),
        safe_search=safe_search,
    )
    if country:
        ws.country = country
    return chat_pb2.Source(web=ws)


def news_source(
    excluded_websites: Optional[Iterable[str]] = None,
    country: Optional[str] = None,
    safe_search: bool = False,
) -> chat_pb2.Source:
    ns = chat_pb2.NewsSource(
        excluded_websites=list(excluded_websites or ()),
        safe_search=safe_search,
    )
    if country:
        ns.country = country
    return chat_pb2.Source(news=ns)


def rss_source(links: Iterable[str]) -> chat_pb2.Source:
    """An RSS source reading the given feed links."""
    return chat_pb2.Source(rss=chat_pb2.RssSource(links=list(links)))


def source_kind(source: chat_pb2.Source) -> SourceKind:
    """Return which of the four variants ``source`` carries.

    Raises:
        ValueError: if no variant is set.
    """
    kind = source.WhichOneof("source")
    if kind not in SOURCE_KINDS:
        raise ValueError("search source has no variant set")
    return kind  # type: ignore[return-value]


def search_parameters(
    mode: Union[SearchModeName, int],
    *sources: chat_pb2.Source,
    return_citations: bool = False,
    max_search_results: Optional[int] = None,
) -> chat_pb2.SearchParameters:
    """Assemble search parameters from a mode and any number of sources.

    ``mode`` is a ``SEARCH_MODE_*`` value or one of ``"off"``, ``"on"``,
    ``"auto"``. A non-positive ``max_search_results`` is left unset.
    """
    for src in sources:
        source_kind(src)
    sp = chat_pb2.SearchParameters(
        mode=_resolve_mode(mode),
        sources=list(sources),
        return_citations=return_citations,
    )
    if max_search_results is not None and max_search_results > 0:
        sp.max_search_results = max_search_results
    return sp


def search_parameters_with_date_range(
    mode: Union[SearchModeName, int],
    *sources: chat_pb2.Source,
    return_citations: bool = False,
    max_search_results: Optional[int] = None,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
) -> chat_pb2.SearchParameters:
    """Like :func:`search_parameters`, plus an optional ``from``/``to`` window."""
    sp = search_parameters(
        mode,
        *sources,
        return_citations=return_citations,
        max_search_results=max_search_results,
    )
    if from_date is not None:
        sp.from_date.CopyFrom(_timestamp(from_date, "from_date"))
    if to_date is not None:
        sp.to_date.CopyFrom(_timestamp(to_date, "to_date"))
    return sp


def search_parameters_x_on(return_citations: bool, max_search_results: int) -> chat_pb2.SearchParameters:
    """Preset: search on, a single unfiltered X source.

    ``max_search_results <= 0`` leaves the field unset like every other
    builder here, so the service default applies; an explicit ``0`` is never
    sent.
    """
    return search_parameters(
        SEARCH_MODE_ON,
        x_source(),
        return_citations=return_citations,
        max_search_results=max_search_results,
    )


__all__ = [
    "SEARCH_MODE_OFF",
    "SEARCH_MODE_ON",
    "SEARCH_MODE_AUTO",
    "SOURCE_KINDS",
    "x_source",
    "web_source",
    "news_source",
    "rss_source",
    "source_kind",
    "search_parameters",
    "search_parameters_with_date_range",
    "search_parameters_x_on",
]
