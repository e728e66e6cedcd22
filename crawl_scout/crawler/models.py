# crawl_scout/crawler/models.py
"""
Data models for the HTTP layer: responses, page snapshots and the fetch capability.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, runtime_checkable


def _lower_headers(headers: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType({str(k).lower(): str(v) for k, v in (headers or {}).items()})


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Status, headers and decoded body of a completed request."""

    url: str
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    text: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _lower_headers(self.headers))

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True, slots=True)
class PageSnapshot:
    """A fetched page as seen by the detectors; ``status`` is None when the fetch failed."""

    url: str
    status: Optional[int] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    html: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _lower_headers(self.headers))

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())

    @classmethod
    def from_response(cls, response: FetchResponse) -> PageSnapshot:
        return cls(url=response.url, status=response.status, headers=response.headers, html=response.text)


@runtime_checkable
class HttpFetcher(Protocol):
    """Transport capability; timeouts are applied by the caller through cancellation."""

    async def request(
        self, method: str, url: str, *, headers: Optional[Mapping[str, str]] = None
    ) -> FetchResponse: ...
