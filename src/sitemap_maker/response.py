"""
HTTP response collaborators for ``Sitemap.stream``.

``stream`` never talks to a server directly; it drives a ``ResponseWriter``.
``BufferedResponse`` is the in-memory implementation used by the WSGI
adapter and by tests.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, List, Protocol, Tuple

from .errors import SitemapError

if TYPE_CHECKING:
    from .sitemap import Sitemap


class ResponseEnded(SitemapError):
    """Raised when a response is modified after ``end()``."""


class ResponseWriter(Protocol):
    def set_header(self, name: str, value: str) -> None: ...

    def write_body(self, data: str) -> None: ...

    def end(self) -> None: ...


class BufferedResponse:
    """Collects status, headers and body until the hosting server sends them."""

    def __init__(self, status: str = "200 OK") -> None:
        self.status = status
        self.headers: List[Tuple[str, str]] = []
        self._chunks: List[str] = []
        self.ended = False

    def _check_open(self) -> None:
        if self.ended:
            raise ResponseEnded("Response has already ended")

    def set_header(self, name: str, value: str) -> None:
        self._check_open()
        # Header names are case-insensitive; the last value set wins
        self.headers = [(k, v) for k, v in self.headers if k.lower() != name.lower()]
        self.headers.append((name, value))

    def get_header(self, name: str) -> str | None:
        for k, v in self.headers:
            if k.lower() == name.lower():
                return v
        return None

    def write_body(self, data: str) -> None:
        self._check_open()
        self._chunks.append(data)

    def end(self) -> None:
        self.ended = True

    @property
    def body(self) -> str:
        return "".join(self._chunks)


def make_wsgi_app(sitemap: "Sitemap") -> Callable[[dict, Callable], Iterable[bytes]]:
    """
    Wrap a sitemap in a WSGI application.

    The sitemap is re-rendered on every request, so entries added after the
    app was created are served too.
    """

    def app(environ: dict, start_response: Callable) -> Iterable[bytes]:
        response = BufferedResponse()
        sitemap.stream(response)
        payload = response.body.encode("utf-8")
        headers = response.headers + [("Content-Length", str(len(payload)))]
        start_response(response.status, headers)
        return [payload]

    return app
