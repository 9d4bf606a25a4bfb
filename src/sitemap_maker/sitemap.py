from __future__ import annotations

import os
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Iterator, List, Union
from xml.sax.saxutils import escape

from dateutil import tz
from dateutil.parser import parse as parse_date

from .errors import InvalidInput
from .logger import get_logger
from .response import ResponseWriter
from .url import URL
from .validators import validate_change_frequency, validate_priority, validate_timezone

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
CONTENT_TYPE = "application/xml; charset=UTF-8"
DEFAULT_TIMEZONE = "Africa/Maputo"

_EPOCH_RE = re.compile(r"^@(-?\d+(?:\.\d+)?)$")

# Relative day keywords, as offsets from today's midnight
_RELATIVE_DAYS = {
    "today": 0,
    "midnight": 0,
    "yesterday": -1,
    "tomorrow": 1,
}


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _parse_keyword(value: str, zone) -> datetime | None:
    """Handle ``now``, ``today``/``yesterday``/``tomorrow`` and ``@<unix time>``."""
    keyword = value.strip().lower()
    if keyword == "now":
        return datetime.now(zone)
    if keyword in _RELATIVE_DAYS:
        midnight = datetime.combine(datetime.now(zone).date(), time(), tzinfo=zone)
        return midnight + timedelta(days=_RELATIVE_DAYS[keyword])

    match = _EPOCH_RE.match(keyword)
    if match:
        try:
            return datetime.fromtimestamp(float(match.group(1)), tz.tzutc())
        except (ValueError, OverflowError, OSError) as e:
            raise InvalidInput(f"Timestamp out of range {value!r}: {e}") from e
    return None


def normalize_lastmod(value: Union[str, date], timezone: str = DEFAULT_TIMEZONE) -> str:
    """
    Convert a free-form date into the W3C datetime form used by ``<lastmod>``.

    Naive values are read as local time in ``timezone``; values that carry
    their own offset keep it. Besides anything ``dateutil`` can parse this
    accepts ``now``, ``today``, ``yesterday``, ``tomorrow``, ``@<unix time>``
    (always UTC) and ``date``/``datetime`` objects. The result always has
    seconds and a numeric offset, e.g. ``2024-01-15T10:30:00+02:00``.

    Raises:
        InvalidInput: if the value cannot be parsed or the timezone is unknown
    """
    is_valid, msg = validate_timezone(timezone)
    if not is_valid:
        raise InvalidInput(msg)
    zone = tz.gettz(timezone)

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    else:
        text = _text(value)
        parsed = _parse_keyword(text, zone)
        if parsed is None:
            try:
                parsed = parse_date(text)
            except (ValueError, OverflowError) as e:
                raise InvalidInput(f"Cannot parse last modification date {text!r}: {e}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=zone)
    return parsed.isoformat(timespec="seconds")


class Sitemap:
    """
    Ordered collection of ``URL`` entries rendered as a sitemaps.org urlset.

    Entries are stored by reference and read when the sitemap is rendered,
    so changes made to an entry after ``add()`` show up in the output.

    With ``strict=True`` rendering also rejects change frequencies and
    priorities outside ``URL.CHANGE_FREQUENCIES`` / ``URL.PRIORITIES``.
    """

    def __init__(self, timezone: str = DEFAULT_TIMEZONE, strict: bool = False) -> None:
        self.timezone = timezone
        self.strict = strict
        self.entries: List[URL] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[URL]:
        return iter(self.entries)

    def add(self, url: URL) -> "Sitemap":
        self.entries.append(url)
        return self

    def extend(self, urls: Iterable[URL]) -> "Sitemap":
        for url in urls:
            self.add(url)
        return self

    def _check_strict(self, url: URL) -> None:
        if _is_set(url.change_frequency):
            is_valid, msg = validate_change_frequency(_text(url.change_frequency))
            if not is_valid:
                raise InvalidInput(f"{url.location}: {msg}")
        if _is_set(url.priority):
            is_valid, msg = validate_priority(_text(url.priority))
            if not is_valid:
                raise InvalidInput(f"{url.location}: {msg}")

    def _render(self) -> str:
        content = [XML_DECLARATION, f'<urlset xmlns="{SITEMAP_NAMESPACE}">']

        for url in self.entries:
            if self.strict:
                self._check_strict(url)

            content.append("<url>")
            content.append(f"<loc>{escape(_text(url.location))}</loc>")
            if _is_set(url.last_modified):
                lastmod = normalize_lastmod(url.last_modified, self.timezone)
                content.append(f"<lastmod>{lastmod}</lastmod>")
            if _is_set(url.change_frequency):
                content.append(f"<changefreq>{escape(_text(url.change_frequency))}</changefreq>")
            if _is_set(url.priority):
                content.append(f"<priority>{escape(_text(url.priority))}</priority>")
            content.append("</url>")

        content.append("</urlset>")
        return "".join(content)

    def get(self) -> str:
        """Return the sitemap XML as a string."""
        return self._render()

    def stream(self, writer: ResponseWriter) -> None:
        """
        Send the sitemap as the whole body of an HTTP response.

        The writer is ended afterwards; nothing else may be written to it.
        Rendering happens before any header is set, so a bad entry leaves
        the response untouched.
        """
        xml = self._render()
        writer.set_header("Content-Type", CONTENT_TYPE)
        writer.write_body(xml)
        writer.end()
        logger.debug(f"Streamed sitemap with {len(self.entries)} URLs")

    def save(self, path: Union[str, "os.PathLike[str]"]) -> None:
        """
        Write the sitemap to ``path``, replacing any existing content.

        Raises:
            InvalidInput: if an entry cannot be rendered (the file is not touched)
            OSError: if the file cannot be written
        """
        xml = self._render()
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(xml)
        except OSError as e:
            logger.error(f"Failed to save the sitemap to {path}: {e}")
            raise
        logger.info(f"Wrote sitemap with {len(self.entries)} URLs to {os.fspath(path)}")
