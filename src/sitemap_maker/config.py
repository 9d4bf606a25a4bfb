from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .sitemap import DEFAULT_TIMEZONE, Sitemap
from .url import URL
from .validators import validate_config_basic


@dataclass
class SitemapSettings:
    timezone: str = DEFAULT_TIMEZONE
    # 是否拒绝不在推荐集合内的 changefreq / priority
    strict: bool = False


@dataclass
class UrlConfig:
    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[str] = None


@dataclass
class OutputConfig:
    path: str = "sitemap.xml"


@dataclass
class AppConfig:
    sitemap: SitemapSettings
    urls: List[UrlConfig] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)


def _load_raw_config(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _priority_str(value: Any) -> Optional[str]:
    # YAML reads an unquoted 0.5 as a float and 1 as an int
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{float(value):.1f}"
    return _optional_str(value)


def load_config(path: Path, validate: bool = True) -> AppConfig:
    raw = _load_raw_config(path)

    if validate:
        errors = validate_config_basic(raw)
        if errors:
            raise ValueError("\n".join(errors))

    settings_raw = raw.get("sitemap") or {}
    settings = SitemapSettings(
        timezone=str(settings_raw.get("timezone") or DEFAULT_TIMEZONE),
        # only a YAML boolean true turns strict mode on
        strict=settings_raw.get("strict", False) is True,
    )

    urls: List[UrlConfig] = []
    for entry in raw.get("urls") or []:
        if isinstance(entry, str):
            entry = {"loc": entry}
        if not isinstance(entry, dict) or not entry.get("loc"):
            continue
        urls.append(
            UrlConfig(
                loc=str(entry["loc"]),
                lastmod=_optional_str(entry.get("lastmod")),
                changefreq=_optional_str(entry.get("changefreq")),
                priority=_priority_str(entry.get("priority")),
            )
        )

    output_raw = raw.get("output") or {}
    output = OutputConfig(path=str(output_raw.get("path") or "sitemap.xml"))

    return AppConfig(sitemap=settings, urls=urls, output=output)


def build_sitemap(config: AppConfig) -> Sitemap:
    """Create a Sitemap holding one URL per config entry, in file order."""
    sitemap = Sitemap(timezone=config.sitemap.timezone, strict=config.sitemap.strict)
    for entry in config.urls:
        sitemap.add(
            URL(
                entry.loc,
                change_frequency=entry.changefreq,
                priority=entry.priority,
                last_modified=entry.lastmod,
            )
        )
    return sitemap
