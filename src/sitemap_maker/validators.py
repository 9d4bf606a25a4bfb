"""
输入验证工具
Checks for sitemap fields and for raw config files.

Every check returns ``(is_valid, error_message)``; callers decide whether a
failure is fatal.
"""
from __future__ import annotations

import re
from typing import List, Tuple

from dateutil import tz

_LOCATION_RE = re.compile(r"^[A-Za-z]+://")

CHANGE_FREQUENCIES: Tuple[str, ...] = (
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
)

PRIORITIES: Tuple[str, ...] = tuple(f"{i / 10:.1f}" for i in range(10, -1, -1))


def validate_location(location: str) -> Tuple[bool, str]:
    """
    The location must start with a letters-only scheme followed by ``://``.

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(location, str) or not location:
        return False, "Location must be a non-empty string"
    if not _LOCATION_RE.match(location):
        return False, f"Invalid URL (expected scheme://...): {location}"
    return True, ""


def validate_change_frequency(value: str) -> Tuple[bool, str]:
    if value not in CHANGE_FREQUENCIES:
        return False, (
            f"Invalid change frequency {value!r}; "
            f"expected one of: {', '.join(CHANGE_FREQUENCIES)}"
        )
    return True, ""


def validate_priority(value: str) -> Tuple[bool, str]:
    if value not in PRIORITIES:
        return False, f"Invalid priority {value!r}; expected 0.0 to 1.0 in 0.1 steps"
    return True, ""


def validate_timezone(name: str) -> Tuple[bool, str]:
    """
    Check that ``name`` resolves in the timezone database.

    An empty name is rejected: ``dateutil`` would silently map it to the
    local zone.
    """
    if not isinstance(name, str) or not name.strip():
        return False, "Timezone name must be a non-empty string"
    if tz.gettz(name) is None:
        return False, f"Unknown timezone: {name}"
    return True, ""


def validate_config_basic(config_dict: dict) -> List[str]:
    """
    验证配置的基本结构

    Returns:
        List of error messages (empty list means the config is usable)
    """
    errors: List[str] = []

    if not isinstance(config_dict, dict):
        errors.append("Config file must be a YAML mapping")
        return errors

    settings = config_dict.get("sitemap") or {}
    if not isinstance(settings, dict):
        errors.append("'sitemap' must be a mapping")
    else:
        timezone = settings.get("timezone")
        if timezone is not None:
            is_valid, msg = validate_timezone(str(timezone))
            if not is_valid:
                errors.append(f"'sitemap.timezone' {msg}")

        strict = settings.get("strict")
        if strict is not None and not isinstance(strict, bool):
            errors.append(f"'sitemap.strict' must be true or false, got {strict!r}")

    if "urls" not in config_dict:
        errors.append("Config is missing the 'urls' section")
        return errors

    urls = config_dict.get("urls")
    if not isinstance(urls, list):
        errors.append("'urls' must be a list")
        return errors

    for i, entry in enumerate(urls):
        if isinstance(entry, str):
            entry = {"loc": entry}
        if not isinstance(entry, dict):
            errors.append(f"'urls[{i}]' must be a string or a mapping")
            continue

        loc = entry.get("loc")
        if not loc:
            errors.append(f"'urls[{i}].loc' is required")
        else:
            is_valid, msg = validate_location(str(loc))
            if not is_valid:
                errors.append(f"'urls[{i}].loc' {msg}")

        changefreq = entry.get("changefreq")
        if changefreq and not isinstance(changefreq, str):
            errors.append(f"'urls[{i}].changefreq' must be a string")

        priority = entry.get("priority")
        if priority is not None and not isinstance(priority, (str, int, float)):
            errors.append(f"'urls[{i}].priority' must be a number or a string")

    output = config_dict.get("output") or {}
    if not isinstance(output, dict):
        errors.append("'output' must be a mapping")

    return errors
