"""Render a registry license with local values and write it to disk."""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .errors import WriteError
from .identity import GitIdentityProvider, IdentityProvider, default_year
from .registry import LicenseRegistry

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "./LICENSE"

Values = Dict[str, str]


@dataclass(frozen=True)
class InstallRequest:
    key: str
    target_path: str = DEFAULT_TARGET
    author: Optional[str] = None
    year: Optional[str] = None
    company: Optional[str] = None
    project: Optional[str] = None
    raw: bool = False


@dataclass(frozen=True)
class PlaceholderRule:
    tokens: Sequence[str]
    source: str


GNU_RULES: Tuple[PlaceholderRule, ...] = (
    PlaceholderRule(("<year>",), "year"),
    PlaceholderRule(("<name of author>",), "author"),
    PlaceholderRule(("<program>",), "project"),
)
APACHE_RULES: Tuple[PlaceholderRule, ...] = (
    PlaceholderRule(("[yyyy]",), "year"),
    PlaceholderRule(("[name of copyright owner]",), "holder"),
)
PERMISSIVE_RULES: Tuple[PlaceholderRule, ...] = (
    PlaceholderRule(("[year]",), "year"),
    PlaceholderRule(("[fullname]",), "holder"),
)


def _family(keys: Sequence[str], rules: Tuple[PlaceholderRule, ...]) -> Dict[str, Tuple[PlaceholderRule, ...]]:
    return {key: rules for key in keys}


PLACEHOLDER_RULES: Mapping[str, Tuple[PlaceholderRule, ...]] = {
    **_family(("agpl-3.0", "gpl-2.0", "gpl-3.0", "lgpl-2.1"), GNU_RULES),
    **_family(("apache-2.0",), APACHE_RULES),
    **_family(("mit", "bsd-2-clause", "bsd-3-clause-clear", "bsd-3-clause"), PERMISSIVE_RULES),
}


def rules_for(key: str) -> Tuple[PlaceholderRule, ...]:
    return PLACEHOLDER_RULES.get(key.lower(), ())


def apply_rules(text: str, rules: Sequence[PlaceholderRule], values: Mapping[str, str]) -> str:
    for rule in rules:
        value = values.get(rule.source) or ""
        for token in rule.tokens:
            text = text.replace(token, value)
    return text


def render_license(body: str, key: str, values: Mapping[str, str]) -> str:
    """Substitute the placeholders known for ``key``; unknown keys pass through."""
    rules = rules_for(key)
    if not rules:
        logger.debug("No placeholder rules for %s; leaving text unchanged", key)
        return body
    return apply_rules(body, rules, values)


def resolve_values(
    request: InstallRequest,
    identity: Optional[IdentityProvider] = None,
    today: Optional[_dt.date] = None,
) -> Values:
    author = request.author
    if author is None:
        author = (identity or GitIdentityProvider()).author_name()
    year = request.year if request.year is not None else default_year(today)
    company = request.company or ""
    return {
        "author": author,
        "year": year,
        "project": request.project or "",
        "company": company,
        "holder": company or author,
    }


def write_license(path: Path, text: str) -> None:
    """Write ``text`` as UTF-8; an existing file is untouched if encoding fails."""
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise WriteError(path, f"text is not valid UTF-8 ({exc.reason})") from exc
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc


def install(
    request: InstallRequest,
    registry: LicenseRegistry,
    identity: Optional[IdentityProvider] = None,
    today: Optional[_dt.date] = None,
) -> Path:
    """Fetch ``request.key`` and write the rendered text to ``request.target_path``.

    Nothing is written when the fetch fails. Raw requests skip default
    resolution.
    """
    key = request.key.lower()
    target = Path(request.target_path or DEFAULT_TARGET).expanduser()
    values = {} if request.raw else resolve_values(request, identity, today)
    record = registry.fetch_one(key)
    if request.raw:
        text = record.body
    else:
        logger.debug("Rendering %s with %d rule(s)", key, len(rules_for(key)))
        text = render_license(record.body, key, values)
    write_license(target, text)
    logger.debug("Wrote %d characters to %s", len(text), target)
    return target
