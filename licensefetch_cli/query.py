"""Listing and lookup of registry licenses."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .errors import RetrievalError
from .registry import LicenseRecord, LicenseRegistry, LicenseSummary

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    records: List[LicenseRecord] = field(default_factory=list)
    failures: Dict[str, RetrievalError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def list_all(registry: LicenseRegistry) -> List[LicenseSummary]:
    return list(registry.fetch_all())


def get_one(registry: LicenseRegistry, keys: Sequence[str]) -> List[LicenseRecord]:
    """Fetch each key in order; the first failure aborts the whole batch."""
    return [registry.fetch_one(key) for key in keys]


def collect_records(registry: LicenseRegistry, keys: Sequence[str]) -> QueryResult:
    """Fetch each key in order, keeping the successes when some keys fail."""
    result = QueryResult()
    for key in keys:
        try:
            result.records.append(registry.fetch_one(key))
        except RetrievalError as exc:
            logger.debug("Skipping %s: %s", key, exc)
            result.failures[key] = exc
    return result


def format_summaries(summaries: Sequence[LicenseSummary]) -> str:
    if not summaries:
        return ""
    width = max(len(summary.key) for summary in summaries)
    lines = [f"{summary.key.ljust(width)} - {summary.name} - {summary.url}" for summary in summaries]
    return "\n".join(lines) + "\n"


def format_record(record: LicenseRecord) -> str:
    def tags(values: Iterable[str]) -> str:
        return ", ".join(sorted(values)) or "-"

    lines = [
        f"key:          {record.key}",
        f"name:         {record.name}",
        f"spdx_id:      {record.spdx_id}",
        f"url:          {record.url}",
        f"html_url:     {record.html_url}",
        f"featured:     {'yes' if record.featured else 'no'}",
        f"description:  {record.description}",
        f"implementation: {record.implementation_notes}",
        f"permissions:  {tags(record.permissions)}",
        f"conditions:   {tags(record.conditions)}",
        f"limitations:  {tags(record.limitations)}",
        "",
        record.body.rstrip("\n"),
    ]
    return "\n".join(lines) + "\n"
