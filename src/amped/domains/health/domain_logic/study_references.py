"""Research citations backing each metric's impact curve."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from amped.domains.health.domain_logic.impact_models import MetricType

logger = logging.getLogger(__name__)

DEFAULT_REFERENCES_PATH = Path(__file__).resolve().parent.parent / "data" / "study_references.yaml"


@dataclass(frozen=True)
class StudyReference:
    title: str
    authors: str
    journal: str
    year: int
    summary: str
    doi: str | None = None
    url: str | None = None

    @property
    def citation(self) -> str:
        return f"{self.authors} ({self.year}). {self.title}. {self.journal}."

    @property
    def short_citation(self) -> str:
        parts = [p.strip() for p in self.authors.split(",")]
        if len(parts) > 1:
            return f"{parts[0]} et al., {self.year}"
        return f"{parts[0]}, {self.year}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "authors": self.authors,
            "journal": self.journal,
            "year": self.year,
            "doi": self.doi,
            "url": self.url,
            "summary": self.summary,
            "citation": self.citation,
            "short_citation": self.short_citation,
        }


def load_study_references(path: str | Path) -> dict[MetricType, StudyReference]:
    """Parse a citations YAML file keyed by metric wire name."""
    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    references: dict[MetricType, StudyReference] = {}
    for key, entry in data.items():
        try:
            metric_type = MetricType(key)
        except ValueError:
            logger.warning("Skipping citation for unknown metric %r in %s", key, path)
            continue
        references[metric_type] = StudyReference(
            title=entry["title"],
            authors=entry["authors"],
            journal=entry["journal"],
            year=int(entry["year"]),
            summary=entry["summary"].strip(),
            doi=entry.get("doi"),
            url=entry.get("url"),
        )
    logger.debug("Loaded %d study references from %s", len(references), path)
    return references


@lru_cache(maxsize=1)
def _default_references() -> Mapping[MetricType, StudyReference]:
    return MappingProxyType(load_study_references(DEFAULT_REFERENCES_PATH))


def get_study_reference(metric_type: MetricType) -> StudyReference | None:
    return _default_references().get(metric_type)


def all_study_references() -> Mapping[MetricType, StudyReference]:
    return _default_references()
