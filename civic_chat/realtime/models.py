"""
Data structures for live public-data lookups.

A RealTimeBundle is built fresh for every request and owned by the
caller that asked for it.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RealTimeResult:
    """
    What one public source contributed.

    Attributes:
        source: Institution name, e.g. "Senado Federal"
        kind: Kind of data, e.g. "senadores"
        payload: Up to a few items from the upstream API, if any
        note: Informational text for sources without an API call
        reference_url: Official site for the user to check
    """
    source: str
    kind: str
    payload: Optional[List[Dict[str, Any]]] = None
    note: Optional[str] = None
    reference_url: Optional[str] = None


@dataclass
class RealTimeBundle:
    """
    Results of one aggregated lookup, in fixed source order.

    Attributes:
        generated_at: RFC 3339 timestamp
        generated_at_display: Human readable timestamp
        results: One entry per source that produced something
        note: Overall observation shown with the results
    """
    generated_at: str
    generated_at_display: str
    results: List[RealTimeResult] = field(default_factory=list)
    note: str = ""

    @property
    def result_count(self) -> int:
        return len(self.results)
