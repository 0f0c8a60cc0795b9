"""
Real-time Package - Live data from Brazilian public-sector APIs.

Sources, in result order:
- Câmara dos Deputados: bills in progress, deputies
- Senado Federal: senators in office
- TSE: pointer to official election data
- Planalto: pointer to this year's laws and decrees

Example:
    >>> from civic_chat.realtime import RealTimeAggregator, render_bundle_context
    >>> aggregator = RealTimeAggregator()
    >>> bundle = aggregator.fetch("projetos em tramitação na câmara")
    >>> prompt_suffix = render_bundle_context(bundle)
"""
from civic_chat.realtime.aggregator import (
    NOTE_WITH_RESULTS,
    NOTE_WITHOUT_RESULTS,
    RealTimeAggregator,
)
from civic_chat.realtime.context import render_bundle_context
from civic_chat.realtime.models import RealTimeBundle, RealTimeResult
from civic_chat.realtime.sources import (
    OFFICIAL_SOURCES,
    REALTIME_KEYWORDS,
    SOURCES,
    needs_augmentation,
)

__all__ = [
    "NOTE_WITH_RESULTS",
    "NOTE_WITHOUT_RESULTS",
    "OFFICIAL_SOURCES",
    "REALTIME_KEYWORDS",
    "SOURCES",
    "RealTimeAggregator",
    "RealTimeBundle",
    "RealTimeResult",
    "needs_augmentation",
    "render_bundle_context",
]
