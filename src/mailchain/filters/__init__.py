"""
Filtering System for Messages

Composable predicates for the filter stage. Every filter is a callable
``Message -> bool`` and can be passed to ``PipelineBuilder.filter_by``.

Key Components:
- Filter: Abstract base class for all filters
- FilterChain: AND/OR composition of filters
- FilterFactory: Factory for creating filters from configuration
"""

from .base import Filter, FilterResult, FilterComposition, FilterChain
from .factory import FilterFactory
from .address import AddressFilter, SenderFilter, RecipientFilter
from .keyword import KeywordFilter

__all__ = [
    "Filter",
    "FilterResult",
    "FilterComposition",
    "FilterChain",
    "FilterFactory",
    "AddressFilter",
    "SenderFilter",
    "RecipientFilter",
    "KeywordFilter",
]
