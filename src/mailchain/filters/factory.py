"""
Filter Factory for creating filter instances from configuration.

Provides a central registry so filters can be described in configuration
files or on the command line.
"""

from typing import Any, Dict, List, Optional, Type, Union

from mailchain.filters.address import RecipientFilter, SenderFilter
from mailchain.filters.base import Filter, FilterChain, FilterComposition
from mailchain.filters.keyword import KeywordFilter


class FilterFactory:
    """
    Factory class for creating filter instances from configuration.

    Supports creating individual filters and filter chains with composition logic.
    """

    FILTER_REGISTRY: Dict[str, Type[Filter]] = {
        'sender': SenderFilter,
        'recipient': RecipientFilter,
        'keyword': KeywordFilter,
    }

    @classmethod
    def available_types(cls) -> List[str]:
        return sorted(cls.FILTER_REGISTRY)

    @classmethod
    def create_filter(cls, filter_type: str, config: Optional[Dict[str, Any]] = None) -> Filter:
        """
        Create a single filter instance.

        Args:
            filter_type: Type of filter to create
            config: Configuration for the filter

        Returns:
            Filter instance

        Raises:
            ValueError: If filter type is unknown or its configuration is invalid
        """
        if not isinstance(filter_type, str) or filter_type not in cls.FILTER_REGISTRY:
            available_types = ', '.join(cls.available_types())
            raise ValueError(f"Unknown filter type '{filter_type}'. Available types: {available_types}")

        filter_class = cls.FILTER_REGISTRY[filter_type]
        return filter_class(config)

    @classmethod
    def create_filter_chain(
        cls,
        filter_configs: List[Dict[str, Any]],
        composition: Union[str, FilterComposition] = FilterComposition.AND
    ) -> FilterChain:
        """
        Create a filter chain from a list of filter configurations.

        Each entry looks like ``{'type': 'sender', 'config': {...}}``.

        Args:
            filter_configs: List of filter configuration dictionaries
            composition: How to combine filters ('and', 'or', or FilterComposition)

        Returns:
            FilterChain instance

        Raises:
            ValueError: If configuration is invalid
        """
        if isinstance(composition, str):
            try:
                composition = FilterComposition(composition.lower())
            except ValueError:
                raise ValueError(f"Unknown filter composition '{composition}'. Use 'and' or 'or'")

        filters = []
        for i, filter_config in enumerate(filter_configs):
            if not isinstance(filter_config, dict):
                raise ValueError(f"Filter configuration {i} must be a mapping")
            if 'type' not in filter_config:
                raise ValueError(f"Filter configuration {i} missing 'type' field")
            settings = filter_config.get('config') or {}
            if not isinstance(settings, dict):
                raise ValueError(f"Filter configuration {i} has a 'config' that is not a mapping")
            try:
                filters.append(cls.create_filter(filter_config['type'], settings))
            except ValueError as e:
                raise ValueError(f"Error creating filter {i}: {e}") from e

        return FilterChain(filters, composition)

