"""
Abstract Filter Base Classes

Defines the interface for message filters. A filter is a callable
``Message -> bool`` so it can be handed straight to
``PipelineBuilder.filter_by``; ``apply`` additionally explains the decision.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from mailchain.message import Message


class FilterComposition(Enum):
    """How to combine multiple filters."""
    AND = "and"  # All filters must pass
    OR = "or"    # At least one filter must pass


@dataclass
class FilterResult:
    """
    Result of applying a filter to a message.

    Attributes:
        passed: Whether the message passed the filter
        reason: Human-readable reason for pass/fail
        metadata: Additional filter-specific metadata
        execution_time: Time taken to apply filter (seconds)
    """
    passed: bool
    reason: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    execution_time: float = 0.0


class Filter(ABC):
    """
    Abstract base class for all message filters.

    Filters must not modify the message they inspect.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the filter with configuration.

        Args:
            config: Filter configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the filter."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the filter does."""
        pass

    @abstractmethod
    def apply(self, message: Message) -> FilterResult:
        """
        Apply the filter to a message.

        Args:
            message: Message to inspect

        Returns:
            FilterResult indicating whether the message passed the filter
        """
        pass

    def __call__(self, message: Message) -> bool:
        return self.apply(message).passed

    def validate_config(self) -> List[str]:
        """
        Validate the filter configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        return []

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config})"


class FilterChain:
    """
    Chains multiple filters together with AND/OR logic.

    Evaluation stops at the first filter that decides the outcome. An
    empty chain lets every message through.
    """

    def __init__(self, filters: List[Filter], composition: FilterComposition = FilterComposition.AND):
        """
        Initialize the filter chain.

        Args:
            filters: List of filters to chain together
            composition: How to combine filter results (AND/OR)
        """
        self.filters = filters
        self.composition = composition
        self.logger = logging.getLogger(__name__)

    @property
    def description(self) -> str:
        if not self.filters:
            return "No filters (all messages pass)"
        joiner = f" {self.composition.value.upper()} "
        return joiner.join(f"({f.description})" for f in self.filters)

    def apply(self, message: Message) -> FilterResult:
        """
        Apply all filters in the chain to a message.

        Args:
            message: Message to inspect

        Returns:
            FilterResult indicating whether the message passed the chain
        """
        start_time = time.time()

        if not self.filters:
            return FilterResult(
                passed=True,
                reason="No filters in chain",
                execution_time=time.time() - start_time
            )

        results = []
        for filter_instance in self.filters:
            result = filter_instance.apply(message)
            results.append(result)

            if self.composition == FilterComposition.AND and not result.passed:
                break
            if self.composition == FilterComposition.OR and result.passed:
                break

        if self.composition == FilterComposition.AND:
            passed = all(r.passed for r in results)
        else:
            passed = any(r.passed for r in results)

        reasons = [r.reason for r in results if r.reason]
        return FilterResult(
            passed=passed,
            reason="; ".join(reasons),
            metadata={
                'composition': self.composition.value,
                'filters_evaluated': len(results),
                'filters_total': len(self.filters),
            },
            execution_time=time.time() - start_time
        )

    def __call__(self, message: Message) -> bool:
        return self.apply(message).passed

    def __len__(self) -> int:
        return len(self.filters)
