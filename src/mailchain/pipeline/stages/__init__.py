"""
Pipeline Stage Implementations

Concrete stages that make up a message pipeline.
"""

from .source import SourceStage, PartialPolicy
from .filter import FilterStage
from .duplicate import DuplicateStage
from .sink import SinkStage

__all__ = [
    'SourceStage',
    'PartialPolicy',
    'FilterStage',
    'DuplicateStage',
    'SinkStage'
]
