"""
Pipeline Infrastructure

The stage base class and the builder that links stages into a chain.
"""

from .interfaces import Stage, StageStats
from .builder import PipelineBuilder

__all__ = [
    'Stage',
    'StageStats',
    'PipelineBuilder'
]
