"""
MailChain

Chain-of-responsibility processing for sender/recipient/body messages:
a source reads messages, stages filter and duplicate them, a sink writes them.
"""

__version__ = "0.1.0"

from mailchain.message import Message
from mailchain.core.pipeline import PipelineBuilder, Stage

__all__ = ["Message", "PipelineBuilder", "Stage", "__version__"]
