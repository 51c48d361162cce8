"""
Analyzer Module

- client: TextGenerator protocol and the Claude implementation
- coordinator: concurrent fan-out over the six agents
- engine: full run producing a ComprehensiveAnalysis
"""

from .client import ClaudeClient, TextGenerator, TokenUsage
from .coordinator import MultiAgentCoordinator
from .engine import AnalysisEngine

__all__ = [
    "ClaudeClient",
    "TextGenerator",
    "TokenUsage",
    "MultiAgentCoordinator",
    "AnalysisEngine",
]
