"""
Exception hierarchy for the SEO intelligence engine.

Only aggregate failures ever reach callers as a top-level status. Everything
below is raised internally and absorbed by the agent runner or the plan
generator, which degrade to fallback output instead.
"""

from typing import Optional


class SEOIntelligenceError(Exception):
    """Base class for all engine errors."""


class TextGenerationError(SEOIntelligenceError):
    """The generative text service failed or returned nothing usable."""

    def __init__(self, message: str, agent_type: Optional[str] = None):
        super().__init__(message)
        self.agent_type = agent_type


class OutputParseError(SEOIntelligenceError):
    """Model output could not be parsed into the expected structure."""

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output


class InvalidTransitionError(SEOIntelligenceError):
    """An AgentResult was moved along an illegal status transition."""


class UnknownAgentTypeError(SEOIntelligenceError, ValueError):
    """No pipeline is registered for the requested agent type."""
