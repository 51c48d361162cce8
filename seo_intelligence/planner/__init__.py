"""
Plan synthesis: action plan, competitive intelligence, content strategy and
progress tracking, built from agent results.
"""

from .generator import ActionPlanGenerator, SynthesisReport, coerce_action_item
from .fallbacks import fallback_action_items
from .tracking import generate_progress_tracking

__all__ = [
    "ActionPlanGenerator",
    "SynthesisReport",
    "coerce_action_item",
    "fallback_action_items",
    "generate_progress_tracking",
]
