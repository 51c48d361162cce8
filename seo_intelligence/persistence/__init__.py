"""
Persistence Module

In-memory run registry for pollers, and the caller-side rate limiter.
"""

from .runs import AnalysisRunStore, new_run_id
from .rate_limit import FixedWindowRateLimiter

__all__ = [
    "AnalysisRunStore",
    "new_run_id",
    "FixedWindowRateLimiter",
]
