"""
Run Registry

In-memory store of ComprehensiveAnalysis records keyed by run id, read by
external pollers while the engine updates them.
"""

import logging
import threading
import time
from typing import Dict, List, Optional

from ..models import ComprehensiveAnalysis

logger = logging.getLogger(__name__)


def new_run_id(domain: str) -> str:
    """Run ids look like comprehensive_<domain>_<epoch ms>."""
    return f"comprehensive_{domain}_{int(time.time() * 1000)}"


class AnalysisRunStore:
    """
    Thread-safe registry of analysis runs.

    Records are stored by reference; the engine mutates a record and calls
    save() at each milestone, so readers always see the latest state.
    """

    new_run_id = staticmethod(new_run_id)

    def __init__(self):
        self._runs: Dict[str, ComprehensiveAnalysis] = {}
        self._lock = threading.Lock()

    def create(self, run_id: str, domain: str = "") -> ComprehensiveAnalysis:
        analysis = ComprehensiveAnalysis(id=run_id, domain=domain)
        with self._lock:
            if run_id in self._runs:
                raise ValueError(f"Run {run_id} already exists")
            self._runs[run_id] = analysis
        logger.info(f"Created run {run_id} for {domain}")
        return analysis

    def save(self, analysis: ComprehensiveAnalysis) -> None:
        with self._lock:
            self._runs[analysis.id] = analysis

    def get(self, run_id: str) -> Optional[ComprehensiveAnalysis]:
        with self._lock:
            return self._runs.get(run_id)

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._runs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._runs)
