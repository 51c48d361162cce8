"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

import json
import pytest
from typing import Any, Dict, List, Optional, Tuple

from seo_intelligence.exceptions import TextGenerationError
from seo_intelligence.models import (
    AgentResult,
    AgentStatus,
    AgentType,
    BaselineMetrics,
    BusinessContext,
)


# ============================================================================
# Mock Data Fixtures
# ============================================================================

MOCK_BASELINE_PAYLOAD: Dict[str, Any] = {
    "seoScore": 58,
    "technicalSeo": {
        "score": 64,
        "issues": [
            {"title": "Missing meta descriptions", "description": "12 pages lack one", "impact": "high"},
            {"title": "Images without alt text", "description": "31 images affected", "impact": "medium"},
            {"title": "No structured data", "description": "No LocalBusiness schema", "impact": "low"},
        ],
    },
    "pageSpeed": {
        "mobile": 52,
        "desktop": 81,
        "firstContentfulPaint": 2.4,
        "largestContentfulPaint": 4.1,
        "cumulativeLayoutShift": 0.18,
    },
    "keywords": [
        {"keyword": "plumber austin", "volume": 2400, "difficulty": "high"},
        {"keyword": "drain cleaning austin", "volume": 590, "difficulty": "medium"},
        {"keyword": "emergency plumber near me", "volume": 1900, "difficulty": "low"},
    ],
    "competitors": [
        {"name": "austinplumbingpros.com", "score": 74, "ranking": 1},
        {"name": "capitalcityplumbing.com", "score": 66, "ranking": 2},
    ],
    "serpPresence": {
        "organicResults": [{"position": 14}],
        "mapsResults": {"found": True},
        "featuredSnippets": {"found": False},
        "knowledgePanel": {"found": False},
        "newsResults": {"found": False},
        "videoResults": {"found": True},
        "imagesResults": {"found": False},
    },
    "marketPosition": {"rank": 3, "totalCompetitors": 12},
}


@pytest.fixture
def business_context() -> BusinessContext:
    """Local service business used across tests."""
    return BusinessContext(
        domain="example-plumbing.com",
        business_type="plumber",
        industry="home services",
        location="Austin, Texas",
        services=("emergency plumbing", "drain cleaning", "water heater repair"),
        keywords=("plumber austin", "drain cleaning austin"),
        description="Family-owned plumbing company serving Austin since 1998.",
    )


@pytest.fixture
def baseline_payload() -> Dict[str, Any]:
    return json.loads(json.dumps(MOCK_BASELINE_PAYLOAD))


@pytest.fixture
def baseline_metrics(baseline_payload) -> BaselineMetrics:
    return BaselineMetrics.from_dict(baseline_payload)


# ============================================================================
# Generated Text Samples
# ============================================================================

# Bullet text avoids every section word so no bullet is read as a header
AGENT_RESPONSE = """Here is my analysis.

Key Findings:
- Hero image delays rendering on the homepage
- Service pages share duplicate title tags
- Contact page lacks a local phone number

Recommendations:
1. Compress the hero image below 150KB
2. Write unique title tags per service page
3. Add the phone number in the page header
"""

ACTION_ITEMS_JSON = json.dumps([
    {
        "id": "action_1",
        "title": "Fix duplicate title tags",
        "description": "Give every service page a unique title",
        "priority": "high",
        "impact": "high",
        "effort": "low",
        "category": "technical",
        "timeframe": "immediate",
        "steps": ["Step 1: List pages", "Step 2: Rewrite titles"],
        "tools": ["Google Search Console"],
        "expectedImprovement": "Higher click-through rate",
        "dependencies": [],
    },
    {
        "id": "action_2",
        "title": "Publish drain cleaning guide",
        "description": "Long-form guide targeting drain cleaning searches",
        "priority": "medium",
        "impact": "high",
        "effort": "medium",
        "category": "content",
        "timeframe": "this_month",
        "steps": ["Step 1: Outline", "Step 2: Write", "Step 3: Publish"],
        "expectedImprovement": "Rank for drain cleaning terms",
    },
    {
        "id": "action_3",
        "title": "Compress images",
        "description": "Reduce image weight site-wide",
        "priority": "urgent",
        "impact": "medium",
        "effort": "low",
        "category": "technical",
        "timeframe": "this_week",
    },
])

COMPETITIVE_JSON = json.dumps({
    "marketPosition": "Third of twelve local plumbers",
    "competitiveAdvantages": ["Family-owned reputation"],
    "competitiveGaps": ["Fewer reviews than the leader"],
    "opportunityAreas": ["Water heater content"],
})

CONTENT_JSON = json.dumps({
    "contentGaps": ["No water heater guide"],
    "topicClusters": [
        {"topic": "Drain Care", "keywords": ["drain cleaning", "clogged drain"], "priority": "high"},
        {"topic": "Water Heaters", "keywords": ["water heater repair"], "priority": "someday"},
    ],
    "contentCalendar": [
        {"week": "Week 1", "contentType": "Blog Post", "topic": "Clog prevention", "targetKeyword": "clogged drain"},
    ],
})

SUMMARY_TEXT = "Fixing titles and page speed could lift the site into the local top three."


# ============================================================================
# Mock Text Generators
# ============================================================================

class ScriptedGenerator:
    """
    Deterministic TextGenerator.

    Returns the response for the first marker found in the prompt, or the
    default agent response. Records every call.
    """

    def __init__(self, responses: Optional[Dict[str, str]] = None, default: str = AGENT_RESPONSE):
        self.responses = responses if responses is not None else {
            "Create a comprehensive SEO action plan": ACTION_ITEMS_JSON,
            "Generate a concise executive summary": SUMMARY_TEXT,
            "Analyze competitive positioning": COMPETITIVE_JSON,
            "Create a content strategy": CONTENT_JSON,
        }
        self.default = default
        self.calls: List[Tuple[str, int]] = []

    async def generate_text(self, prompt: str, max_tokens: int) -> str:
        self.calls.append((prompt, max_tokens))
        for marker, response in self.responses.items():
            if marker in prompt:
                return response
        return self.default


class FailingGenerator:
    """TextGenerator whose every call raises."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error or TextGenerationError("Service unavailable")
        self.calls = 0

    async def generate_text(self, prompt: str, max_tokens: int) -> str:
        self.calls += 1
        raise self.error


@pytest.fixture
def scripted_generator() -> ScriptedGenerator:
    return ScriptedGenerator()


@pytest.fixture
def failing_generator() -> FailingGenerator:
    return FailingGenerator()


@pytest.fixture
def network_down_generator() -> FailingGenerator:
    """Raises a plain connection error rather than TextGenerationError."""
    return FailingGenerator(ConnectionError("network down"))


# ============================================================================
# Agent Result Helpers
# ============================================================================

def make_result(
    agent_type: AgentType,
    status: AgentStatus = AgentStatus.COMPLETED,
    progress: Optional[int] = None,
    data: Optional[Dict[str, Any]] = None,
    findings: Optional[List[str]] = None,
) -> AgentResult:
    """Build an AgentResult in any state without walking its transitions."""
    if progress is None:
        progress = 100 if status == AgentStatus.COMPLETED else 0
    return AgentResult(
        agent_type=agent_type,
        status=status,
        progress=progress,
        data=data or {},
        findings=findings or [],
        error="boom" if status == AgentStatus.FAILED else None,
    )


# ============================================================================
# Test Markers
# ============================================================================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
