"""
Input Data Models

Immutable inputs produced by the upstream measurement subsystem:
- BusinessContext: what the business is and where it operates
- BaselineMetrics: page speed, technical audit, keywords, competitors, SERP presence

Both are shared by reference across all agents and the plan generator, so every
record is frozen and every sequence is a tuple.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


def _tuple_of_str(values: Any) -> Tuple[str, ...]:
    if not values:
        return ()
    return tuple(str(v) for v in values if v is not None)


def _number(value: Any, default: float = 0) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, accepting camelCase and snake_case payloads."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


# =============================================================================
# BUSINESS CONTEXT
# =============================================================================


@dataclass(frozen=True)
class BusinessContext:
    """Business profile of the analyzed property."""
    domain: str = ""
    business_type: str = "business"
    industry: str = "general"
    location: str = "United States"
    products: Tuple[str, ...] = ()
    services: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    description: str = ""

    @property
    def offering_count(self) -> int:
        return len(self.products) + len(self.services)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], domain: str = "") -> "BusinessContext":
        return cls(
            domain=_pick(data, "domain", default=domain) or domain,
            business_type=_pick(data, "businessType", "business_type", default="business"),
            industry=_pick(data, "industry", default="general"),
            location=_pick(data, "location", default="United States"),
            products=_tuple_of_str(data.get("products")),
            services=_tuple_of_str(data.get("services")),
            keywords=_tuple_of_str(data.get("keywords")),
            description=_pick(data, "description", default=""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "business_type": self.business_type,
            "industry": self.industry,
            "location": self.location,
            "products": list(self.products),
            "services": list(self.services),
            "keywords": list(self.keywords),
            "description": self.description,
        }


# =============================================================================
# BASELINE METRICS
# =============================================================================


@dataclass(frozen=True)
class TechnicalIssue:
    """One issue from the baseline technical audit."""
    title: str
    description: str = ""
    impact: str = "medium"  # "high", "medium", "low"


@dataclass(frozen=True)
class TechnicalSEO:
    score: float = 0
    issues: Tuple[TechnicalIssue, ...] = ()

    @property
    def critical_issues(self) -> Tuple[TechnicalIssue, ...]:
        return tuple(i for i in self.issues if i.impact == "high")


@dataclass(frozen=True)
class PageSpeed:
    """Lighthouse-style page speed measurements (scores 0-100, timings in seconds)."""
    mobile: float = 0
    desktop: float = 0
    first_contentful_paint: float = 0
    largest_contentful_paint: float = 0
    cumulative_layout_shift: float = 0


@dataclass(frozen=True)
class KeywordMetric:
    keyword: str
    volume: int = 0
    difficulty: str = "medium"  # "high", "medium", "low"


@dataclass(frozen=True)
class CompetitorMetric:
    name: str
    score: float = 0
    ranking: int = 0


@dataclass(frozen=True)
class SERPPresence:
    """Which result types the property currently appears in."""
    organic_results: Tuple[Dict[str, Any], ...] = ()
    maps_found: bool = False
    featured_snippets_found: bool = False
    knowledge_panel_found: bool = False
    news_found: bool = False
    video_found: bool = False
    images_found: bool = False

    def feature_flags(self) -> Dict[str, bool]:
        return {
            "featured_snippets": self.featured_snippets_found,
            "knowledge_panel": self.knowledge_panel_found,
            "maps": self.maps_found,
            "news": self.news_found,
            "video": self.video_found,
            "images": self.images_found,
        }


@dataclass(frozen=True)
class MarketPosition:
    rank: int = 0
    total_competitors: int = 0
    market_share: Optional[float] = None


@dataclass(frozen=True)
class BaselineMetrics:
    """Baseline measurements consumed read-only by every agent."""
    seo_score: float = 0
    technical_seo: TechnicalSEO = field(default_factory=TechnicalSEO)
    page_speed: PageSpeed = field(default_factory=PageSpeed)
    keywords: Tuple[KeywordMetric, ...] = ()
    competitors: Tuple[CompetitorMetric, ...] = ()
    serp_presence: SERPPresence = field(default_factory=SERPPresence)
    market_position: MarketPosition = field(default_factory=MarketPosition)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaselineMetrics":
        """Build from the camelCase payload of the measurement subsystem."""
        technical = _pick(data, "technicalSeo", "technical_seo", default={}) or {}
        speed = _pick(data, "pageSpeed", "page_speed", default={}) or {}
        serp = _pick(data, "serpPresence", "serp_presence", default={}) or {}
        market = _pick(data, "marketPosition", "market_position", default={}) or {}

        def found(key: str, snake: str) -> bool:
            section = _pick(serp, key, snake, default={}) or {}
            return bool(section.get("found", False))

        return cls(
            seo_score=_number(_pick(data, "seoScore", "seo_score")),
            technical_seo=TechnicalSEO(
                score=_number(technical.get("score")),
                issues=tuple(
                    TechnicalIssue(
                        title=issue.get("title", ""),
                        description=issue.get("description", ""),
                        impact=issue.get("impact", "medium"),
                    )
                    for issue in technical.get("issues", []) or []
                ),
            ),
            page_speed=PageSpeed(
                mobile=_number(speed.get("mobile")),
                desktop=_number(speed.get("desktop")),
                first_contentful_paint=_number(
                    _pick(speed, "firstContentfulPaint", "first_contentful_paint")
                ),
                largest_contentful_paint=_number(
                    _pick(speed, "largestContentfulPaint", "largest_contentful_paint")
                ),
                cumulative_layout_shift=_number(
                    _pick(speed, "cumulativeLayoutShift", "cumulative_layout_shift")
                ),
            ),
            keywords=tuple(
                KeywordMetric(
                    keyword=kw.get("keyword", ""),
                    volume=int(_number(kw.get("volume"))),
                    difficulty=kw.get("difficulty", "medium"),
                )
                for kw in data.get("keywords", []) or []
            ),
            competitors=tuple(
                CompetitorMetric(
                    name=comp.get("name", ""),
                    score=_number(comp.get("score")),
                    ranking=int(_number(comp.get("ranking"))),
                )
                for comp in data.get("competitors", []) or []
            ),
            serp_presence=SERPPresence(
                organic_results=tuple(
                    _pick(serp, "organicResults", "organic_results", default=[]) or []
                ),
                maps_found=found("mapsResults", "maps_results"),
                featured_snippets_found=found("featuredSnippets", "featured_snippets"),
                knowledge_panel_found=found("knowledgePanel", "knowledge_panel"),
                news_found=found("newsResults", "news_results"),
                video_found=found("videoResults", "video_results"),
                images_found=found("imagesResults", "images_results"),
            ),
            market_position=MarketPosition(
                rank=int(_number(market.get("rank"))),
                total_competitors=int(
                    _number(_pick(market, "totalCompetitors", "total_competitors"))
                ),
                market_share=_pick(market, "marketShare", "market_share"),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seo_score": self.seo_score,
            "technical_seo": {
                "score": self.technical_seo.score,
                "issues": [
                    {"title": i.title, "description": i.description, "impact": i.impact}
                    for i in self.technical_seo.issues
                ],
            },
            "page_speed": {
                "mobile": self.page_speed.mobile,
                "desktop": self.page_speed.desktop,
                "first_contentful_paint": self.page_speed.first_contentful_paint,
                "largest_contentful_paint": self.page_speed.largest_contentful_paint,
                "cumulative_layout_shift": self.page_speed.cumulative_layout_shift,
            },
            "keywords": [
                {"keyword": k.keyword, "volume": k.volume, "difficulty": k.difficulty}
                for k in self.keywords
            ],
            "competitors": [
                {"name": c.name, "score": c.score, "ranking": c.ranking}
                for c in self.competitors
            ],
            "serp_presence": {
                "organic_results": list(self.serp_presence.organic_results),
                **{f"{name}_found": flag for name, flag in self.serp_presence.feature_flags().items()},
            },
            "market_position": {
                "rank": self.market_position.rank,
                "total_competitors": self.market_position.total_competitors,
                "market_share": self.market_position.market_share,
            },
        }
