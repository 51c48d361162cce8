#!/usr/bin/env python3
"""
Comprehensive Analysis Runner

Runs the six analysis agents and plan synthesis for one site, using
business context and baseline metrics collected upstream.

Usage:
    # Set environment variables first:
    export ANTHROPIC_API_KEY=your_key

    # Run analysis:
    python scripts/run_analysis.py scripts/example_input.json

    # With options:
    python scripts/run_analysis.py scripts/example_input.json \
        --domain example.com \
        --output analysis.json

The input file holds two objects, in the camelCase shape produced by the
measurement service:
    {"domain": "...", "businessContext": {...}, "baselineMetrics": {...}}
"""

import asyncio
import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def run_analysis(input_path: Path, domain: str = None, output_path: Path = None):
    """Load inputs, run the engine and write the resulting JSON."""
    from seo_intelligence.analyzer import AnalysisEngine, ClaudeClient
    from seo_intelligence.models import BaselineMetrics, BusinessContext
    from seo_intelligence.persistence import new_run_id

    with open(input_path, "r") as f:
        payload = json.load(f)

    domain = domain or payload.get("domain", "")
    context = BusinessContext.from_dict(payload.get("businessContext", {}), domain=domain)
    baseline = BaselineMetrics.from_dict(payload.get("baselineMetrics", {}))

    print(f"\n{'='*70}")
    print("SEO INTELLIGENCE - COMPREHENSIVE ANALYSIS")
    print(f"{'='*70}")
    print(f"Domain:       {context.domain or '(not specified)'}")
    print(f"Business:     {context.business_type} ({context.industry})")
    print(f"Location:     {context.location}")
    print(f"SEO Score:    {baseline.seo_score:g}/100")
    print(f"{'='*70}\n")

    start_time = datetime.now()

    client = ClaudeClient()
    engine = AnalysisEngine(client)
    analysis = await engine.run(new_run_id(context.domain), context, baseline)

    duration = (datetime.now() - start_time).total_seconds()
    usage = client.get_usage_summary()

    print(f"\n{'='*70}")
    print(f"Status:       {analysis.status.value}")
    print(f"Score:        {analysis.action_plan.overall_score}/100 "
          f"(potential {analysis.action_plan.potential_improvement}/100)")
    print(f"Actions:      {len(analysis.action_plan.items)}")
    print(f"Claude calls: {usage['total_calls']} (${usage['estimated_cost']:.4f})")
    print(f"Duration:     {duration:.1f}s")
    print(f"{'='*70}\n")

    result = json.dumps(analysis.to_dict(), indent=2)
    if output_path:
        output_path.write_text(result)
        print(f"Analysis saved to: {output_path}")
    else:
        print(result)

    return analysis


def main():
    """Main entry point."""
    load_dotenv()

    from seo_intelligence.utils import get_settings

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    parser = argparse.ArgumentParser(
        description="Run the multi-agent SEO analysis and action plan synthesis"
    )
    parser.add_argument(
        "input",
        type=Path,
        help="JSON file with businessContext and baselineMetrics"
    )
    parser.add_argument(
        "--domain",
        default=None,
        help="Domain being analyzed (overrides the input file)"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the analysis JSON here instead of stdout"
    )

    args = parser.parse_args()

    if not settings.ANTHROPIC_API_KEY:
        print("ERROR: Missing required environment variable ANTHROPIC_API_KEY")
        print("\nSet it with:")
        print("  export ANTHROPIC_API_KEY=your_key")
        sys.exit(1)

    logger.info(f"Environment: {settings.ENVIRONMENT}")
    analysis = asyncio.run(run_analysis(args.input, args.domain, args.output))

    if analysis.status.value == "failed":
        sys.exit(2)


if __name__ == "__main__":
    main()
