"""
SEO Intelligence Synthesis Engine

Turns six concurrently-running analysis agents into one coherent plan:
1. Runs technical, content, competitor, keyword, SERP and UX agents in parallel
2. Aggregates their progress and status for polling clients
3. Synthesizes a scored action plan, competitive intelligence,
   content strategy and progress tracking from their findings
"""

__version__ = "0.1.0"
