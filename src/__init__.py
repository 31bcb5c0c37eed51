"""
Keyword Intelligence Engine

A keyword prioritization and classification library that:
1. Classifies search intent with lexical rules
2. Scores keyword priority and backlink quality
3. Collects keyword, backlink and search-console data from vendor APIs
4. Generates briefs, meta descriptions and summaries with Claude
"""

__version__ = "1.0.0"
