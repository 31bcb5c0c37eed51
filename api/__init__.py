"""HTTP API for the Keyword Intelligence Engine."""
