"""Core search pipeline: sanitize, fan out, rank, format."""
