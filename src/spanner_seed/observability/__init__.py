"""
spanner_seed.observability

Observability package.

Responsibilities:
- Structured logging configuration.
"""

# Package marker.
