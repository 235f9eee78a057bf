"""
spanner_seed

Cloud Spanner demo client: provision a Singers/Albums database, seed rows, read them back.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
