"""
spanner_seed.db

Persistence package (google-cloud-spanner).

Responsibilities:
- Provide client handles, schema provisioning, seeding and the album reader.
"""

# Package marker; steps are imported directly from submodules.
