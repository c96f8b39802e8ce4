"""
Utility modules for PlateProof.

Cross-cutting concerns:
- Geo: Haversine distance and proximity filtering
- Storage: Snapshot loading and JSON export
- Structured data: schema.org documents
"""
