"""
Shared Domain

Workflow engine common to the pharmacy, laboratory and radiology screens:
QR decoding, appointment retrieval, navigation, mutations and pagination.

Architecture:
- application/: Aggregator base, navigation controller, mutation coordinator, scanner session
- domain/: Entities, value objects, errors and pure services
"""

__all__: list[str] = []
