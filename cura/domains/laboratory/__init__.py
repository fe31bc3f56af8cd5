"""
Laboratory Domain

Lab prescriptions, sample collection, result entry and completed reports.

Architecture:
- application/: Ports, lab prescription aggregator and screen workflows
- domain/: Entities and value objects
"""

__all__: list[str] = []
