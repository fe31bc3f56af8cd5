"""
Radiology Domain

Radiology prescriptions, report authoring, services and templates.

Architecture:
- application/: Ports, radiology prescription aggregator and screen workflows
- domain/: Entities, value objects and the report template service
"""

__all__: list[str] = []
