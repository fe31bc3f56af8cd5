"""
Pharmacy Domain

Prescriptions, inventory, billing and dispensing over the hospital backend.

Architecture:
- application/: Ports, prescription aggregator, use cases and screen workflows
- domain/: Entities, value objects and domain services
"""

__all__: list[str] = []
