"""
Department Domains

- shared/: Retrieval, navigation, mutation and pagination engine used by every screen
- pharmacy/: Prescriptions, inventory, billing and dispensing
- laboratory/: Lab prescriptions and lab test result entry
- radiology/: Radiology prescriptions and report authoring
"""

__all__: list[str] = []
