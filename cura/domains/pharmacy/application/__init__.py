"""
Pharmacy Application Layer

Ports, the prescription aggregator, the dispense use case and the
screen workflows.
"""
