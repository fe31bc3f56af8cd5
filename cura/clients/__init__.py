"""
Clients for external APIs
"""

from .hospital_api_client import HospitalAPIClient, HospitalAPIClientFactory, HospitalAPIError

__all__ = [
    "HospitalAPIClient",
    "HospitalAPIClientFactory",
    "HospitalAPIError",
]
