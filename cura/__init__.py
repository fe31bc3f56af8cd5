"""
CURA department operations core.

Headless workflow layer for the pharmacy, laboratory and radiology screens.
"""

__version__ = "0.1.0"
