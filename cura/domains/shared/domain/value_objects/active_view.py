"""
Active View Value Object

Navigation states shared by the multi-step screens.
"""

from enum import Enum


class ActiveView(str, Enum):
    """Current step of a screen workflow."""

    MAIN = "main"  # Patient/appointment list
    SERVICES = "services"  # Services of the selected patient
    DETAIL = "detail"  # Tests or report of the selected service

    @property
    def is_main(self) -> bool:
        return self is ActiveView.MAIN
