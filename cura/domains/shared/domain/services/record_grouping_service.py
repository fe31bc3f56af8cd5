"""
Record Grouping Domain Service

Stable single-pass grouping of line items. Group order is the order in
which each key is first seen, never alphabetical.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from cura.domains.shared.domain.entities.appointment_group import AppointmentGroup

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


@dataclass
class RecordGroup(Generic[K, T]):
    """
    Items sharing one grouping key.

    Attributes:
        key: Grouping key (department name, appointment id)
        items: Items in their original relative order
    """

    key: K
    items: list[T] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.items)


class RecordGroupingService:
    """Grouping helpers shared by every screen."""

    @staticmethod
    def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
        """
        Group items preserving first-seen key order.

        Args:
            items: Items to group
            key: Function returning the grouping key of an item

        Returns:
            Insertion-ordered mapping key -> items
        """
        groups: dict[K, list[T]] = {}
        for item in items:
            groups.setdefault(key(item), []).append(item)
        return groups

    @classmethod
    def to_groups(cls, items: Iterable[T], key: Callable[[T], K]) -> list[RecordGroup[K, T]]:
        """Same as group_by, as a list of RecordGroup."""
        return [RecordGroup(key=k, items=v) for k, v in cls.group_by(items, key).items()]

    @staticmethod
    def department_names(groups: dict[str, list[T]]) -> list[str]:
        return list(groups.keys())

    @classmethod
    def group_by_appointment(cls, items: Iterable[T]) -> list[AppointmentGroup[T]]:
        """
        One AppointmentGroup per appointment, in first-seen order.

        Items must expose appointment_id, patient_name and doctor_name;
        appointment_date is optional.
        """
        groups = cls.group_by(items, lambda item: item.appointment_id)
        result = []
        for appointment_id, services in groups.items():
            first = services[0]
            result.append(
                AppointmentGroup(
                    appointment_id=appointment_id,
                    patient_name=first.patient_name,
                    doctor_name=first.doctor_name,
                    appointment_date=getattr(first, "appointment_date", None),
                    services=services,
                )
            )
        return result
