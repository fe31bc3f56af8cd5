"""
Shared Domain Services
"""

from cura.domains.shared.domain.services.pagination_service import (
    DEFAULT_SORT,
    ELLIPSIS,
    FILTER_ALL,
    PageResult,
    PaginationService,
    PaginationState,
)
from cura.domains.shared.domain.services.qr_payload_decoder import QRPayloadDecoder, extract_identifier
from cura.domains.shared.domain.services.record_grouping_service import RecordGroup, RecordGroupingService

__all__ = [
    "DEFAULT_SORT",
    "ELLIPSIS",
    "FILTER_ALL",
    "PageResult",
    "PaginationService",
    "PaginationState",
    "QRPayloadDecoder",
    "RecordGroup",
    "RecordGroupingService",
    "extract_identifier",
]
