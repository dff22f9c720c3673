"""Services for the manufacturing-order kernel (write side)."""

from mo_kernel.services.documents_printed_transaction import (
    UPD_DOC_PRINTED,
    UPD_DOC_PRINTED_BY_WHLO,
    DocumentsPrintedTransaction,
    TransactionResult,
)
from mo_kernel.services.facility_resolver import FacilityResolver
from mo_kernel.services.input_validator import InputValidator
from mo_kernel.services.record_updater import RecordUpdater

__all__ = [
    "DocumentsPrintedTransaction",
    "FacilityResolver",
    "InputValidator",
    "RecordUpdater",
    "TransactionResult",
    "UPD_DOC_PRINTED",
    "UPD_DOC_PRINTED_BY_WHLO",
]
