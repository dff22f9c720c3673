"""
DocumentsPrintedTransaction -- validate, resolve, update; one result.

Responsibility:
    Composes InputValidator -> [FacilityResolver] -> RecordUpdater for one
    invocation and turns the outcome into exactly one caller-visible
    ``TransactionResult``.

Architecture position:
    Kernel > Services -- the entry point an outer transport calls.

Invariants enforced:
    - Strictly sequential, single attempt.  The first error ends the
      invocation; nothing after it runs.
    - Validation and resolution errors happen before the store is touched.
    - Every failure produces exactly one error result; no error is
      swallowed.

Variants:
    UPD_DOC_PRINTED            -- FACI supplied directly.
    UPD_DOC_PRINTED_BY_WHLO    -- WHLO resolved to a facility first.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from uuid import uuid4

from mo_kernel.domain.parameters import LocationKind, OrderHeaderKey
from mo_kernel.exceptions import (
    FieldValidationError,
    MoKernelError,
    ResolutionError,
    UpdateFailedError,
)
from mo_kernel.logging_config import LogContext, get_logger
from mo_kernel.services.facility_resolver import FacilityResolver
from mo_kernel.services.input_validator import InputValidator
from mo_kernel.services.record_updater import RecordUpdater

logger = get_logger("services.documents_printed")

UPD_DOC_PRINTED = "UpdDocPrinted"
UPD_DOC_PRINTED_BY_WHLO = "UpdDocPrintedByWhlo"


@dataclass(frozen=True)
class TransactionResult:
    """
    Outcome of one invocation.

    On failure, ``field`` and ``error_code`` are set for field errors
    only; ``code`` is the kernel exception code.
    """

    ok: bool
    key: OrderHeaderKey | None = None
    message: str | None = None
    field: str | None = None
    error_code: str | None = None
    code: str | None = None

    @classmethod
    def success(cls, key: OrderHeaderKey) -> TransactionResult:
        return cls(ok=True, key=key)

    @classmethod
    def from_error(cls, error: MoKernelError) -> TransactionResult:
        if isinstance(error, FieldValidationError):
            return cls(
                ok=False,
                message=str(error),
                field=error.field,
                error_code=error.error_code,
                code=error.code,
            )
        return cls(ok=False, message=str(error), code=error.code)

    def to_dict(self) -> dict[str, str]:
        """MI-style response body: empty on success."""
        if self.ok:
            return {}
        body = {"message": self.message or ""}
        if self.field is not None:
            body["field"] = self.field
            body["code"] = self.error_code or ""
        return body


class DocumentsPrintedTransaction:
    """
    Sets "order documents printed" on a manufacturing-order header.

    Contract:
        ``execute`` never raises kernel errors; each one becomes a failed
        ``TransactionResult``.  Other exceptions propagate.
    """

    def __init__(
        self,
        validator: InputValidator,
        updater: RecordUpdater,
        resolver: FacilityResolver | None = None,
        *,
        user: str | None = None,
    ):
        if validator.location_kind is LocationKind.WAREHOUSE and resolver is None:
            raise ValueError("Warehouse variant requires a FacilityResolver")
        self._validator = validator
        self._updater = updater
        self._resolver = resolver
        self._user = user

    @property
    def name(self) -> str:
        if self._validator.location_kind is LocationKind.WAREHOUSE:
            return UPD_DOC_PRINTED_BY_WHLO
        return UPD_DOC_PRINTED

    def execute(
        self,
        in_data: Mapping[str, str | None],
        *,
        correlation_id: str | None = None,
    ) -> TransactionResult:
        """Run one invocation against ``in_data``."""
        with LogContext.bind(
            correlation_id=correlation_id or str(uuid4()),
            transaction=self.name,
            user=self._user,
        ):
            try:
                key = self._run(in_data)
            except (FieldValidationError, ResolutionError, UpdateFailedError) as exc:
                logger.info(
                    "transaction_failed",
                    extra={"error_code": exc.code, "error_message": str(exc)},
                )
                return TransactionResult.from_error(exc)

            logger.info("transaction_completed", extra={"key": str(key)})
            return TransactionResult.success(key)

    def _run(self, in_data: Mapping[str, str | None]) -> OrderHeaderKey:
        params = self._validator.validate(in_data)

        with LogContext.bind(company=str(params.company), order_number=params.order_number):
            facility = params.facility
            if facility is None:
                facility = self._resolver.resolve(params.company, params.warehouse)

            return self._updater.update(params, facility)
