"""
InputValidator -- raw caller input to canonical InputParameters.

Responsibility:
    Reads the string-keyed request fields (CONO, FACI|WHLO, PRNO, MFNO,
    WODP), trims them, applies defaults and checks each field in a fixed
    order.  The first invalid field stops validation.

Architecture position:
    Kernel > Services.  Pure apart from the diagnostic log line; never
    touches the store.

Failure modes:
    - InvalidFormatError: CONO is not a 32-bit decimal integer.
    - MissingFieldError: location, PRNO or MFNO blank.
    - InvalidValueError: WODP not an integer, or not 0/1.
"""

import re
from collections.abc import Mapping

from mo_kernel.domain.context import UserContext
from mo_kernel.domain.parameters import InputParameters, LocationKind
from mo_kernel.exceptions import InvalidFormatError, InvalidValueError, MissingFieldError
from mo_kernel.logging_config import get_logger

logger = get_logger("services.input_validator")

_LOCATION_LABELS = {
    LocationKind.FACILITY: "Facility",
    LocationKind.WAREHOUSE: "Warehouse",
}


# Plain decimal integer: optional sign and ASCII digits only
_INTEGER = re.compile(r"[+-]?[0-9]+")

# Company numbers are 32-bit signed
_COMPANY_MIN = -(2**31)
_COMPANY_MAX = 2**31 - 1


def _field(in_data: Mapping[str, str | None], name: str) -> str:
    """Trimmed field value; absent or None reads as blank."""
    value = in_data.get(name)
    return "" if value is None else str(value).strip()


def _parse_int(value: str) -> int | None:
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


class InputValidator:
    """
    Validates one request for the documents-printed transaction.

    Contract:
        ``validate`` either returns a fully populated ``InputParameters``
        or raises the ``FieldValidationError`` of the first bad field.
    """

    def __init__(
        self,
        user_context: UserContext,
        location_kind: LocationKind = LocationKind.FACILITY,
    ):
        self._user_context = user_context
        self._location_kind = location_kind

    @property
    def location_kind(self) -> LocationKind:
        return self._location_kind

    def validate(self, in_data: Mapping[str, str | None]) -> InputParameters:
        """
        Validate ``in_data`` and return canonical parameters.

        Raises:
            FieldValidationError: On the first invalid field.
        """
        company = self._company(in_data)

        location_field = self._location_kind.value
        location = _field(in_data, location_field)
        if not location:
            raise MissingFieldError(
                location_field,
                f"{_LOCATION_LABELS[self._location_kind]} must be entered",
            )

        product = _field(in_data, "PRNO")
        if not product:
            raise MissingFieldError("PRNO", "Product must be entered")

        order_number = _field(in_data, "MFNO")
        if not order_number:
            raise MissingFieldError("MFNO", "Manufacturing order number must be entered")

        documents_printed = self._documents_printed(in_data)

        params = InputParameters(
            company=company,
            location=location,
            location_kind=self._location_kind,
            product=product,
            order_number=order_number,
            documents_printed=documents_printed,
        )
        logger.debug("input_parameters_validated", extra={"parameters": params.to_log_dict()})
        return params

    def _company(self, in_data: Mapping[str, str | None]) -> int:
        raw = _field(in_data, "CONO")
        if not raw:
            return self._user_context.company
        company = _parse_int(raw)
        if company is None or not _COMPANY_MIN <= company <= _COMPANY_MAX:
            raise InvalidFormatError("CONO", raw, "Company must be numerical")
        return company

    @staticmethod
    def _documents_printed(in_data: Mapping[str, str | None]) -> int:
        # Absent means 0; present but blank is rejected like any non-number
        raw = in_data.get("WODP")
        value = "0" if raw is None else str(raw).strip()
        flag = _parse_int(value)
        if flag not in (0, 1):
            raise InvalidValueError(
                "WODP", value, f"Order documents printed {value} must be 0 or 1"
            )
        return flag
