"""
Typed Exception Hierarchy for the manufacturing-order kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of a transaction need to know WHICH input was rejected and WHY,
without parsing message text.  Every exception therefore carries:
  1. A class-level ``code`` attribute (machine-readable, log/API safe).
  2. Structured attributes (field name, offending value, warehouse ...).
  3. For field errors, the two-character MI ``error_code`` returned to
     the invoker together with the field name.

Example:
    try:
        params = validator.validate(in_data)
    except FieldValidationError as e:
        return {"field": e.field, "code": e.error_code, "message": str(e)}

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    MoKernelError (base)
    |
    +-- FieldValidationError
    |   +-- MissingFieldError
    |   +-- InvalidFormatError
    |   +-- InvalidValueError
    |
    +-- ResolutionError
    |
    +-- UpdateFailedError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                | When Raised
----------------|---------------------|------------------------------------------
Validation      | MISSING_FIELD       | Mandatory input absent or blank
                | INVALID_FORMAT      | Company is not numeric
                | INVALID_VALUE       | Documents-printed flag not 0 or 1
----------------|---------------------|------------------------------------------
Resolution      | RESOLUTION_FAILED   | Warehouse lookup reported an error or
                |                     | returned no facility
----------------|---------------------|------------------------------------------
Update          | UPDATE_FAILED       | Record missing, lock unavailable, or
                |                     | store commit failure
----------------|---------------------|------------------------------------------
Configuration   | CONFIGURATION_ERROR | Configuration file holds invalid values

All errors are terminal for the invocation.  Nothing retries.
"""


class MoKernelError(Exception):
    """
    Base exception for all manufacturing-order kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "MO_KERNEL_ERROR"


# Input validation


class FieldValidationError(MoKernelError):
    """
    Base exception for rejected input fields.

    ``field`` is the external field name (e.g. ``"FACI"``) and
    ``error_code`` the MI error code reported next to it.
    """

    code: str = "FIELD_VALIDATION_ERROR"
    error_code: str = "01"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class MissingFieldError(FieldValidationError):
    """A mandatory field is absent or blank after trimming."""

    code: str = "MISSING_FIELD"


class InvalidFormatError(FieldValidationError):
    """A field does not have the expected format (e.g. non-numeric company)."""

    code: str = "INVALID_FORMAT"

    def __init__(self, field: str, value: str, message: str):
        self.value = value
        super().__init__(field, message)


class InvalidValueError(FieldValidationError):
    """A field parsed correctly but lies outside its allowed domain."""

    code: str = "INVALID_VALUE"

    def __init__(self, field: str, value: str, message: str):
        self.value = value
        super().__init__(field, message)


# Facility resolution


class ResolutionError(MoKernelError):
    """
    Warehouse could not be resolved to a facility.

    The message is the lookup's own error text, passed through unchanged.
    """

    code: str = "RESOLUTION_FAILED"

    def __init__(self, warehouse: str, message: str):
        self.warehouse = warehouse
        super().__init__(message)


# Locked update


class UpdateFailedError(MoKernelError):
    """
    The locked update did not commit.

    Covers a missing record, lock contention and store-level failures
    alike; the store's specific reason is not exposed here.
    """

    code: str = "UPDATE_FAILED"

    def __init__(self, table: str = "MWOHED"):
        self.table = table
        super().__init__(f"Could not update record in table {table}")


# Configuration


class ConfigurationError(MoKernelError):
    """Configuration file contains an invalid value."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}: {reason}")
