"""
Hypothesis-based fuzzing of request validation.

Boundaries fuzzed here:
- Company: numeric with padding and leading zeros, non-numeric text,
  underscore digit groups, values outside 32 bits
- Documents-printed flag: every integer outside {0, 1}, free text,
  underscore digit groups
- Mandatory identifiers: arbitrary non-blank codes survive trimmed
- Rejected requests never reach the store
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from mo_kernel.domain.clock import DeterministicClock
from mo_kernel.domain.context import UserContext
from mo_kernel.domain.parameters import OrderHeaderKey
from mo_kernel.exceptions import InvalidFormatError, InvalidValueError
from mo_kernel.services.documents_printed_transaction import DocumentsPrintedTransaction
from mo_kernel.services.input_validator import InputValidator
from mo_kernel.services.record_updater import RecordUpdater
from tests.conftest import MemoryOrderHeaderStore

CONTEXT = UserContext(company=100, user="FUZZ")

codes = st.text(alphabet=string.ascii_uppercase + string.digits + "-_", min_size=1, max_size=20)
padding = st.text(alphabet=" \t", max_size=3)


def _request(**overrides):
    request = {"FACI": "A01", "PRNO": "P1", "MFNO": "MO1", "WODP": "1"}
    request.update(overrides)
    return request


@given(company=st.integers(min_value=0, max_value=999), zeros=st.integers(0, 3), pad=padding)
def test_numeric_company_normalised(company, zeros, pad):
    raw = f"{pad}{'0' * zeros}{company}{pad}"

    params = InputValidator(CONTEXT).validate(_request(CONO=raw))

    assert params.company == company


@given(raw=st.text(alphabet=string.ascii_letters + "./#", min_size=1, max_size=10))
def test_non_numeric_company_rejected(raw):
    try:
        InputValidator(CONTEXT).validate(_request(CONO=raw))
    except InvalidFormatError as exc:
        assert exc.field == "CONO"
        assert exc.error_code == "01"
    else:
        raise AssertionError(f"company {raw!r} accepted")


@st.composite
def underscored_numbers(draw, digits=string.digits, min_size=2):
    """Digit strings with one or more underscore group separators inside."""
    text = draw(st.text(alphabet=digits, min_size=min_size, max_size=8))
    cuts = draw(st.sets(st.integers(1, len(text) - 1), min_size=1))
    parts, start = [], 0
    for cut in sorted(cuts):
        parts.append(text[start:cut])
        start = cut
    parts.append(text[start:])
    return "_".join(parts)


@given(raw=underscored_numbers())
def test_underscored_company_rejected(raw):
    try:
        InputValidator(CONTEXT).validate(_request(CONO=raw))
    except InvalidFormatError as exc:
        assert exc.value == raw
    else:
        raise AssertionError(f"company {raw!r} accepted")


@given(company=st.one_of(st.integers(min_value=2**31), st.integers(max_value=-(2**31) - 1)))
def test_company_outside_32_bits_rejected(company):
    try:
        InputValidator(CONTEXT).validate(_request(CONO=str(company)))
    except InvalidFormatError as exc:
        assert str(exc) == "Company must be numerical"
    else:
        raise AssertionError(f"company {company} accepted")


@given(raw=underscored_numbers(digits="01"))
def test_underscored_flag_rejected(raw):
    try:
        InputValidator(CONTEXT).validate(_request(WODP=raw))
    except InvalidValueError as exc:
        assert exc.field == "WODP"
    else:
        raise AssertionError(f"flag {raw!r} accepted")


@given(flag=st.integers().filter(lambda n: n not in (0, 1)))
def test_flag_outside_domain_rejected(flag):
    try:
        InputValidator(CONTEXT).validate(_request(WODP=str(flag)))
    except InvalidValueError as exc:
        assert exc.field == "WODP"
        assert str(exc) == f"Order documents printed {flag} must be 0 or 1"
    else:
        raise AssertionError(f"flag {flag} accepted")


@given(raw=st.text(alphabet=string.ascii_letters + " .", min_size=1, max_size=8))
def test_flag_text_rejected(raw):
    try:
        InputValidator(CONTEXT).validate(_request(WODP=raw))
    except InvalidValueError as exc:
        assert exc.field == "WODP"
    else:
        raise AssertionError(f"flag {raw!r} accepted")


@given(facility=codes, product=codes, order_number=codes, pad=padding)
def test_identifiers_trimmed(facility, product, order_number, pad):
    params = InputValidator(CONTEXT).validate(_request(
        FACI=pad + facility + pad,
        PRNO=pad + product,
        MFNO=order_number + pad,
    ))

    assert (params.location, params.product, params.order_number) == (
        facility, product, order_number,
    )


@settings(max_examples=50)
@given(field=st.sampled_from(["FACI", "PRNO", "MFNO"]), blank=padding)
def test_rejected_request_never_reaches_store(field, blank):
    store = MemoryOrderHeaderStore()
    store.add(OrderHeaderKey(100, "A01", "P1", "MO1"))
    txn = DocumentsPrintedTransaction(
        InputValidator(CONTEXT),
        RecordUpdater(store, DeterministicClock(), CONTEXT),
    )

    result = txn.execute(_request(**{field: blank}))

    assert result.field == field
    assert store.read_lock_calls == 0
