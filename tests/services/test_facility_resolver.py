"""Tests for FacilityResolver."""

import pytest

from mo_kernel.exceptions import ResolutionError
from mo_kernel.services.facility_resolver import FacilityResolver


def test_resolves_single_facility(lookup):
    resolver = FacilityResolver(lookup)

    assert resolver.resolve(100, "W01") == "FAC1"
    assert lookup.calls == [(100, "W01", 1)]


def test_lookup_error_message_passed_through_verbatim(lookup):
    resolver = FacilityResolver(lookup)

    with pytest.raises(ResolutionError) as exc_info:
        resolver.resolve(100, "BAD")

    assert str(exc_info.value) == "Warehouse BAD does not exist"
    assert exc_info.value.warehouse == "BAD"
    assert exc_info.value.code == "RESOLUTION_FAILED"


def test_lookup_called_once_on_error(lookup):
    resolver = FacilityResolver(lookup)

    with pytest.raises(ResolutionError):
        resolver.resolve(100, "BAD")

    assert len(lookup.calls) == 1


def test_empty_result_without_message_is_an_error(lookup):
    resolver = FacilityResolver(lookup)

    with pytest.raises(ResolutionError) as exc_info:
        resolver.resolve(100, "W99")

    assert str(exc_info.value) == "Warehouse W99 does not exist"


def test_empty_result_passes_through_when_allowed(lookup, captured_logs):
    resolver = FacilityResolver(lookup, allow_empty=True)

    assert resolver.resolve(100, "W99") == ""
    assert any(
        r["message"] == "warehouse_resolved_to_empty_facility" and r["level"] == "WARNING"
        for r in captured_logs()
    )


def test_error_message_wins_over_allow_empty(lookup):
    resolver = FacilityResolver(lookup, allow_empty=True)

    with pytest.raises(ResolutionError):
        resolver.resolve(100, "BAD")
