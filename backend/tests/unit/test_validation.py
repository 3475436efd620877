"""Unit tests for request validation and parsing helpers."""

from datetime import date, datetime, timezone

import pytest

from gym_backoffice.core.validation import (
    MAX_INT32,
    ValidationError,
    get_validator,
    parse_id,
    parse_iso_datetime,
    validate_payload,
)


@pytest.mark.unit
class TestParseHelpers:
    def test_parse_id_accepts_int_and_decimal_string(self):
        assert parse_id(7) == 7
        assert parse_id("9007199254740993") == 9007199254740993

    @pytest.mark.parametrize("value", ["abc", "", "0", 0, -3, True, "1.5", None, 2**63])
    def test_parse_id_rejects_invalid(self, value):
        assert parse_id(value) is None

    def test_parse_iso_datetime_handles_z_suffix(self):
        parsed = parse_iso_datetime("2026-05-01T10:00:00Z")
        assert parsed == datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_parse_iso_datetime_converts_offsets_to_utc(self):
        parsed = parse_iso_datetime("2026-05-01T13:00:00+03:00")
        assert parsed == datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_parse_iso_datetime_date_only_is_midnight_utc(self):
        parsed = parse_iso_datetime("2026-05-01")
        assert parsed == datetime(2026, 5, 1, tzinfo=timezone.utc)

    def test_parse_iso_datetime_rejects_garbage(self):
        assert parse_iso_datetime("tomorrow") is None
        assert parse_iso_datetime(12) is None


@pytest.mark.unit
class TestGymEntryValidation:
    def test_client_id_string_is_converted(self):
        data = validate_payload("gym_entry", {"clientId": "15", "lockerNumber": 4})
        assert data == {"client_id": 15, "locker_number": 4}

    def test_locker_number_is_optional(self):
        assert validate_payload("gym_entry", {"clientId": 3}) == {"client_id": 3}

    def test_missing_client_id_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("gym_entry", {})

        assert exc_info.value.errors == [
            {"field": "clientId", "message": "clientId is required"}
        ]

    def test_non_object_body_fails(self):
        with pytest.raises(ValidationError):
            validate_payload("gym_entry", None)

    def test_negative_locker_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("gym_entry", {"clientId": 3, "lockerNumber": -1})

        assert exc_info.value.errors[0]["field"] == "lockerNumber"

    @pytest.mark.parametrize("locker", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_locker_fails(self, locker):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("gym_entry", {"clientId": 3, "lockerNumber": locker})

        assert exc_info.value.errors == [
            {"field": "lockerNumber", "message": "lockerNumber must be an integer"}
        ]

    def test_locker_above_integer_column_range_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("gym_entry", {"clientId": 3, "lockerNumber": 10**20})

        assert exc_info.value.errors[0]["field"] == "lockerNumber"
        assert "at most" in exc_info.value.errors[0]["message"]

    def test_locker_at_integer_column_limit_passes(self):
        data = validate_payload("gym_entry", {"clientId": 3, "lockerNumber": MAX_INT32})
        assert data["locker_number"] == MAX_INT32


@pytest.mark.unit
class TestEntityValidators:
    def test_client_create_collects_every_missing_field(self):
        result = get_validator("client").validate({"fname": "Ayse"})

        fields = {error["field"] for error in result.errors}
        assert fields == {"dob", "isMale", "phoneNumber", "socialNumber"}
        assert result.is_valid is False

    def test_client_create_cleans_values(self):
        data = validate_payload(
            "client",
            {
                "fname": " Ayse ",
                "dob": "1995-04-02",
                "isMale": "false",
                "phoneNumber": "555",
                "socialNumber": "111",
                "weight": "61.5",
            },
        )

        assert data["fname"] == "Ayse"
        assert data["dob"] == date(1995, 4, 2)
        assert data["is_male"] is False
        assert data["weight"] == 61.5

    def test_partial_update_only_checks_present_keys(self):
        assert validate_payload("client", {"locker": 5}, partial=True) == {"locker": 5}

    def test_partial_update_cannot_blank_required_field(self):
        with pytest.raises(ValidationError):
            validate_payload("client", {"fname": ""}, partial=True)

    def test_optional_field_can_be_cleared(self):
        assert validate_payload("client", {"email": None}, partial=True) == {
            "email": None
        }

    def test_package_limits(self):
        result = get_validator("package").validate(
            {"packageName": "Gold", "duration": "1 month", "price": -5, "days": 0}
        )

        fields = {error["field"] for error in result.errors}
        assert fields == {"price", "days"}

    def test_membership_end_before_start_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                "membership",
                {
                    "clientId": "1",
                    "packageId": "1",
                    "instructorId": "1",
                    "status": "active",
                    "startDate": "2026-05-10",
                    "endDate": "2026-05-01",
                    "paymentDate": "2026-05-10",
                    "isPaid": True,
                },
            )

        assert exc_info.value.errors[0]["field"] == "endDate"

    def test_membership_remain_sessions_defaults_to_zero(self):
        data = validate_payload(
            "membership",
            {
                "clientId": "1",
                "packageId": "2",
                "instructorId": "3",
                "status": "active",
                "startDate": "2026-05-01",
                "endDate": "2026-06-01",
                "paymentDate": "2026-05-01",
                "isPaid": True,
            },
        )

        assert data["remain_sessions"] == 0
        assert data["client_id"] == 1

    def test_integer_rejects_fractional_and_boolean(self):
        result = get_validator("package").validate(
            {"packageName": "A", "duration": "B", "price": 10.5, "days": True}
        )

        assert {error["field"] for error in result.errors} == {"price", "days"}

    def test_integer_columns_reject_out_of_range_values(self):
        result = get_validator("package").validate(
            {"packageName": "A", "duration": "B", "price": MAX_INT32 + 1, "days": 2**40}
        )

        assert {error["field"] for error in result.errors} == {"price", "days"}

    def test_remain_sessions_upper_bound(self):
        result = get_validator("membership").validate(
            {"remainSessions": MAX_INT32 + 1}, partial=True
        )

        assert result.errors[0]["field"] == "remainSessions"

    @pytest.mark.parametrize("salary", [float("inf"), float("nan"), 10**400])
    def test_number_rejects_non_finite_and_huge_values(self, salary):
        result = get_validator("instructor").validate({"salary": salary}, partial=True)

        assert [error["field"] for error in result.errors] == ["salary"]
        assert "salary" not in result.cleaned_data

    @pytest.mark.parametrize("value", [{"first": "Ayse"}, ["Ayse"], 42, True])
    def test_string_fields_reject_non_strings(self, value):
        result = get_validator("client").validate({"fname": value}, partial=True)

        assert result.errors == [{"field": "fname", "message": "fname must be a string"}]

    def test_unknown_validator_raises(self):
        with pytest.raises(ValueError):
            get_validator("locker")
