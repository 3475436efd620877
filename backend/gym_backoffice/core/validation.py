"""
Request validation for the gym back office API.

Controllers run these validators before touching storage. Each validator
walks a declarative field table, converts camelCase JSON keys to the
snake_case attributes used by domain entities, and collects every problem
into a ``ValidationResult`` instead of stopping at the first one.
"""

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

MAX_BIGINT = 2**63 - 1
# Upper bound of the 32-bit Integer columns (locker, price, days, ...)
MAX_INT32 = 2**31 - 1


class ValidationError(Exception):
    """Raised when request data fails validation; carries every field error."""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: List[Dict[str, str]] = []
        self.is_valid: bool = True
        self.cleaned_data: Dict[str, Any] = {}

    def add_error(self, message: str, field: Optional[str] = None):
        """Add validation error."""
        self.errors.append({"field": field or "", "message": message})
        self.is_valid = False
        logger.debug(f"Validation error: {field}: {message}")

    def raise_if_invalid(self) -> Dict[str, Any]:
        """Return cleaned data, or raise ValidationError with all errors."""
        if not self.is_valid:
            raise ValidationError(self.errors)
        return self.cleaned_data


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Date-only strings map to midnight UTC. Naive datetimes are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_id(value: Any) -> Optional[int]:
    """Parse a positive 64-bit identifier given as int or decimal string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
    else:
        return None
    if parsed < 1 or parsed > MAX_BIGINT:
        return None
    return parsed


class Field(NamedTuple):
    """One entry of a validator field table."""

    key: str
    attr: str
    kind: str
    required: bool = False
    min_value: Optional[float] = None
    max_value: Optional[float] = None


class BaseValidator:
    """Base validator with common conversion methods.

    Subclasses declare ``FIELDS``. ``validate(data)`` enforces required
    fields for creation; ``validate(data, partial=True)`` only checks the
    keys present in ``data``, which is how updates are validated.
    """

    FIELDS: List[Field] = []

    def validate(self, data: Optional[Dict[str, Any]], partial: bool = False) -> ValidationResult:
        result = ValidationResult()
        if not isinstance(data, dict):
            result.add_error("Request body must be a JSON object")
            return result

        for field in self.FIELDS:
            present = field.key in data
            value = data.get(field.key)

            if _is_blank(value):
                if field.required and (present or not partial):
                    result.add_error(f"{field.key} is required", field.key)
                elif present:
                    # Optional field explicitly cleared
                    result.cleaned_data[field.attr] = None
                continue

            converted = self.convert(field, value, result)
            if converted is not None:
                result.cleaned_data[field.attr] = converted

        return result

    def convert(self, field: Field, value: Any, result: ValidationResult) -> Any:
        converter = getattr(self, f"validate_{field.kind}")
        return converter(value, field, result)

    @staticmethod
    def validate_string(value: Any, field: Field, result: ValidationResult) -> Optional[str]:
        if not isinstance(value, str):
            result.add_error(f"{field.key} must be a string", field.key)
            return None
        return value.strip()

    @staticmethod
    def validate_secret(value: Any, field: Field, result: ValidationResult) -> Optional[str]:
        if not isinstance(value, str):
            result.add_error(f"{field.key} must be a string", field.key)
            return None
        return value

    @staticmethod
    def validate_boolean(value: Any, field: Field, result: ValidationResult) -> Optional[bool]:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        result.add_error(f"{field.key} must be a boolean", field.key)
        return None

    @staticmethod
    def validate_integer(value: Any, field: Field, result: ValidationResult) -> Optional[int]:
        if isinstance(value, bool):
            result.add_error(f"{field.key} must be an integer", field.key)
            return None
        try:
            int_value = int(value)
        except (ValueError, TypeError, OverflowError):
            # OverflowError: JSON 1e999 arrives as float("inf")
            result.add_error(f"{field.key} must be an integer", field.key)
            return None
        if isinstance(value, float) and value != int_value:
            result.add_error(f"{field.key} must be an integer", field.key)
            return None

        if field.min_value is not None and int_value < field.min_value:
            result.add_error(
                f"{field.key} must be at least {int(field.min_value)}", field.key
            )
            return None
        if field.max_value is not None and int_value > field.max_value:
            result.add_error(
                f"{field.key} must be at most {int(field.max_value)}", field.key
            )
            return None
        return int_value

    @staticmethod
    def validate_number(value: Any, field: Field, result: ValidationResult) -> Optional[float]:
        if isinstance(value, bool):
            result.add_error(f"{field.key} must be a number", field.key)
            return None
        try:
            number = float(value)
        except (ValueError, TypeError, OverflowError):
            result.add_error(f"{field.key} must be a number", field.key)
            return None
        if not math.isfinite(number):
            result.add_error(f"{field.key} must be a finite number", field.key)
            return None

        if field.min_value is not None and number < field.min_value:
            result.add_error(f"{field.key} must be at least {field.min_value}", field.key)
            return None
        return number

    @staticmethod
    def validate_datetime(value: Any, field: Field, result: ValidationResult) -> Optional[datetime]:
        parsed = parse_iso_datetime(value)
        if parsed is None:
            result.add_error(f"{field.key} must be a valid ISO-8601 date", field.key)
        return parsed

    @staticmethod
    def validate_date(value: Any, field: Field, result: ValidationResult) -> Optional[date]:
        parsed = parse_iso_datetime(value)
        if parsed is None:
            result.add_error(f"{field.key} must be a valid ISO-8601 date", field.key)
            return None
        return parsed.date()

    @staticmethod
    def validate_id(value: Any, field: Field, result: ValidationResult) -> Optional[int]:
        parsed = parse_id(value)
        if parsed is None:
            result.add_error(f"{field.key} must be a valid identifier", field.key)
        return parsed


class ClientValidator(BaseValidator):
    FIELDS = [
        Field("fname", "fname", "string", required=True),
        Field("lname", "lname", "string"),
        Field("dob", "dob", "date", required=True),
        Field("isMale", "is_male", "boolean", required=True),
        Field("email", "email", "string"),
        Field("phoneNumber", "phone_number", "string", required=True),
        Field("socialNumber", "social_number", "string", required=True),
        Field("description", "description", "string"),
        Field("locker", "locker", "integer", min_value=0, max_value=MAX_INT32),
        Field("weight", "weight", "number", min_value=0),
        Field("height", "height", "number", min_value=0),
    ]


class PackageValidator(BaseValidator):
    FIELDS = [
        Field("packageName", "package_name", "string", required=True),
        Field("imagePath", "image_path", "string"),
        Field("duration", "duration", "string", required=True),
        Field(
            "price", "price", "integer", required=True, min_value=0, max_value=MAX_INT32
        ),
        Field(
            "days", "days", "integer", required=True, min_value=1, max_value=MAX_INT32
        ),
        Field("description", "description", "string"),
    ]


class InstructorValidator(BaseValidator):
    FIELDS = [
        Field("packageId", "package_id", "id", required=True),
        Field("fname", "fname", "string", required=True),
        Field("lname", "lname", "string"),
        Field("dob", "dob", "date", required=True),
        Field("isMale", "is_male", "boolean", required=True),
        Field("salary", "salary", "number", required=True, min_value=0),
        Field("email", "email", "string"),
        Field("title", "title", "string", required=True),
        Field("description", "description", "string"),
        Field("phoneNumber", "phone_number", "string", required=True),
        Field("imagePath", "image_path", "string"),
    ]


class MembershipValidator(BaseValidator):
    FIELDS = [
        Field("clientId", "client_id", "id", required=True),
        Field("packageId", "package_id", "id", required=True),
        Field("instructorId", "instructor_id", "id", required=True),
        Field("status", "status", "string", required=True),
        Field("startDate", "start_date", "datetime", required=True),
        Field("endDate", "end_date", "datetime", required=True),
        Field("paymentDate", "payment_date", "datetime", required=True),
        Field("isPaid", "is_paid", "boolean", required=True),
        Field("description", "description", "string"),
        Field(
            "remainSessions",
            "remain_sessions",
            "integer",
            min_value=0,
            max_value=MAX_INT32,
        ),
    ]

    def validate(self, data, partial=False):
        result = super().validate(data, partial)
        start = result.cleaned_data.get("start_date")
        end = result.cleaned_data.get("end_date")
        if start and end and end < start:
            result.add_error("endDate must not be before startDate", "endDate")
        # Cleared or omitted on create means no sessions left
        cleared = "remain_sessions" in result.cleaned_data
        if (cleared or not partial) and result.cleaned_data.get("remain_sessions") is None:
            result.cleaned_data["remain_sessions"] = 0
        return result


class PaymentValidator(BaseValidator):
    FIELDS = [
        Field("clientId", "client_id", "id", required=True),
        Field("paymentType", "payment_type", "string", required=True),
        Field("description", "description", "string"),
    ]


class TrainingSessionValidator(BaseValidator):
    FIELDS = [
        Field("instructorId", "instructor_id", "id", required=True),
        Field("membershipId", "membership_id", "id", required=True),
        Field("destinationDate", "destination_date", "datetime", required=True),
        Field("isAttended", "is_attended", "boolean", required=True),
        Field("description", "description", "string"),
    ]


class GymEntryValidator(BaseValidator):
    """Body of an entry request: ``{clientId, lockerNumber?}``."""

    FIELDS = [
        Field("clientId", "client_id", "id", required=True),
        Field(
            "lockerNumber", "locker_number", "integer", min_value=0, max_value=MAX_INT32
        ),
    ]


class LoginValidator(BaseValidator):
    FIELDS = [
        Field("adminID", "admin_id", "string", required=True),
        Field("password", "password", "secret", required=True),
    ]


def get_validator(entity_type: str) -> BaseValidator:
    """Get validator instance for entity type."""
    validators = {
        "client": ClientValidator(),
        "package": PackageValidator(),
        "instructor": InstructorValidator(),
        "membership": MembershipValidator(),
        "payment": PaymentValidator(),
        "session": TrainingSessionValidator(),
        "gym_entry": GymEntryValidator(),
        "login": LoginValidator(),
    }

    validator = validators.get(entity_type.lower())
    if not validator:
        raise ValueError(f"No validator found for entity type: {entity_type}")

    return validator


def validate_payload(
    entity_type: str, data: Optional[Dict[str, Any]], partial: bool = False
) -> Dict[str, Any]:
    """Validate ``data`` and return cleaned attributes, raising on failure."""
    return get_validator(entity_type).validate(data, partial=partial).raise_if_invalid()
