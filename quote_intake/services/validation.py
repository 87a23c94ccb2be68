import re
from typing import Any, List, Optional

from quote_intake.core.exceptions import QuoteValidationError
from quote_intake.models.quote_request import QuoteRequest

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# NZ style: leading 0 then 7 to 10 more digits
PHONE_PATTERN = re.compile(r"0\d{7,10}", re.ASCII)
WHITESPACE = re.compile(r"\s+")

REQUIRED_FIELDS = (
    ("name", "Name is required."),
    ("phone", "Phone is required."),
    ("email", "Email is required."),
    ("pickup", "Pickup location is required."),
    ("delivery", "Delivery location is required."),
)


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def collect_errors(payload: dict) -> List[str]:
    """
    Run every rule against the raw payload and return all failures in order.
    Format checks only apply to non-empty strings so a missing field reports once.
    """
    errors = []

    for field, message in REQUIRED_FIELDS:
        if not _is_filled(payload.get(field)):
            errors.append(message)

    freight = payload.get("freightType")
    if not isinstance(freight, list) or not freight or not all(_is_filled(t) for t in freight):
        errors.append("At least one freight type is required.")

    email = payload.get("email")
    if isinstance(email, str) and email and not EMAIL_PATTERN.fullmatch(email):
        errors.append("Email format is invalid.")

    phone = payload.get("phone")
    if isinstance(phone, str) and phone:
        if not PHONE_PATTERN.fullmatch(WHITESPACE.sub("", phone)):
            errors.append("Phone number format is invalid.")

    return errors


def validate_quote_payload(payload: Any) -> QuoteRequest:
    """
    Validate a decoded JSON body and return the normalized QuoteRequest.

    Raises QuoteValidationError with the full error list when any rule fails.
    A body that is not a JSON object is validated as an empty one.
    """
    if not isinstance(payload, dict):
        payload = {}

    errors = collect_errors(payload)
    if errors:
        raise QuoteValidationError(errors)

    return QuoteRequest(
        name=payload["name"].strip(),
        phone=payload["phone"].strip(),
        email=payload["email"].strip(),
        company=_optional_text(payload.get("company")),
        pickup=payload["pickup"].strip(),
        delivery=payload["delivery"].strip(),
        freight_type=[t.strip() for t in payload["freightType"]],
    )
