"""
Validation utilities for listing and credential input.
Checks run before any write reaches the database and fail fast on the first broken rule.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional

from email_validator import validate_email, EmailNotValidError

from tumharaghar.models.profile import UserRole
from tumharaghar.models.property import PropertyType
from tumharaghar.utils.exceptions import ValidationError

CENTS = Decimal("0.01")


class ValidationUtils:
    """
    Utility class for common validation operations.
    Every helper raises ValidationError naming the offending field.
    """

    PHONE_PATTERN = re.compile(r'^[\d\s\-+()]+$')

    @staticmethod
    def clean_text(value: Any) -> str:
        """Trimmed string form of a form value; None becomes empty."""
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def validate_length(
        value: Any,
        field_name: str,
        min_length: int,
        max_length: int,
        too_short: str,
        too_long: str
    ) -> str:
        """
        Validate a trimmed string against length bounds.

        Returns:
            The trimmed string

        Raises:
            ValidationError: With too_short or too_long as the message
        """
        text = ValidationUtils.clean_text(value)
        if len(text) < min_length:
            raise ValidationError.for_field(field_name, too_short)
        if len(text) > max_length:
            raise ValidationError.for_field(field_name, too_long)
        return text

    @staticmethod
    def parse_decimal(value: Any) -> Optional[Decimal]:
        """Parse a number, returning None for anything that is not a finite number."""
        if value is None or isinstance(value, bool):
            return None
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
        if not number.is_finite():
            return None
        return number

    @staticmethod
    def validate_positive_decimal(value: Any, field_name: str, message: str) -> Decimal:
        """Validate an amount stored with two decimal places; it must stay above 0 once rounded."""
        number = ValidationUtils.parse_decimal(value)
        if number is not None:
            try:
                number = number.quantize(CENTS, rounding=ROUND_HALF_UP)
            except InvalidOperation:
                number = None
        if number is None or number <= 0:
            raise ValidationError.for_field(field_name, message)
        return number

    @staticmethod
    def validate_count(
        value: Any,
        field_name: str,
        message: str,
        minimum: int = 0
    ) -> int:
        """
        Validate a whole-number count.

        Unparseable input fails with the range message; a fractional number
        fails with a whole-number message.
        """
        number = ValidationUtils.parse_decimal(value)
        if number is None or number < minimum:
            raise ValidationError.for_field(field_name, message)
        if number != number.to_integral_value():
            label = field_name.replace("_", " ").capitalize()
            raise ValidationError.for_field(field_name, f"{label} must be a whole number")
        return int(number)

    @staticmethod
    def validate_date(value: Any, field_name: str) -> Optional[date]:
        """Parse an ISO date; empty input means no date."""
        if isinstance(value, date):
            return value
        text = ValidationUtils.clean_text(value)
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            label = field_name.replace("_", " ").capitalize()
            raise ValidationError.for_field(field_name, f"{label} must be a valid date")

    @staticmethod
    def validate_email_address(email: Any, field_name: str = "email") -> str:
        """
        Validate email address format.

        Returns:
            Normalized, lower-cased email

        Raises:
            ValidationError: If email is invalid
        """
        email_str = ValidationUtils.clean_text(email)
        if not email_str or len(email_str) > 255:
            raise ValidationError.for_field(field_name, "Invalid email address")
        try:
            valid_email = validate_email(email_str, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError.for_field(field_name, "Invalid email address")
        return valid_email.normalized.lower()

    @staticmethod
    def validate_phone_number(phone: Any, field_name: str = "phone") -> str:
        """
        Validate phone number format.

        Digits, spaces, dashes, plus signs and parentheses are accepted as typed.
        """
        phone_str = ValidationUtils.clean_text(phone)
        if not phone_str:
            raise ValidationError.for_field(field_name, "Phone number is required")
        if len(phone_str) > 20 or not ValidationUtils.PHONE_PATTERN.match(phone_str):
            raise ValidationError.for_field(field_name, "Invalid phone number format")
        return phone_str


class PropertyValidator:
    """
    Validator for listing forms.
    Rules are checked in a fixed order and the first failure wins.
    """

    @staticmethod
    def _validate_type(value: Any) -> PropertyType:
        if isinstance(value, PropertyType):
            return value
        try:
            return PropertyType(ValidationUtils.clean_text(value).lower())
        except ValueError:
            raise ValidationError.for_field("property_type", "Property type must be rent or sale")

    @staticmethod
    def _validate_field(field: str, value: Any) -> Any:
        if field == "title":
            return ValidationUtils.validate_length(
                value, "title", 5, 200,
                "Title must be at least 5 characters",
                "Title cannot exceed 200 characters"
            )
        if field == "description":
            return ValidationUtils.validate_length(
                value, "description", 20, 5000,
                "Description must be at least 20 characters",
                "Description cannot exceed 5000 characters"
            )
        if field == "location":
            return ValidationUtils.validate_length(
                value, "location", 3, 200,
                "Location is required",
                "Location cannot exceed 200 characters"
            )
        if field == "price":
            return ValidationUtils.validate_positive_decimal(
                value, "price", "Price must be greater than 0"
            )
        if field == "bedrooms":
            return ValidationUtils.validate_count(value, "bedrooms", "Bedrooms must be 0 or greater")
        if field == "bathrooms":
            return ValidationUtils.validate_count(value, "bathrooms", "Bathrooms must be 0 or greater")
        if field == "area_sqft":
            if not ValidationUtils.clean_text(value):
                return None
            return ValidationUtils.validate_count(
                value, "area_sqft", "Area must be greater than 0", minimum=1
            )
        if field in ("available_from", "available_to"):
            return ValidationUtils.validate_date(value, field)
        raise KeyError(field)

    FIELD_ORDER = (
        "title",
        "description",
        "location",
        "price",
        "bedrooms",
        "bathrooms",
        "area_sqft",
        "available_from",
        "available_to",
    )

    @staticmethod
    def validate_availability(available_from: Optional[date], available_to: Optional[date]) -> None:
        if available_from and available_to and available_to < available_from:
            raise ValidationError.for_field(
                "available_to",
                "Available to date must be on or after available from date"
            )

    @classmethod
    def validate_create(cls, form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate a complete listing form.

        Args:
            form: Raw form values (strings or numbers)

        Returns:
            Cleaned values ready for insertion

        Raises:
            ValidationError: For the first violated rule
        """
        cleaned: Dict[str, Any] = {}
        for field in cls.FIELD_ORDER:
            cleaned[field] = cls._validate_field(field, form.get(field))

        cleaned["property_type"] = cls._validate_type(form.get("property_type") or PropertyType.RENT)

        if cleaned["property_type"] != PropertyType.RENT:
            cleaned["available_from"] = None
            cleaned["available_to"] = None

        cls.validate_availability(cleaned["available_from"], cleaned["available_to"])
        return cleaned

    @classmethod
    def validate_update(
        cls,
        changes: Mapping[str, Any],
        current: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """
        Validate a partial listing update.

        Only fields present in changes are validated; the availability rule is
        checked against the merged result so it holds after the write.
        """
        cleaned: Dict[str, Any] = {}
        for field in cls.FIELD_ORDER:
            if field in changes:
                cleaned[field] = cls._validate_field(field, changes[field])

        if "property_type" in changes:
            cleaned["property_type"] = cls._validate_type(changes["property_type"])

        property_type = cleaned.get("property_type", current.get("property_type"))
        if property_type != PropertyType.RENT:
            if "available_from" in cleaned or current.get("available_from") is not None:
                cleaned["available_from"] = None
            if "available_to" in cleaned or current.get("available_to") is not None:
                cleaned["available_to"] = None

        cls.validate_availability(
            cleaned.get("available_from", current.get("available_from")),
            cleaned.get("available_to", current.get("available_to"))
        )
        return cleaned


class CredentialValidator:
    """Validator for sign-in and sign-up input."""

    @staticmethod
    def validate_password(password: Any) -> str:
        password_str = "" if password is None else str(password)
        if len(password_str) < 6 or len(password_str) > 100:
            raise ValidationError.for_field("password", "Password must be at least 6 characters")
        return password_str

    @classmethod
    def validate_sign_in(cls, email: Any, password: Any) -> Dict[str, str]:
        return {
            "email": ValidationUtils.validate_email_address(email),
            "password": cls.validate_password(password),
        }

    @classmethod
    def validate_sign_up(
        cls,
        email: Any,
        password: Any,
        full_name: Any,
        role: Any,
        phone: Any = None
    ) -> Dict[str, Any]:
        """
        Validate sign-up input.

        Phone is required and kept only for sellers.
        """
        cleaned: Dict[str, Any] = cls.validate_sign_in(email, password)
        cleaned["full_name"] = ValidationUtils.validate_length(
            full_name, "full_name", 1, 100,
            "Name is required",
            "Name is required"
        )

        try:
            cleaned["role"] = role if isinstance(role, UserRole) else UserRole(
                ValidationUtils.clean_text(role).lower() or UserRole.BUYER.value
            )
        except ValueError:
            raise ValidationError.for_field("role", "Role must be buyer or seller")

        if cleaned["role"] == UserRole.SELLER:
            cleaned["phone"] = ValidationUtils.validate_phone_number(phone)
        else:
            cleaned["phone"] = None
        return cleaned
