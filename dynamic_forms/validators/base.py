from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from email_validator import EmailNotValidError, validate_email

from ..types.enums import ValidatorType
from ..types.values import strict_equals


class Validator(ABC):
    """Base class for field validators"""

    validator_type: ValidatorType

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """Validate a field value"""
        pass

    @abstractmethod
    def get_error_message(self, value: Any) -> str:
        """Get error message for validation failure"""
        pass

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"


class _BoundsValidator(Validator):
    """Shared min/max length checks for strings and lists"""

    def __init__(self, min_length: Optional[int] = None, max_length: Optional[int] = None):
        self.min_length = min_length
        self.max_length = max_length

    def _within_bounds(self, size: int) -> bool:
        if self.min_length is not None and size < self.min_length:
            return False
        if self.max_length is not None and size > self.max_length:
            return False
        return True

    def _bounds_message(self, noun: str) -> str:
        if self.min_length is not None and self.max_length is not None:
            return f"{noun} must be between {self.min_length} and {self.max_length}"
        elif self.min_length is not None:
            return f"{noun} must be at least {self.min_length}"
        elif self.max_length is not None:
            return f"{noun} must be at most {self.max_length}"
        return f"Invalid {noun.lower()}"


class TextLengthValidator(_BoundsValidator):
    """Validator for the min / max length of a string"""

    validator_type = ValidatorType.TEXT_LENGTH

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self._within_bounds(len(value))

    def get_error_message(self, value: Any) -> str:
        return self._bounds_message("Text length")


class TextContainsValidator(Validator):
    """Validator that checks whether a string contains a substring"""

    validator_type = ValidatorType.TEXT_CONTAINS

    def __init__(self, query_string: str):
        self.query_string = query_string

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self.query_string in value

    def get_error_message(self, value: Any) -> str:
        return f"Text must contain '{self.query_string}'"


class EmailValidator(Validator):
    """Email syntax validator. Deliverability is not checked."""

    validator_type = ValidatorType.EMAIL

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    def get_error_message(self, value: Any) -> str:
        return f"'{value}' is not a valid email address"


class AllowedValuesValidator(Validator):
    """Validator that checks a value is one of a fixed set of values"""

    validator_type = ValidatorType.ARRAY_CONTAINS

    def __init__(self, allowed_values: Sequence[Any]):
        self.allowed_values: List[Any] = list(allowed_values)

    def is_valid(self, value: Any) -> bool:
        return any(strict_equals(value, allowed) for allowed in self.allowed_values)

    def get_error_message(self, value: Any) -> str:
        allowed = ", ".join(repr(v) for v in self.allowed_values)
        return f"{value!r} is not one of: {allowed}"


class ArraySizeValidator(_BoundsValidator):
    """Validator for the number of items in a list"""

    validator_type = ValidatorType.ARRAY_SIZE

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        return self._within_bounds(len(value))

    def get_error_message(self, value: Any) -> str:
        return self._bounds_message("Number of items")
