"""
Dynamic Forms - the data model behind a form builder

Typed fields with validators, grouped into sections whose fields can be
shown or hidden depending on the value of another field.
"""

from .core.dependency import Dependency
from .core.form import Form
from .core.section import Section
from .fields.base import Field
from .fields.implementations import BooleanField, EmailField, FileField, SingleSelectField, TextField
from .logging_config import configure_logging
from .parsers.payload_parser import (
    dump_dependency,
    dump_field,
    dump_validator,
    parse_dependency,
    parse_field,
    parse_validator,
)
from .types.config import FormConfig, SectionConfig
from .types.enums import FieldType, ValidatorType
from .types.exceptions import (
    ConflictError,
    DeserializationError,
    DuplicateFieldError,
    DuplicateSectionError,
    FormError,
    InvariantViolation,
    NotFoundError,
    TypeMismatchError,
)
from .validators.base import (
    AllowedValuesValidator,
    ArraySizeValidator,
    EmailValidator,
    TextContainsValidator,
    TextLengthValidator,
    Validator,
)

__version__ = "0.1.0"

__all__ = [
    "Form",
    "Section",
    "Dependency",
    "Field",
    "TextField",
    "EmailField",
    "SingleSelectField",
    "BooleanField",
    "FileField",
    "Validator",
    "TextLengthValidator",
    "TextContainsValidator",
    "EmailValidator",
    "AllowedValuesValidator",
    "ArraySizeValidator",
    "FieldType",
    "ValidatorType",
    "FormConfig",
    "SectionConfig",
    "FormError",
    "NotFoundError",
    "DuplicateFieldError",
    "DuplicateSectionError",
    "TypeMismatchError",
    "ConflictError",
    "InvariantViolation",
    "DeserializationError",
    "parse_field",
    "parse_validator",
    "parse_dependency",
    "dump_field",
    "dump_validator",
    "dump_dependency",
    "configure_logging",
]
