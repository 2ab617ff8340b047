from enum import Enum


class FieldType(Enum):
    TEXT = "text"
    EMAIL = "email"
    SINGLE_SELECT = "single_select"
    BOOLEAN = "boolean"
    FILE = "file"


class ValidatorType(Enum):
    TEXT_LENGTH = "text_length"
    TEXT_CONTAINS = "text_contains"
    EMAIL = "email"
    ARRAY_CONTAINS = "array_contains"
    ARRAY_SIZE = "array_size"
