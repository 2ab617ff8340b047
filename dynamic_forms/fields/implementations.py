import copy
from typing import Any, List, Optional, Sequence

from ..types.enums import FieldType
from ..validators.base import AllowedValuesValidator, EmailValidator, Validator
from .base import Field


class TextField(Field):
    """Free text field"""

    field_type = FieldType.TEXT


class EmailField(Field):
    """Text field that must hold a syntactically valid email address"""

    field_type = FieldType.EMAIL

    def __init__(self, id: str, value: Optional[str] = None, required: bool = False):
        super().__init__(id, value, required, [EmailValidator()])


class SingleSelectField(Field):
    """Dropdown where exactly one of ``possible_values`` can be selected"""

    field_type = FieldType.SINGLE_SELECT

    def __init__(
        self,
        id: str,
        value: Any = None,
        required: bool = False,
        possible_values: Sequence[Any] = (),
    ):
        self.possible_values: List[Any] = list(possible_values)
        super().__init__(id, value, required, [AllowedValuesValidator(self.possible_values)])

    def duplicate(self, new_id: str) -> "SingleSelectField":
        clone = super().duplicate(new_id)
        clone.possible_values = copy.deepcopy(self.possible_values)
        return clone


class BooleanField(SingleSelectField):
    """Yes / no field"""

    field_type = FieldType.BOOLEAN

    def __init__(self, id: str, value: Optional[bool] = None, required: bool = False):
        super().__init__(id, value, required, [True, False])


class FileField(Field):
    """Field whose value is a list of URIs pointing at already uploaded files"""

    field_type = FieldType.FILE

    def __init__(
        self,
        id: str,
        value: Optional[List[str]] = None,
        required: bool = False,
        validators: Optional[Sequence[Validator]] = None,
    ):
        super().__init__(id, value, required, validators)
