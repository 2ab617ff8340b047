import copy
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from ..types.enums import FieldType
from ..validators.base import Validator


class Field(ABC):
    """A typed input slot holding a value, a required flag and its validators.

    Visibility is owned by the section the field lives in. Callers can read
    ``visible`` but only the section engine changes it.
    """

    @property
    @abstractmethod
    def field_type(self) -> FieldType:
        """Kind tag; concrete fields set it as a class attribute"""
        pass

    def __init__(
        self,
        id: str,
        value: Any = None,
        required: bool = False,
        validators: Optional[Sequence[Validator]] = None,
    ):
        self._id = id
        self.value = value
        self.required = required
        self.validators: List[Validator] = list(validators or [])
        self._visible = True

    @property
    def id(self) -> str:
        return self._id

    @property
    def visible(self) -> bool:
        return self._visible

    def is_valid(self) -> bool:
        """Check the required flag, then run validators against a present value"""
        if self.required and self.value is None:
            return False

        if self.value is None:
            return True

        for validator in self.validators:
            if not validator.is_valid(self.value):
                return False
        return True

    def validation_errors(self) -> List[str]:
        """Messages for every rule the current value breaks"""
        if self.value is None:
            return ["Value is required"] if self.required else []
        return [
            validator.get_error_message(self.value)
            for validator in self.validators
            if not validator.is_valid(self.value)
        ]

    def duplicate(self, new_id: str) -> "Field":
        """Independent copy under a new id, visible and outside any dependency"""
        clone = copy.copy(self)
        clone._id = new_id
        clone.value = copy.deepcopy(self.value)
        clone.validators = copy.deepcopy(self.validators)
        clone._visible = True
        return clone

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, value={self.value!r}, "
            f"required={self.required!r}, visible={self.visible!r})"
        )
