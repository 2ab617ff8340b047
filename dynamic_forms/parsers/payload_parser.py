"""Mapping between tagged JSON payloads and fields, validators and dependencies.

Field payloads carry a ``fieldType`` tag and validator payloads a
``validatorType`` tag, using the string values of ``FieldType`` and
``ValidatorType``. Keys are camelCase on the wire. Anything that can't be
mapped raises ``DeserializationError``.
"""
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core.dependency import Dependency
from ..fields.base import Field as FormField
from ..fields.implementations import BooleanField, EmailField, FileField, SingleSelectField, TextField
from ..types.config import new_id
from ..types.enums import FieldType, ValidatorType
from ..types.exceptions import DeserializationError
from ..validators.base import (
    AllowedValuesValidator,
    ArraySizeValidator,
    EmailValidator,
    TextContainsValidator,
    TextLengthValidator,
    Validator,
)

P = TypeVar('P', bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _BoundsPayload(_Payload):
    min_length: Optional[int] = None
    max_length: Optional[int] = None


class _TextContainsPayload(_Payload):
    query_string: str


class _AllowedValuesPayload(_Payload):
    allowed_values: List[Any]


class _FieldPayload(_Payload):
    id: str
    required: bool = False
    validator: Optional[Dict[str, Any]] = None
    validators: Optional[List[Dict[str, Any]]] = None


class _TextFieldPayload(_FieldPayload):
    value: Optional[str] = None


class _FileFieldPayload(_FieldPayload):
    value: Optional[List[str]] = None


class _EmailFieldPayload(_FieldPayload):
    value: Optional[str] = None


class _SingleSelectFieldPayload(_FieldPayload):
    value: Any = None
    possible_values: List[Any]


class _BooleanFieldPayload(_FieldPayload):
    value: Optional[StrictBool] = None


class _DependencyPayload(_Payload):
    id: Optional[str] = None
    child_id: str
    parent_id: str
    parent_value: Any = None


def _validate(model: Type[P], payload: Mapping[str, Any]) -> P:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise DeserializationError(f"Invalid payload for {model.__name__.strip('_')}: {e}") from e


def _read_tag(payload: Any, key: str, enum_class):
    if not isinstance(payload, Mapping):
        raise DeserializationError(f"Expected an object, got {type(payload).__name__}")
    if payload.get(key) is None:
        raise DeserializationError(f"Can not infer the type: '{key}' is missing")
    try:
        return enum_class(payload[key])
    except ValueError:
        raise DeserializationError(f"Unknown {key}: {payload[key]!r}")


def parse_validator(payload: Mapping[str, Any]) -> Validator:
    """Build a validator from a payload tagged with ``validatorType``"""
    validator_type = _read_tag(payload, "validatorType", ValidatorType)

    if validator_type == ValidatorType.TEXT_LENGTH:
        bounds = _validate(_BoundsPayload, payload)
        return TextLengthValidator(bounds.min_length, bounds.max_length)
    elif validator_type == ValidatorType.TEXT_CONTAINS:
        return TextContainsValidator(_validate(_TextContainsPayload, payload).query_string)
    elif validator_type == ValidatorType.EMAIL:
        return EmailValidator()
    elif validator_type == ValidatorType.ARRAY_CONTAINS:
        return AllowedValuesValidator(_validate(_AllowedValuesPayload, payload).allowed_values)
    elif validator_type == ValidatorType.ARRAY_SIZE:
        bounds = _validate(_BoundsPayload, payload)
        return ArraySizeValidator(bounds.min_length, bounds.max_length)

    raise DeserializationError(f"Unsupported validatorType: {validator_type.value!r}")


def _with_validators(field: FormField, data: _FieldPayload) -> FormField:
    """Replace the kind's default validators when the payload lists any"""
    if data.validators is None and data.validator is None:
        return field

    validators = [parse_validator(item) for item in data.validators or []]
    if data.validator is not None:
        validators.append(parse_validator(data.validator))
    field.validators = validators
    return field


def parse_field(payload: Mapping[str, Any]) -> FormField:
    """Build a field from a payload tagged with ``fieldType``.

    Any kind accepts a single ``validator`` or a ``validators`` list. When
    given they replace the kind's default validators.
    """
    field_type = _read_tag(payload, "fieldType", FieldType)

    if field_type == FieldType.TEXT:
        text = _validate(_TextFieldPayload, payload)
        return _with_validators(TextField(text.id, text.value, text.required), text)
    elif field_type == FieldType.EMAIL:
        email = _validate(_EmailFieldPayload, payload)
        return _with_validators(EmailField(email.id, email.value, email.required), email)
    elif field_type == FieldType.SINGLE_SELECT:
        select = _validate(_SingleSelectFieldPayload, payload)
        field = SingleSelectField(select.id, select.value, select.required, select.possible_values)
        return _with_validators(field, select)
    elif field_type == FieldType.BOOLEAN:
        boolean = _validate(_BooleanFieldPayload, payload)
        return _with_validators(BooleanField(boolean.id, boolean.value, boolean.required), boolean)
    elif field_type == FieldType.FILE:
        files = _validate(_FileFieldPayload, payload)
        return _with_validators(FileField(files.id, files.value, files.required), files)

    raise DeserializationError(f"Unsupported fieldType: {field_type.value!r}")


def parse_dependency(payload: Mapping[str, Any]) -> Dependency:
    """Build a dependency, generating an id when the payload has none"""
    if not isinstance(payload, Mapping):
        raise DeserializationError(f"Expected an object, got {type(payload).__name__}")
    data = _validate(_DependencyPayload, payload)
    return Dependency(
        id=data.id or new_id(),
        child_id=data.child_id,
        parent_id=data.parent_id,
        parent_value=data.parent_value,
    )


def dump_validator(validator: Validator) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"validatorType": validator.validator_type.value}
    if isinstance(validator, (TextLengthValidator, ArraySizeValidator)):
        payload["minLength"] = validator.min_length
        payload["maxLength"] = validator.max_length
    elif isinstance(validator, TextContainsValidator):
        payload["queryString"] = validator.query_string
    elif isinstance(validator, AllowedValuesValidator):
        payload["allowedValues"] = list(validator.allowed_values)
    return payload


def dump_field(field: FormField) -> Dict[str, Any]:
    """Payload that ``parse_field`` turns back into an equivalent field"""
    payload: Dict[str, Any] = {
        "id": field.id,
        "fieldType": field.field_type.value,
        "value": field.value,
        "required": field.required,
        "validators": [dump_validator(v) for v in field.validators],
    }
    if field.field_type == FieldType.SINGLE_SELECT:
        payload["possibleValues"] = list(field.possible_values)
    return payload


def dump_dependency(dependency: Dependency) -> Dict[str, Any]:
    return {
        "id": dependency.id,
        "childId": dependency.child_id,
        "parentId": dependency.parent_id,
        "parentValue": dependency.parent_value,
    }
