"""Payload (de)serialization tests"""
import pytest

from dynamic_forms import (
    AllowedValuesValidator,
    ArraySizeValidator,
    BooleanField,
    Dependency,
    DeserializationError,
    EmailField,
    EmailValidator,
    FieldType,
    FileField,
    SingleSelectField,
    TextContainsValidator,
    TextField,
    TextLengthValidator,
    dump_dependency,
    dump_field,
    dump_validator,
    parse_dependency,
    parse_field,
    parse_validator,
)


class TestParseValidator:
    """Test validatorType dispatch"""

    def test_text_length(self):
        validator = parse_validator({"validatorType": "text_length", "minLength": 2, "maxLength": 8})
        assert validator == TextLengthValidator(2, 8)

    def test_text_length_open_bound(self):
        assert parse_validator({"validatorType": "text_length", "minLength": 2}) == TextLengthValidator(2, None)

    def test_text_contains(self):
        validator = parse_validator({"validatorType": "text_contains", "queryString": "@corp"})
        assert validator == TextContainsValidator("@corp")

    def test_email(self):
        assert isinstance(parse_validator({"validatorType": "email"}), EmailValidator)

    def test_array_contains(self):
        validator = parse_validator({"validatorType": "array_contains", "allowedValues": ["a", "b"]})
        assert validator == AllowedValuesValidator(["a", "b"])

    def test_array_size(self):
        validator = parse_validator({"validatorType": "array_size", "maxLength": 3})
        assert validator == ArraySizeValidator(None, 3)

    def test_missing_tag(self):
        with pytest.raises(DeserializationError, match="'validatorType' is missing"):
            parse_validator({"minLength": 1})

    def test_unknown_tag(self):
        with pytest.raises(DeserializationError, match="Unknown validatorType"):
            parse_validator({"validatorType": "regex"})

    def test_missing_parameter(self):
        with pytest.raises(DeserializationError, match="TextContainsPayload"):
            parse_validator({"validatorType": "text_contains"})

    def test_not_an_object(self):
        with pytest.raises(DeserializationError, match="Expected an object"):
            parse_validator(["email"])


class TestParseField:
    """Test fieldType dispatch"""

    def test_text_field_with_single_validator(self):
        field = parse_field({
            "fieldType": "text",
            "id": "name",
            "value": "Alice",
            "required": True,
            "validator": {"validatorType": "text_length", "minLength": 1, "maxLength": 10},
        })

        assert isinstance(field, TextField)
        assert field.id == "name"
        assert field.value == "Alice"
        assert field.required is True
        assert field.validators == [TextLengthValidator(1, 10)]

    def test_text_field_without_validator(self):
        field = parse_field({"fieldType": "text", "id": "a"})

        assert field.value is None
        assert field.required is False
        assert field.validators == []

    def test_email_field(self):
        field = parse_field({"fieldType": "email", "id": "e", "value": "a@example.com"})
        assert isinstance(field, EmailField)
        assert field.is_valid() is True

    def test_single_select_field(self):
        field = parse_field({
            "fieldType": "single_select",
            "id": "s",
            "value": "opt1",
            "possibleValues": ["opt1", "opt2"],
        })

        assert isinstance(field, SingleSelectField)
        assert field.possible_values == ["opt1", "opt2"]

    def test_single_select_requires_options(self):
        with pytest.raises(DeserializationError):
            parse_field({"fieldType": "single_select", "id": "s"})

    def test_boolean_field(self):
        field = parse_field({"fieldType": "boolean", "id": "b", "value": False, "required": True})

        assert isinstance(field, BooleanField)
        assert field.value is False

    def test_boolean_field_rejects_non_boolean(self):
        with pytest.raises(DeserializationError):
            parse_field({"fieldType": "boolean", "id": "b", "value": "yes"})

    def test_file_field(self):
        field = parse_field({
            "fieldType": "file",
            "id": "f",
            "value": ["s3://bucket/a.pdf"],
            "validators": [{"validatorType": "array_size", "maxLength": 2}],
        })

        assert isinstance(field, FileField)
        assert field.validators == [ArraySizeValidator(None, 2)]

    def test_enum_tag_accepted(self):
        assert isinstance(parse_field({"fieldType": FieldType.TEXT, "id": "a"}), TextField)

    def test_missing_field_type(self):
        with pytest.raises(DeserializationError, match="'fieldType' is missing"):
            parse_field({"id": "a"})

    def test_validators_replace_defaults_for_any_kind(self):
        field = parse_field({
            "fieldType": "boolean",
            "id": "agree",
            "validators": [{"validatorType": "array_contains", "allowedValues": [True]}],
        })

        assert isinstance(field, BooleanField)
        assert field.validators == [AllowedValuesValidator([True])]

    def test_defaults_kept_without_validators(self):
        field = parse_field({"fieldType": "email", "id": "e"})
        assert field.validators == [EmailValidator()]

    def test_unknown_field_type(self):
        with pytest.raises(DeserializationError, match="Unknown fieldType"):
            parse_field({"fieldType": "signature", "id": "a"})

    def test_missing_id(self):
        with pytest.raises(DeserializationError):
            parse_field({"fieldType": "text"})

    def test_bad_nested_validator(self):
        with pytest.raises(DeserializationError, match="Unknown validatorType"):
            parse_field({"fieldType": "text", "id": "a", "validator": {"validatorType": "nope"}})


class TestParseDependency:
    def test_parse_dependency(self):
        dep = parse_dependency({"id": "d", "childId": "c", "parentId": "p", "parentValue": "opt2"})
        assert dep == Dependency("d", "c", "p", "opt2")

    def test_generated_id(self):
        dep = parse_dependency({"childId": "c", "parentId": "p", "parentValue": True})
        assert dep.id

    def test_missing_endpoint(self):
        with pytest.raises(DeserializationError):
            parse_dependency({"childId": "c"})


class TestDump:
    """Dumped payloads parse back into equivalent objects"""

    def test_dump_validator(self):
        assert dump_validator(TextContainsValidator("x")) == {"validatorType": "text_contains", "queryString": "x"}
        assert dump_validator(EmailValidator()) == {"validatorType": "email"}

    def test_dump_text_field(self):
        field = TextField("a", "hi", required=True, validators=[TextLengthValidator(1, 5)])
        payload = dump_field(field)

        assert payload == {
            "id": "a",
            "fieldType": "text",
            "value": "hi",
            "required": True,
            "validators": [{"validatorType": "text_length", "minLength": 1, "maxLength": 5}],
        }
        assert parse_field(payload).validators == field.validators

    def test_dump_select_field(self):
        payload = dump_field(SingleSelectField("s", "a", possible_values=["a", "b"]))

        assert payload["possibleValues"] == ["a", "b"]
        assert parse_field(payload).possible_values == ["a", "b"]

    def test_dump_keeps_validators_for_every_kind(self):
        select = SingleSelectField("s", "a", possible_values=["a", "b"])
        select.validators = [AllowedValuesValidator(["a"])]
        boolean = BooleanField("b", True)
        boolean.validators = [AllowedValuesValidator([True])]

        for field in (select, boolean):
            restored = parse_field(dump_field(field))
            assert type(restored) is type(field)
            assert restored.validators == field.validators

        assert parse_field(dump_field(select)).is_valid() is True
        restored = parse_field(dump_field(boolean))
        restored.value = False
        assert restored.is_valid() is False

    def test_dump_dependency(self):
        dep = Dependency("d", "c", "p", 3)
        assert parse_dependency(dump_dependency(dep)) == dep
