"""
Basic example demonstrating conditional visibility in a form section
"""
from dynamic_forms import (
    ConflictError,
    Dependency,
    Form,
    configure_logging,
    parse_field,
)


def show(section):
    for field in section.get_ordered_fields():
        marker = "👁 " if field.visible else "  "
        print(f"  {marker}{field.id} = {field.value!r}")
    print(f"  valid: {section.is_valid()}\n")


def main():
    configure_logging(verbose=True)
    print("=== Dynamic Forms Basic Example ===\n")

    form = Form("signup")
    section = form.create_section("contact")

    # Fields arrive as payloads from the form builder
    section.create_field(parse_field({
        "fieldType": "single_select",
        "id": "contact_method",
        "value": "phone",
        "required": True,
        "possibleValues": ["phone", "email"],
    }))
    section.create_field(parse_field({"fieldType": "email", "id": "email", "required": True}))
    section.create_field(parse_field({
        "fieldType": "text",
        "id": "phone",
        "value": "555-0100",
        "validator": {"validatorType": "text_length", "minLength": 7, "maxLength": 15},
    }))

    # Only ask for an email address when the user picked email
    section.create_dependency(Dependency("email-when-chosen", "email", "contact_method", "email"))
    print("Contact by phone:")
    show(section)

    section.update_field(parse_field({
        "fieldType": "single_select",
        "id": "contact_method",
        "value": "email",
        "required": True,
        "possibleValues": ["phone", "email"],
    }))
    print("Contact by email:")
    show(section)
    print(f"Errors: {section.validation_errors()}\n")

    print("=== Conflict Example ===\n")
    try:
        section.create_dependency(Dependency("second-parent", "email", "phone", "555-0100"))
    except ConflictError as e:
        print(f"Rejected: {e}")


if __name__ == "__main__":
    main()
