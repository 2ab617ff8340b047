"""Pytest configuration and shared fixtures"""
import itertools

import pytest

from dynamic_forms import (
    BooleanField,
    Dependency,
    EmailField,
    Form,
    FormConfig,
    Section,
    SectionConfig,
    SingleSelectField,
    TextField,
    TextLengthValidator,
)


@pytest.fixture
def id_factory():
    """Deterministic ids: gen-1, gen-2, ..."""
    counter = itertools.count(1)
    return lambda: f"gen-{next(counter)}"


@pytest.fixture
def section_config(id_factory):
    """Config that re-checks the graph after every mutation"""
    return SectionConfig(id_factory=id_factory, check_invariants=True)


@pytest.fixture
def section(section_config):
    """Empty section for testing"""
    return Section("section-1", section_config)


@pytest.fixture
def form(section_config):
    """Empty form whose sections share the checking config"""
    return Form("form-1", FormConfig(section_config=section_config))


@pytest.fixture
def text_field():
    """Required text field with a length validator"""
    return TextField("name", "Alice", required=True, validators=[TextLengthValidator(2, 20)])


@pytest.fixture
def select_field():
    """Single select parent field currently set to 'opt1'"""
    return SingleSelectField("choice", "opt1", required=True, possible_values=["opt1", "opt2"])


@pytest.fixture
def populated_section(section, select_field):
    """Section with a select parent gating two children on 'opt2'"""
    section.create_field(select_field)
    section.create_field(TextField("details", "x"))
    section.create_field(EmailField("contact", "a@example.com"))
    section.create_field(BooleanField("agree", True))
    section.create_dependency(Dependency("dep-details", "details", "choice", "opt2"))
    section.create_dependency(Dependency("dep-contact", "contact", "choice", "opt2"))
    return section
