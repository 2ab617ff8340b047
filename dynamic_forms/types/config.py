from dataclasses import dataclass, field
from typing import Callable
from uuid import uuid4


def new_id() -> str:
    return str(uuid4())


@dataclass
class SectionConfig:
    id_factory: Callable[[], str] = new_id
    # Re-check the whole graph after every mutation
    check_invariants: bool = False


@dataclass
class FormConfig:
    section_config: SectionConfig = field(default_factory=SectionConfig)
