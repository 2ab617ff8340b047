import logging
from typing import Dict, List, Optional

from ..types.config import FormConfig
from ..types.exceptions import DuplicateSectionError, NotFoundError
from .section import Section, insert_at

logger = logging.getLogger(__name__)


class Form:
    """An ordered collection of sections"""

    def __init__(self, id: str, config: Optional[FormConfig] = None):
        self.id = id
        self.config = config or FormConfig()
        self._sections: Dict[str, Section] = {}
        self._section_order: List[str] = []

    @property
    def sections(self) -> List[Section]:
        return [self._sections[section_id] for section_id in self._section_order]

    def __len__(self) -> int:
        return len(self._sections)

    def __contains__(self, section_id: object) -> bool:
        return section_id in self._sections

    def create_section(self, section_id: Optional[str] = None) -> Section:
        """Create an empty section at the end of the form"""
        if section_id is None:
            section_id = self.config.section_config.id_factory()
        section = Section(section_id, self.config.section_config)
        self.add_section(section)
        return section

    def add_section(self, section: Section) -> None:
        if section.id in self._sections:
            raise DuplicateSectionError(f"Section '{section.id}' already exists in form '{self.id}'")

        self._sections[section.id] = section
        self._section_order.append(section.id)
        logger.debug("Added section %s to form %s", section.id, self.id)

    def get_section(self, section_id: str) -> Section:
        section = self._sections.get(section_id)
        if section is None:
            raise NotFoundError(f"Section '{section_id}' not found in form '{self.id}'")
        return section

    def delete_section(self, section_id: str) -> None:
        if self._sections.pop(section_id, None) is None:
            return
        self._section_order.remove(section_id)
        logger.debug("Deleted section %s from form %s", section_id, self.id)

    def move_section(self, section_id: str, index: int) -> None:
        if section_id not in self._sections:
            raise NotFoundError(f"Section '{section_id}' not found in form '{self.id}'")
        self._section_order.remove(section_id)
        insert_at(self._section_order, section_id, index)

    def is_valid(self) -> bool:
        return all(section.is_valid() for section in self._sections.values())

    def validation_errors(self) -> Dict[str, Dict[str, List[str]]]:
        """Section id -> field id -> messages, for sections with invalid fields"""
        errors = {}
        for section in self.sections:
            section_errors = section.validation_errors()
            if section_errors:
                errors[section.id] = section_errors
        return errors
