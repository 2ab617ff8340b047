from dataclasses import dataclass
from typing import Any

from ..types.values import strict_equals


@dataclass(frozen=True)
class Dependency:
    """Makes the child field visible only while the parent holds ``parent_value``"""

    id: str
    child_id: str
    parent_id: str
    parent_value: Any

    def equals_parent_value(self, candidate: Any) -> bool:
        return strict_equals(self.parent_value, candidate)
