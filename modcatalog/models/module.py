"""
Module and Major data models.

A Module is immutable once constructed. It is created by the catalog
loader or by the remote-record translator and owned by the catalog map
(code -> Module).
"""

import logging
from dataclasses import dataclass, field

from ..config import MIN_CREDITS, MAX_CREDITS
from ..exceptions import InvalidCreditsError
from .prereq import PreReqTree, normalize_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Module:
    """
    A single university course unit.

    Attributes:
        code: Module code, upper-cased (e.g. "CS2113")
        name: Display name (e.g. "Software Engineering & Object-Oriented Programming")
        credits: Credit weight, 1-20 inclusive
        type: Category tag (e.g. "core", "elective")
        prerequisites: What must be completed before this module may be taken
    """
    code: str
    name: str
    credits: int
    type: str
    prerequisites: PreReqTree = field(default_factory=PreReqTree)

    def __post_init__(self):
        code = normalize_code(self.code or "")
        if not code:
            raise ValueError("Module code must not be empty")
        if not self.name:
            raise ValueError(f"Module {code} name must not be empty")
        if not self.type:
            raise ValueError(f"Module {code} type must not be empty")
        if isinstance(self.credits, bool) or not isinstance(self.credits, int) \
                or not MIN_CREDITS <= self.credits <= MAX_CREDITS:
            raise InvalidCreditsError(
                f"Module {code} credits must be {MIN_CREDITS}-{MAX_CREDITS}, got {self.credits!r}"
            )
        if not isinstance(self.prerequisites, PreReqTree):
            raise ValueError(f"Module {code} prerequisites must be a PreReqTree")
        object.__setattr__(self, "code", code)

        logger.debug("Module created: %s (%s)", self.name, code)


@dataclass(frozen=True)
class Major:
    """
    A named program of study referencing a subset of catalog modules.

    Only modules present in the catalog appear here; references to codes
    outside the catalog are dropped when the major is loaded.
    """
    name: str
    abbreviation: str
    modules: tuple = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Major name must not be empty")
        object.__setattr__(self, "modules", tuple(self.modules))

    @property
    def module_codes(self) -> list:
        return [m.code for m in self.modules]

    @property
    def total_credits(self) -> int:
        return sum(m.credits for m in self.modules)
