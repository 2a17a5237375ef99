"""
Error types raised by the knowledge base and the recommendation engine.

``InvalidKnowledgeBase`` is fatal at startup: the engine must never run
against a knowledge base that failed validation.

``InvalidProfile`` is recoverable: the caller can re-prompt the user and
evaluate again.  No partial results are ever returned alongside it.
"""

from __future__ import annotations

from typing import Optional


class AdvisorError(ValueError):
    """Base class for all algo_advisor validation errors."""


class InvalidKnowledgeBase(AdvisorError):
    """Raised when a knowledge base fails structural validation.

    Attributes:
        rule_id: The offending rule id, or ``None`` if it could not be determined.
        reason:  Human-readable description of the violation.
    """

    def __init__(self, reason: str, rule_id: Optional[str] = None) -> None:
        self.rule_id = rule_id
        self.reason  = reason
        where = f"Rule '{rule_id}'" if rule_id is not None else "Knowledge base"
        super().__init__(f"{where}: {reason}")


class InvalidProfile(AdvisorError):
    """Raised when a profile is missing, adds, or mis-types an attribute.

    Attributes:
        attribute: The offending attribute name, or ``None`` for whole-profile errors.
        reason:    Human-readable description of the violation.
    """

    def __init__(self, reason: str, attribute: Optional[str] = None) -> None:
        self.attribute = attribute
        self.reason    = reason
        where = f"Profile attribute '{attribute}'" if attribute is not None else "Profile"
        super().__init__(f"{where}: {reason}")
