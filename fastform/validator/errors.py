# fastform/validator/errors.py
"""Located diagnostics for AppSpec documents.

A diagnostic names the document location it is about (``pages[0].title``,
``workflow.transitions[2]``), what is wrong and how to fix it. Results are
ordered by document section first, then by location, so reports are stable
whatever order the checks ran in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# [FAIL] TYPE: location problem / Fix: action
ERROR_TEMPLATE = "[FAIL] {error_type}: {location} {problem}\n  Fix: {fix_action}"
WARNING_TEMPLATE = "[WARN] {error_type}: {location} {problem}\n  Fix: {fix_action}"

# Top-level sections of an AppSpec, in document order.
SECTION_ORDER: Tuple[str, ...] = (
    "root",
    "meta",
    "theme",
    "roles",
    "pages",
    "workflow",
    "api",
    "analytics",
    "environments",
)


def _section_of(location: str) -> str:
    head = location.split(".", 1)[0].split("[", 1)[0]
    return head if head in SECTION_ORDER else "root"


@dataclass(frozen=True)
class ValidationError:
    """One problem at one location of an AppSpec document."""
    error_type: str
    location: str
    problem: str
    fix_action: str
    value: Optional[Any] = field(default=None, compare=False, repr=False)

    @property
    def section(self) -> str:
        return _section_of(self.location)

    def format(self, template: str = ERROR_TEMPLATE) -> str:
        return template.format(
            error_type=self.error_type,
            location=self.location,
            problem=self.problem,
            fix_action=self.fix_action,
        )

    def sort_key(self) -> Tuple[int, str]:
        return (SECTION_ORDER.index(self.section), self.location)

    def __str__(self) -> str:
        return f"[{self.location}] {self.problem}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.error_type,
            "location": self.location,
            "problem": self.problem,
            "fix_action": self.fix_action,
        }


@dataclass
class ValidationResult:
    """Errors (the document is invalid) and warnings (it is valid but inconsistent)."""
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    def add_error(self, error_type: str, location: str, problem: str, fix_action: str,
                  value: Optional[Any] = None) -> None:
        self.errors.append(ValidationError(error_type, location, problem, fix_action, value))

    def add_warning(self, error_type: str, location: str, problem: str, fix_action: str,
                    value: Optional[Any] = None) -> None:
        self.warnings.append(ValidationError(error_type, location, problem, fix_action, value))

    def extend(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def sorted_errors(self) -> List[ValidationError]:
        return sorted(self.errors, key=ValidationError.sort_key)

    def sorted_warnings(self) -> List[ValidationError]:
        return sorted(self.warnings, key=ValidationError.sort_key)

    def format_report(self) -> str:
        """All errors, then all warnings, each in section/location order."""
        blocks = [e.format() for e in self.sorted_errors()]
        blocks += [w.format(WARNING_TEMPLATE) for w in self.sorted_warnings()]
        return "\n".join(blocks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "FAIL" if self.has_errors() else "PASS",
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "errors": [e.to_dict() for e in self.sorted_errors()],
            "warnings": [w.to_dict() for w in self.sorted_warnings()],
        }
