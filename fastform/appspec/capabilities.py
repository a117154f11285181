"""
capabilities.py - The v1 capability allow-list for AppSpec compilation.

The generator only knows how to build a fixed set of page templates,
input types and workflow states. This table is the single source of truth
for that surface; the compiler consults it and rejects anything outside it.

| Axis                | Supported set (v1)                                      |
|---------------------|---------------------------------------------------------|
| Page types          | welcome, form, review, success, login, list, detail     |
| Field types         | text, email, tel, date, textarea, select, radio,        |
|                     | checkbox, number                                        |
| Workflow states     | DRAFT, SUBMITTED, NEEDS_INFO, APPROVED, REJECTED        |
| Workflow complexity | transitions <= 3 x declared states                      |
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Tuple


class PageType(str, Enum):
    """Page templates the generator can build."""
    WELCOME = "welcome"  # consent and start page
    FORM = "form"  # input fields page
    REVIEW = "review"  # confirm before submit/resubmit
    SUCCESS = "success"  # post-submit confirmation
    LOGIN = "login"  # staff authentication
    LIST = "list"  # inbox/table view
    DETAIL = "detail"  # single submission view


class FieldType(str, Enum):
    """Form input types."""
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    DATE = "date"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    NUMBER = "number"


class WorkflowState(str, Enum):
    """Submission workflow states (closed set in v1)."""
    DRAFT = "DRAFT"  # client-only, never persisted
    SUBMITTED = "SUBMITTED"
    NEEDS_INFO = "NEEDS_INFO"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RoleId(str, Enum):
    PATIENT = "PATIENT"
    STAFF = "STAFF"


class ActionVariant(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DANGER = "danger"


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    EXISTS = "exists"


class AnalyticsTrigger(str, Enum):
    PAGEVIEW = "pageview"
    ACTION = "action"
    SUBMIT = "submit"
    TRANSITION = "transition"


class ValidationRuleType(str, Enum):
    """Known validation rules. Unknown rule types still render generically."""
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    MIN = "min"
    MAX = "max"


# =============================================================================
# Ordered value tables
# =============================================================================

SCHEMA_VERSION = "0.3"
THEME_PRESET = "healthcare-calm"
API_BASE_URL_PLACEHOLDER = "{{FASTFORM_API_URL}}"

SUPPORTED_PAGE_TYPES: Tuple[str, ...] = tuple(t.value for t in PageType)
SUPPORTED_FIELD_TYPES: Tuple[str, ...] = tuple(t.value for t in FieldType)
SUPPORTED_WORKFLOW_STATES: Tuple[str, ...] = tuple(s.value for s in WorkflowState)
ROLE_IDS: Tuple[str, ...] = tuple(r.value for r in RoleId)
ACTION_VARIANTS: Tuple[str, ...] = tuple(v.value for v in ActionVariant)
CONDITION_OPERATORS: Tuple[str, ...] = tuple(o.value for o in ConditionOperator)
ANALYTICS_TRIGGERS: Tuple[str, ...] = tuple(t.value for t in AnalyticsTrigger)

# Endpoint names every AppSpec must declare, in declaration order.
API_ENDPOINT_NAMES: Tuple[str, ...] = (
    # Patient
    "createSubmission",
    "getSubmission",
    "resubmitSubmission",
    # Staff auth
    "staffLogin",
    "staffLogout",
    "staffSession",
    # Staff
    "listSubmissions",
    "getSubmissionDetail",
    "transitionSubmission",
    # Analytics
    "trackEvent",
)

# Maximum transitions allowed per declared state.
MAX_TRANSITIONS_PER_STATE = 3


def _is_member(value: Any, supported: Tuple[str, ...]) -> bool:
    return isinstance(value, str) and value in supported


def is_supported_page_type(value: Any) -> bool:
    return _is_member(value, SUPPORTED_PAGE_TYPES)


def is_supported_field_type(value: Any) -> bool:
    return _is_member(value, SUPPORTED_FIELD_TYPES)


def is_supported_workflow_state(value: Any) -> bool:
    return _is_member(value, SUPPORTED_WORKFLOW_STATES)


def max_transitions(state_count: int) -> int:
    """Largest transition count a workflow with `state_count` states may declare."""
    return MAX_TRANSITIONS_PER_STATE * state_count


def is_workflow_too_complex(transition_count: int, state_count: int) -> bool:
    return transition_count > max_transitions(state_count)
