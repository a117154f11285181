"""
validator.py - Structural validation of AppSpec documents.

Two entry points share the same per-section JSON schemas:

- ``is_valid_app_spec(doc)``: boolean gate used before regeneration and
  before compilation. Short-circuits on the first failing section and never
  raises, whatever the input.
- ``validate_app_spec(doc)``: runs every section and returns a
  ``ValidationResult`` with one diagnostic per problem (for logs / CLI).

Validity is structural only. Page types and workflow states are checked
against the v1 enums here; field types, action target states and
transition endpoints are only required to be strings so that the compiler
can answer them with a "not supported, try X" error.

``find_consistency_issues(spec)`` reports cross-field gaps (actions
targeting undeclared states, conditions naming unknown fields, ...) as
warnings. Nothing enforces them.

Usage:
    from fastform.appspec.validator import is_valid_app_spec, validate_app_spec

    if not is_valid_app_spec(document):
        result = validate_app_spec(document)
        logger.info("Rejected AppSpec:\\n%s", result.format_report())
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Tuple, Union

from jsonschema import Draft7Validator

from fastform.validator.errors import ValidationResult

from .capabilities import (
    ACTION_VARIANTS,
    ANALYTICS_TRIGGERS,
    API_BASE_URL_PLACEHOLDER,
    API_ENDPOINT_NAMES,
    CONDITION_OPERATORS,
    ROLE_IDS,
    SCHEMA_VERSION,
    SUPPORTED_PAGE_TYPES,
    SUPPORTED_WORKFLOW_STATES,
    THEME_PRESET,
)
from .types import AppSpec

logger = logging.getLogger(__name__)

_STRING = {"type": "string"}
_BOOLEAN = {"type": "boolean"}


def _object(required: Tuple[str, ...], properties: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "object", "required": list(required), "properties": properties}


def _array_of(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "array", "items": items}


# =============================================================================
# Section schemas (Draft 7)
# =============================================================================

ROOT_SCHEMA = _object(
    ("id", "version", "meta", "theme", "roles", "pages",
     "workflow", "api", "analytics", "environments"),
    {
        "id": _STRING,
        "version": {"type": "string", "const": SCHEMA_VERSION},
    },
)

META_SCHEMA = _object(
    ("name", "slug", "description", "orgId", "orgSlug"),
    {key: _STRING for key in ("name", "slug", "description", "orgId", "orgSlug")},
)

THEME_SCHEMA = _object(
    ("preset",),
    {
        "preset": {"type": "string", "const": THEME_PRESET},
        "logo": _STRING,
        "colors": _object((), {key: _STRING for key in ("primary", "background", "text")}),
    },
)

ROLES_SCHEMA = _array_of(
    _object(
        ("id", "authRequired"),
        {
            "id": {"type": "string", "enum": list(ROLE_IDS)},
            "authRequired": _BOOLEAN,
            "routePrefix": _STRING,
        },
    )
)

_FIELD_SCHEMA = _object(
    ("id", "type", "label"),
    {
        "id": _STRING,
        "type": _STRING,
        "label": _STRING,
        "placeholder": _STRING,
        "required": _BOOLEAN,
        "options": _array_of(_object(("value", "label"), {"value": _STRING, "label": _STRING})),
        "condition": _object(
            ("field", "operator"),
            {
                "field": _STRING,
                "operator": {"type": "string", "enum": list(CONDITION_OPERATORS)},
                "value": {"type": ["string", "boolean", "number"]},
            },
        ),
        "validation": _array_of(
            _object(
                ("type", "value", "message"),
                {
                    "type": _STRING,
                    "value": {"type": ["string", "number"]},
                    "message": _STRING,
                },
            )
        ),
    },
)

_ACTION_SCHEMA = _object(
    ("id", "label", "targetState", "variant"),
    {
        "id": _STRING,
        "label": _STRING,
        "targetState": _STRING,
        "requiresNote": _BOOLEAN,
        "variant": {"type": "string", "enum": list(ACTION_VARIANTS)},
    },
)

PAGES_SCHEMA = _array_of(
    _object(
        ("id", "route", "role", "type", "title"),
        {
            "id": _STRING,
            "route": _STRING,
            "role": {"type": "string", "enum": list(ROLE_IDS)},
            "type": {"type": "string", "enum": list(SUPPORTED_PAGE_TYPES)},
            "title": _STRING,
            "description": _STRING,
            "fields": _array_of(_FIELD_SCHEMA),
            "actions": _array_of(_ACTION_SCHEMA),
        },
    )
)

_STATE = {"type": "string", "enum": list(SUPPORTED_WORKFLOW_STATES)}

WORKFLOW_SCHEMA = _object(
    ("states", "initialState", "transitions"),
    {
        "states": _array_of(_STATE),
        "initialState": _STATE,
        "transitions": _array_of(
            _object(
                ("from", "to", "allowedRoles"),
                {
                    # Single state or a non-empty list of states; items and
                    # minItems only apply to lists.
                    "from": {"type": ["string", "array"], "items": _STRING, "minItems": 1},
                    "to": _STRING,
                    "allowedRoles": _array_of({"type": "string", "enum": list(ROLE_IDS)}),
                },
            )
        ),
    },
)

API_SCHEMA = _object(
    ("baseUrl", "endpoints"),
    {
        "baseUrl": {"type": "string", "const": API_BASE_URL_PLACEHOLDER},
        "endpoints": _object(API_ENDPOINT_NAMES, {name: _STRING for name in API_ENDPOINT_NAMES}),
    },
)

ANALYTICS_SCHEMA = _object(
    ("events",),
    {
        "events": _array_of(
            _object(
                ("name", "trigger"),
                {
                    "name": _STRING,
                    "trigger": {"type": "string", "enum": list(ANALYTICS_TRIGGERS)},
                    "page": _STRING,
                },
            )
        ),
    },
)

_TARGET_SCHEMA = _object(("domain", "apiUrl"), {"domain": _STRING, "apiUrl": _STRING})

ENVIRONMENTS_SCHEMA = _object(
    ("staging", "production"),
    {"staging": _TARGET_SCHEMA, "production": _TARGET_SCHEMA},
)

# Section name -> compiled validator, in validation order.
SECTION_VALIDATORS: Tuple[Tuple[str, Draft7Validator], ...] = (
    ("meta", Draft7Validator(META_SCHEMA)),
    ("theme", Draft7Validator(THEME_SCHEMA)),
    ("roles", Draft7Validator(ROLES_SCHEMA)),
    ("pages", Draft7Validator(PAGES_SCHEMA)),
    ("workflow", Draft7Validator(WORKFLOW_SCHEMA)),
    ("api", Draft7Validator(API_SCHEMA)),
    ("analytics", Draft7Validator(ANALYTICS_SCHEMA)),
    ("environments", Draft7Validator(ENVIRONMENTS_SCHEMA)),
)

_ROOT_VALIDATOR = Draft7Validator(ROOT_SCHEMA)


# =============================================================================
# Boolean gate
# =============================================================================


def is_valid_app_spec(doc: Any) -> bool:
    """Return True iff `doc` is a structurally valid AppSpec v0.3 document.

    Never raises. ``None``, scalars, lists and empty mappings are all invalid.
    """
    if not isinstance(doc, dict) or not _ROOT_VALIDATOR.is_valid(doc):
        return False

    for section, validator in SECTION_VALIDATORS:
        if not validator.is_valid(doc[section]):
            logger.debug("AppSpec rejected: section '%s' is invalid", section)
            return False

    return True


# =============================================================================
# Diagnostics
# =============================================================================


def _format_location(section: str, path: Any) -> str:
    # Root-level keys are reported bare ("version", not "root.version").
    location = "" if section == "root" else section
    for part in path:
        if isinstance(part, int):
            location += f"[{part}]"
        else:
            location += f".{part}" if location else str(part)
    return location or "root"


def _collect(section: str, validator: Draft7Validator, value: Any, result: ValidationResult) -> None:
    errors = sorted(validator.iter_errors(value), key=lambda e: list(map(str, e.absolute_path)))
    for error in errors:
        location = _format_location(section, error.absolute_path)
        result.add_error(
            "SCHEMA",
            location,
            error.message,
            f"Regenerate the AppSpec so '{location}' matches the v{SCHEMA_VERSION} schema",
            value=error.instance,
        )


def validate_app_spec(doc: Any) -> ValidationResult:
    """Validate every section of `doc` and collect all structural problems.

    Agrees with ``is_valid_app_spec``: the result has errors iff that returns False.
    """
    result = ValidationResult()

    if not isinstance(doc, dict):
        result.add_error(
            "TYPE",
            "root",
            f"must be an object, got {type(doc).__name__}",
            "Pass the parsed AppSpec JSON object",
        )
        return result

    _collect("root", _ROOT_VALIDATOR, doc, result)

    for section, validator in SECTION_VALIDATORS:
        if section in doc:
            _collect(section, validator, doc[section], result)

    return result


# =============================================================================
# Cross-field consistency (warnings only)
# =============================================================================


def _check_workflow_references(spec: AppSpec, result: ValidationResult) -> None:
    declared = set(spec.workflow.states)

    if spec.workflow.initial_state not in declared:
        result.add_warning(
            "CONSISTENCY",
            "workflow.initialState",
            f"'{spec.workflow.initial_state}' is not one of workflow.states",
            "Add the initial state to workflow.states",
        )

    for t_index, transition in enumerate(spec.workflow.transitions):
        for state in transition.sources + (transition.to,):
            if state not in declared:
                result.add_warning(
                    "CONSISTENCY",
                    f"workflow.transitions[{t_index}]",
                    f"references undeclared state '{state}'",
                    "Declare the state in workflow.states or drop the transition",
                )

    for p_index, page in enumerate(spec.pages):
        for a_index, action in enumerate(page.actions or ()):
            if action.target_state not in declared:
                result.add_warning(
                    "CONSISTENCY",
                    f"pages[{p_index}].actions[{a_index}].targetState",
                    f"'{action.target_state}' is not one of workflow.states",
                    "Point the action at a declared workflow state",
                )


def _check_page_references(spec: AppSpec, result: ValidationResult) -> None:
    seen_ids: Dict[str, int] = {}
    seen_routes: Dict[str, int] = {}

    for p_index, page in enumerate(spec.pages):
        if page.id in seen_ids:
            result.add_warning(
                "CONSISTENCY",
                f"pages[{p_index}].id",
                f"duplicates pages[{seen_ids[page.id]}].id '{page.id}'",
                "Give every page a unique id",
            )
        seen_ids.setdefault(page.id, p_index)

        if page.route in seen_routes:
            result.add_warning(
                "CONSISTENCY",
                f"pages[{p_index}].route",
                f"duplicates pages[{seen_routes[page.route]}].route '{page.route}'",
                "Give every page a unique route",
            )
        seen_routes.setdefault(page.route, p_index)

        field_ids = {field.id for field in page.fields or ()}
        for f_index, field in enumerate(page.fields or ()):
            if field.condition and field.condition.field not in field_ids:
                result.add_warning(
                    "CONSISTENCY",
                    f"pages[{p_index}].fields[{f_index}].condition.field",
                    f"'{field.condition.field}' is not a field on page '{page.id}'",
                    "Condition on a field declared on the same page",
                )


def _check_analytics_references(spec: AppSpec, result: ValidationResult) -> None:
    routes = {page.route for page in spec.pages}
    for e_index, event in enumerate(spec.analytics.events):
        if event.page is not None and event.page not in routes:
            result.add_warning(
                "CONSISTENCY",
                f"analytics.events[{e_index}].page",
                f"'{event.page}' does not match any page route",
                "Use the route of a declared page",
            )


_CONSISTENCY_CHECKS: Tuple[Callable[[AppSpec, ValidationResult], None], ...] = (
    _check_workflow_references,
    _check_page_references,
    _check_analytics_references,
)


def find_consistency_issues(spec: Union[AppSpec, Mapping[str, Any]]) -> ValidationResult:
    """Report cross-field references that do not resolve, as warnings."""
    if not isinstance(spec, AppSpec):
        spec = AppSpec.from_dict(dict(spec))

    result = ValidationResult()
    for check in _CONSISTENCY_CHECKS:
        check(spec, result)
    return result


def consistency_warnings(spec: Union[AppSpec, Mapping[str, Any]]) -> List[str]:
    """Formatted consistency warnings, in deterministic order."""
    return [str(w) for w in find_consistency_issues(spec).sorted_warnings()]
