"""
templates.py - Built-in AppSpec templates and new-app seeding.

The "Psych Intake Lite" template is the reference v1 app: a patient intake
flow (welcome, form, review, success) plus a staff inbox with a detail view
that approves, rejects or requests more information. It uses every page type
and the full five-state workflow, and is the seed the generation layer
refines from the user's intent.

Usage:
    from fastform.appspec.templates import psych_intake_template, seed_app_spec

    doc = psych_intake_template()          # fresh dict, safe to mutate
    doc = seed_app_spec("I need a therapy intake form", app_id, org_id, "acme")
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional

from fastform.config.runtime_config import (
    DEFAULT_API_ENDPOINTS,
    get_api_endpoints,
    get_environment_settings,
)
from fastform.naming import generate_heuristic_name

from .capabilities import API_BASE_URL_PLACEHOLDER, SCHEMA_VERSION, THEME_PRESET

logger = logging.getLogger(__name__)

PSYCH_INTAKE_APP_ID = "123e4567-e89b-12d3-a456-426614174000"

# The reference template always carries the built-in catalogue, whatever
# runtime.yaml overrides.
DEFAULT_ENDPOINTS: Dict[str, str] = dict(DEFAULT_API_ENDPOINTS)

_US_STATES = (
    ("CA", "California"),
    ("NY", "New York"),
    ("TX", "Texas"),
    ("FL", "Florida"),
    ("IL", "Illinois"),
    ("WA", "Washington"),
)

_PSYCH_INTAKE: Dict[str, Any] = {
    "id": PSYCH_INTAKE_APP_ID,
    "version": SCHEMA_VERSION,
    "meta": {
        "name": "Psych Intake Lite",
        "slug": "psych-intake",
        "description": "Simple patient intake form for a psychology practice",
        "orgId": "org-test-001",
        "orgSlug": "test-org",
    },
    "theme": {
        "preset": THEME_PRESET,
        "logo": "https://example.com/logo.png",
        "colors": {
            "primary": "#7C9A92",
            "background": "#F7F5F2",
            "text": "#2F3E46",
        },
    },
    "roles": [
        {"id": "PATIENT", "authRequired": False},
        {"id": "STAFF", "authRequired": True, "routePrefix": "/staff"},
    ],
    "pages": [
        {
            "id": "start",
            "route": "/",
            "role": "PATIENT",
            "type": "welcome",
            "title": "Welcome",
            "description": "Consent and start of the intake process",
        },
        {
            "id": "intake",
            "route": "/intake",
            "role": "PATIENT",
            "type": "form",
            "title": "Patient Intake",
            "description": "Tell us a little about yourself",
            "fields": [
                {
                    "id": "firstName",
                    "type": "text",
                    "label": "First Name",
                    "required": True,
                    "validation": [
                        {"type": "minLength", "value": 1, "message": "First name is required"},
                    ],
                },
                {
                    "id": "lastName",
                    "type": "text",
                    "label": "Last Name",
                    "required": True,
                },
                {
                    "id": "dob",
                    "type": "date",
                    "label": "Date of Birth",
                    "required": True,
                },
                {
                    "id": "email",
                    "type": "email",
                    "label": "Email",
                    "placeholder": "you@example.com",
                    "required": True,
                },
                {
                    "id": "phone",
                    "type": "tel",
                    "label": "Phone",
                    "placeholder": "(555) 555-5555",
                    "required": True,
                },
                {
                    "id": "state",
                    "type": "select",
                    "label": "State of Residence",
                    "required": True,
                    "options": [{"value": value, "label": label} for value, label in _US_STATES],
                },
                {
                    "id": "seekingHelp",
                    "type": "textarea",
                    "label": "What brings you here today?",
                    "required": True,
                    "validation": [
                        {
                            "type": "maxLength",
                            "value": 2000,
                            "message": "Please keep this under 2000 characters",
                        },
                    ],
                },
                {
                    "id": "previousTherapy",
                    "type": "radio",
                    "label": "Have you been in therapy before?",
                    "required": True,
                    "options": [
                        {"value": "yes", "label": "Yes"},
                        {"value": "no", "label": "No"},
                    ],
                },
                {
                    "id": "previousTherapyDetails",
                    "type": "textarea",
                    "label": "Tell us about your previous therapy",
                    "required": False,
                    "condition": {"field": "previousTherapy", "operator": "equals", "value": "yes"},
                },
                {
                    "id": "emergencyContact",
                    "type": "text",
                    "label": "Emergency Contact (name and phone)",
                    "required": True,
                },
            ],
            "actions": [],
        },
        {
            "id": "review",
            "route": "/review",
            "role": "PATIENT",
            "type": "review",
            "title": "Review Your Answers",
            "description": "Check your answers before submitting",
        },
        {
            "id": "submitted",
            "route": "/submitted",
            "role": "PATIENT",
            "type": "success",
            "title": "Thank You",
            "description": "Your intake has been submitted. We will be in touch soon.",
        },
        {
            "id": "staff-login",
            "route": "/staff/login",
            "role": "STAFF",
            "type": "login",
            "title": "Staff Login",
        },
        {
            "id": "staff-inbox",
            "route": "/staff/inbox",
            "role": "STAFF",
            "type": "list",
            "title": "Submissions Inbox",
            "description": "All patient submissions, newest first",
        },
        {
            "id": "staff-detail",
            "route": "/staff/submission/[id]",
            "role": "STAFF",
            "type": "detail",
            "title": "Submission Detail",
            "actions": [
                {"id": "approve", "label": "Approve", "targetState": "APPROVED", "variant": "primary"},
                {
                    "id": "request-info",
                    "label": "Request More Info",
                    "targetState": "NEEDS_INFO",
                    "requiresNote": True,
                    "variant": "secondary",
                },
                {
                    "id": "reject",
                    "label": "Reject",
                    "targetState": "REJECTED",
                    "requiresNote": True,
                    "variant": "danger",
                },
            ],
        },
    ],
    "workflow": {
        "states": ["DRAFT", "SUBMITTED", "NEEDS_INFO", "APPROVED", "REJECTED"],
        "initialState": "DRAFT",
        "transitions": [
            {"from": "DRAFT", "to": "SUBMITTED", "allowedRoles": ["PATIENT"]},
            {"from": "SUBMITTED", "to": "APPROVED", "allowedRoles": ["STAFF"]},
            {"from": "SUBMITTED", "to": "NEEDS_INFO", "allowedRoles": ["STAFF"]},
            {"from": "SUBMITTED", "to": "REJECTED", "allowedRoles": ["STAFF"]},
            {"from": "NEEDS_INFO", "to": "SUBMITTED", "allowedRoles": ["PATIENT"]},
            {"from": "NEEDS_INFO", "to": "REJECTED", "allowedRoles": ["STAFF"]},
        ],
    },
    "api": {
        "baseUrl": API_BASE_URL_PLACEHOLDER,
        "endpoints": DEFAULT_ENDPOINTS,
    },
    "analytics": {
        "events": [
            {"name": "intake_started", "trigger": "pageview", "page": "/"},
            {"name": "intake_form_viewed", "trigger": "pageview", "page": "/intake"},
            {"name": "intake_reviewed", "trigger": "pageview", "page": "/review"},
            {"name": "intake_submitted", "trigger": "submit", "page": "/review"},
            {"name": "intake_confirmation_viewed", "trigger": "pageview", "page": "/submitted"},
            {"name": "staff_login", "trigger": "action", "page": "/staff/login"},
            {"name": "inbox_viewed", "trigger": "pageview", "page": "/staff/inbox"},
            {"name": "submission_viewed", "trigger": "pageview", "page": "/staff/submission/[id]"},
            {"name": "submission_transitioned", "trigger": "transition", "page": "/staff/submission/[id]"},
            {"name": "patient_resubmitted", "trigger": "submit"},
        ],
    },
    "environments": {
        "staging": {
            "domain": "psych-intake-test-org-staging.getfastform.com",
            "apiUrl": "https://api-staging.getfastform.com",
        },
        "production": {
            "domain": "psych-intake-test-org.getfastform.com",
            "apiUrl": "https://api.getfastform.com",
        },
    },
}

TEMPLATES: Dict[str, Dict[str, Any]] = {
    "psych-intake-lite": _PSYCH_INTAKE,
}


def psych_intake_template() -> Dict[str, Any]:
    """Fresh copy of the Psych Intake Lite AppSpec document."""
    return copy.deepcopy(_PSYCH_INTAKE)


def get_template(name: str) -> Dict[str, Any]:
    """Fresh copy of a built-in template by name.

    Raises:
        KeyError: If no template has that name.
    """
    if name not in TEMPLATES:
        raise KeyError(f"Unknown template {name!r}; available: {', '.join(sorted(TEMPLATES))}")
    return copy.deepcopy(TEMPLATES[name])


def seed_app_spec(
    intent: str,
    app_id: str,
    org_id: str,
    org_slug: str,
    template: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the starting AppSpec for a new app from the user's intent.

    The template (Psych Intake Lite by default) is copied, then identity,
    heuristic name and slug, endpoint catalogue and environment targets are
    filled in for this app. The input template is never mutated.
    """
    doc = copy.deepcopy(template) if template is not None else psych_intake_template()
    heuristic = generate_heuristic_name(intent)

    doc["id"] = app_id
    doc["version"] = SCHEMA_VERSION
    doc["meta"] = dict(
        doc.get("meta", {}),
        name=heuristic.name,
        slug=heuristic.slug,
        orgId=org_id,
        orgSlug=org_slug,
    )
    doc["api"] = {"baseUrl": API_BASE_URL_PLACEHOLDER, "endpoints": get_api_endpoints()}

    environments = {}
    for name in ("staging", "production"):
        settings = get_environment_settings(name)
        environments[name] = {
            "domain": settings.domain_for(heuristic.slug, org_slug),
            "apiUrl": settings.api_url,
        }
    doc["environments"] = environments

    logger.debug("Seeded AppSpec %s as %r (%s)", app_id, heuristic.name, heuristic.slug)
    return doc
