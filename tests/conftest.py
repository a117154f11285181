"""
Test fixtures for the fastform AppSpec core.

Provides fresh AppSpec documents (plain dicts, safe to mutate per test) and
configuration isolation.
"""

import copy
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Make the fastform package importable without installing it
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from fastform.config import runtime_config  # noqa: E402

# ============================================================================
# AppSpec documents
# ============================================================================

ENDPOINTS: Dict[str, str] = {
    "createSubmission": "POST /api/apps/:appId/submissions",
    "getSubmission": "GET /api/apps/:appId/submissions/:id",
    "resubmitSubmission": "POST /api/apps/:appId/submissions/:id/resubmit",
    "staffLogin": "POST /api/apps/:appId/staff/login",
    "staffLogout": "POST /api/apps/:appId/staff/logout",
    "staffSession": "GET /api/apps/:appId/staff/session",
    "listSubmissions": "GET /api/apps/:appId/staff/inbox",
    "getSubmissionDetail": "GET /api/apps/:appId/staff/submissions/:id",
    "transitionSubmission": "POST /api/apps/:appId/staff/submissions/:id/transition",
    "trackEvent": "POST /api/apps/:appId/events",
}

_MINIMAL: Dict[str, Any] = {
    "id": "test-app-id",
    "version": "0.3",
    "meta": {
        "name": "Test App",
        "slug": "test-app",
        "description": "A minimal test application",
        "orgId": "test-org-id",
        "orgSlug": "test-org",
    },
    "theme": {"preset": "healthcare-calm"},
    "roles": [
        {"id": "PATIENT", "authRequired": False},
        {"id": "STAFF", "authRequired": True, "routePrefix": "/staff"},
    ],
    "pages": [
        {"id": "welcome", "route": "/", "role": "PATIENT", "type": "welcome", "title": "Welcome"},
    ],
    "workflow": {
        "states": ["DRAFT", "SUBMITTED"],
        "initialState": "DRAFT",
        "transitions": [{"from": "DRAFT", "to": "SUBMITTED", "allowedRoles": ["PATIENT"]}],
    },
    "api": {"baseUrl": "{{FASTFORM_API_URL}}", "endpoints": ENDPOINTS},
    "analytics": {"events": [{"name": "page_view", "trigger": "pageview", "page": "/"}]},
    "environments": {
        "staging": {
            "domain": "test-app-staging.getfastform.com",
            "apiUrl": "https://api-staging.getfastform.com",
        },
        "production": {
            "domain": "test-app.getfastform.com",
            "apiUrl": "https://api.getfastform.com",
        },
    },
}


def make_minimal_spec() -> Dict[str, Any]:
    """Smallest valid AppSpec: one welcome page, DRAFT -> SUBMITTED."""
    return copy.deepcopy(_MINIMAL)


def make_complex_spec() -> Dict[str, Any]:
    """Seven pages covering every page type, fields with rules and options, staff actions."""
    spec = make_minimal_spec()
    spec["meta"]["name"] = "Complex Healthcare App"
    spec["meta"]["description"] = "A complex multi-page application with extensive forms"
    spec["pages"] = [
        {
            "id": "welcome",
            "route": "/",
            "role": "PATIENT",
            "type": "welcome",
            "title": "Welcome to Our Platform",
            "description": "Please read and consent to continue",
            "fields": [
                {"id": "consent", "type": "checkbox", "label": "I agree to terms and conditions", "required": True},
                {"id": "privacy", "type": "checkbox", "label": "I accept the privacy policy", "required": True},
            ],
        },
        {
            "id": "intake-form",
            "route": "/intake",
            "role": "PATIENT",
            "type": "form",
            "title": "Patient Intake Form",
            "description": "Please fill out all required fields",
            "fields": [
                {
                    "id": "firstName",
                    "type": "text",
                    "label": "First Name",
                    "required": True,
                    "validation": [
                        {"type": "minLength", "value": 2, "message": "First name must be at least 2 characters"},
                    ],
                },
                {"id": "lastName", "type": "text", "label": "Last Name", "required": True},
                {
                    "id": "email",
                    "type": "email",
                    "label": "Email Address",
                    "required": True,
                    "validation": [
                        {"type": "pattern", "value": "^[^@]+@[^@]+\\.[^@]+$", "message": "Must be a valid email"},
                    ],
                },
                {"id": "phone", "type": "tel", "label": "Phone Number", "required": True},
                {"id": "dob", "type": "date", "label": "Date of Birth", "required": True},
                {
                    "id": "age",
                    "type": "number",
                    "label": "Age",
                    "required": False,
                    "validation": [
                        {"type": "min", "value": 0, "message": "Age must be positive"},
                        {"type": "max", "value": 120, "message": "Age must be realistic"},
                    ],
                },
                {
                    "id": "state",
                    "type": "select",
                    "label": "State",
                    "required": True,
                    "options": [
                        {"value": "CA", "label": "California"},
                        {"value": "NY", "label": "New York"},
                        {"value": "TX", "label": "Texas"},
                    ],
                },
                {
                    "id": "insurance",
                    "type": "radio",
                    "label": "Do you have insurance?",
                    "required": True,
                    "options": [
                        {"value": "yes", "label": "Yes"},
                        {"value": "no", "label": "No"},
                    ],
                },
                {
                    "id": "notes",
                    "type": "textarea",
                    "label": "Additional Notes",
                    "required": False,
                    "placeholder": "Tell us anything else we should know",
                },
            ],
        },
        {
            "id": "review",
            "route": "/review",
            "role": "PATIENT",
            "type": "review",
            "title": "Review Your Submission",
            "description": "Please verify all information is correct",
        },
        {
            "id": "success",
            "route": "/submitted",
            "role": "PATIENT",
            "type": "success",
            "title": "Submission Complete",
            "description": "Thank you! We will be in touch soon.",
        },
        {"id": "staff-login", "route": "/staff/login", "role": "STAFF", "type": "login", "title": "Staff Portal Login"},
        {
            "id": "staff-inbox",
            "route": "/staff/inbox",
            "role": "STAFF",
            "type": "list",
            "title": "Patient Submissions",
            "description": "Review and manage all submissions",
        },
        {
            "id": "staff-detail",
            "route": "/staff/submission/[id]",
            "role": "STAFF",
            "type": "detail",
            "title": "Submission Details",
            "actions": [
                {"id": "approve", "label": "Approve", "targetState": "APPROVED", "variant": "primary"},
                {
                    "id": "request-info",
                    "label": "Request More Information",
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
    ]
    spec["workflow"] = {
        "states": ["DRAFT", "SUBMITTED", "NEEDS_INFO", "APPROVED", "REJECTED"],
        "initialState": "DRAFT",
        "transitions": [
            {"from": "DRAFT", "to": "SUBMITTED", "allowedRoles": ["PATIENT"]},
            {"from": "SUBMITTED", "to": "APPROVED", "allowedRoles": ["STAFF"]},
            {"from": "SUBMITTED", "to": "NEEDS_INFO", "allowedRoles": ["STAFF"]},
            {"from": "SUBMITTED", "to": "REJECTED", "allowedRoles": ["STAFF"]},
            {"from": "NEEDS_INFO", "to": "SUBMITTED", "allowedRoles": ["PATIENT"]},
        ],
    }
    return spec


@pytest.fixture
def minimal_spec() -> Dict[str, Any]:
    return make_minimal_spec()


@pytest.fixture
def complex_spec() -> Dict[str, Any]:
    return make_complex_spec()


# ============================================================================
# Configuration isolation
# ============================================================================

_CONFIG_ENV_VARS = (
    "FASTFORM_LOG_LEVEL",
    "FASTFORM_STAGING_API_URL",
    "FASTFORM_PRODUCTION_API_URL",
    "FASTFORM_STAGING_DOMAIN_TEMPLATE",
    "FASTFORM_PRODUCTION_DOMAIN_TEMPLATE",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from runtime.yaml with no FASTFORM_* overrides."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    runtime_config.reset_config()
    yield
    runtime_config.reset_config()
