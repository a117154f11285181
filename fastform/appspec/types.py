"""
types.py - Pydantic models for the FastformAppSpec v0.3 document.

An AppSpec is the canonical, versioned description of a healthcare mini-app.
It is produced by the generation layer, confirmed by the user, persisted as a
JSON blob keyed by app id, and compiled into a build prompt.

The models mirror the JSON document one-to-one. Attribute names are
snake_case; the serialized names are the camelCase keys of the document
(``authRequired``, ``initialState``, ``from`` ...).

Literal axes that the compiler gates (page type, field type, workflow state,
action target state) are stored as plain strings. Parsing never rejects an
unsupported value; the validator decides structural validity and the
compiler raises ``UnsupportedAppSpecFeatureError`` for anything outside the
v1 allow-list.

Usage:
    from fastform.appspec.types import AppSpec

    spec = AppSpec.from_dict(document)
    spec.meta.name
    spec.to_dict()  # camelCase, JSON-ready
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .capabilities import API_BASE_URL_PLACEHOLDER, SCHEMA_VERSION, THEME_PRESET

# Scalar shapes allowed in condition / validation values.
ConditionValue = Union[bool, int, float, str]
RuleValue = Union[int, float, str]


class _SpecModel(BaseModel):
    """Base for all AppSpec models: immutable, camelCase on the wire."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


# =============================================================================
# Meta / Theme / Roles
# =============================================================================


class AppMeta(_SpecModel):
    """Application metadata and organization info."""
    name: str = Field(description="Human-readable app name")
    slug: str = Field(description="URL-safe slug for the app")
    description: str = Field(description="Brief description of the app's purpose")
    org_id: str = Field(alias="orgId", description="Organization id")
    org_slug: str = Field(alias="orgSlug", description="Organization URL-safe slug")


class ThemeColors(_SpecModel):
    primary: Optional[str] = Field(None, description="Primary brand color (hex)")
    background: Optional[str] = Field(None, description="Background color (hex)")
    text: Optional[str] = Field(None, description="Text color (hex)")


class ThemeConfig(_SpecModel):
    preset: str = Field(THEME_PRESET, description="Preset theme name")
    logo: Optional[str] = Field(None, description="Logo URL")
    colors: Optional[ThemeColors] = None


class Role(_SpecModel):
    id: str = Field(description="PATIENT or STAFF")
    auth_required: bool = Field(alias="authRequired")
    route_prefix: Optional[str] = Field(None, alias="routePrefix")


# =============================================================================
# Pages
# =============================================================================


class Option(_SpecModel):
    """Choice for select/radio fields."""
    value: str
    label: str


class Condition(_SpecModel):
    """Conditional visibility: show the field based on another field's value."""
    field: str = Field(description="Id of the field to check")
    operator: str = Field(description="equals, not_equals or exists")
    value: Optional[ConditionValue] = Field(
        None, description="Comparison value (omitted for exists)"
    )


class ValidationRule(_SpecModel):
    type: str = Field(description="minLength, maxLength, pattern, min, max (or unknown)")
    value: RuleValue
    message: str


class FormField(_SpecModel):
    """Form input. Serialized as an entry of ``page.fields``."""
    id: str
    type: str = Field(description="One of the supported field types")
    label: str
    placeholder: Optional[str] = None
    required: Optional[bool] = None
    options: Optional[Tuple[Option, ...]] = None
    condition: Optional[Condition] = None
    validation: Optional[Tuple[ValidationRule, ...]] = None


class Action(_SpecModel):
    """Staff action that moves a submission to another workflow state."""
    id: str
    label: str
    target_state: str = Field(alias="targetState")
    requires_note: Optional[bool] = Field(None, alias="requiresNote")
    variant: str = Field("primary", description="primary, secondary or danger")


class Page(_SpecModel):
    id: str
    route: str = Field(description="Route path, may contain dynamic segments like [id]")
    role: str = Field(description="Role that can access this page")
    type: str = Field(description="One of the supported page types")
    title: str
    description: Optional[str] = None
    fields: Optional[Tuple[FormField, ...]] = None
    actions: Optional[Tuple[Action, ...]] = None


# =============================================================================
# Workflow
# =============================================================================


class Transition(_SpecModel):
    """Directed, role-gated edge. ``from`` may list several source states."""
    from_states: Union[str, Tuple[str, ...]] = Field(alias="from")
    to: str
    allowed_roles: Tuple[str, ...] = Field(alias="allowedRoles")

    @property
    def sources(self) -> Tuple[str, ...]:
        """Source states as a tuple, in declaration order."""
        if isinstance(self.from_states, str):
            return (self.from_states,)
        return tuple(self.from_states)


class WorkflowConfig(_SpecModel):
    states: Tuple[str, ...]
    initial_state: str = Field(alias="initialState")
    transitions: Tuple[Transition, ...] = ()


# =============================================================================
# API / Analytics / Environments
# =============================================================================


class ApiEndpoints(_SpecModel):
    # Patient
    create_submission: str = Field(alias="createSubmission")
    get_submission: str = Field(alias="getSubmission")
    resubmit_submission: str = Field(alias="resubmitSubmission")
    # Staff auth
    staff_login: str = Field(alias="staffLogin")
    staff_logout: str = Field(alias="staffLogout")
    staff_session: str = Field(alias="staffSession")
    # Staff
    list_submissions: str = Field(alias="listSubmissions")
    get_submission_detail: str = Field(alias="getSubmissionDetail")
    transition_submission: str = Field(alias="transitionSubmission")
    # Analytics
    track_event: str = Field(alias="trackEvent")

    def as_catalogue(self) -> Dict[str, str]:
        """Endpoint name (camelCase) -> endpoint string."""
        return self.model_dump(by_alias=True)


class ApiConfig(_SpecModel):
    # Resolved at runtime from the generated app's environment, never here.
    base_url: str = Field(API_BASE_URL_PLACEHOLDER, alias="baseUrl")
    endpoints: ApiEndpoints


class AnalyticsEvent(_SpecModel):
    name: str
    trigger: Literal["pageview", "action", "submit", "transition"]
    page: Optional[str] = None


class AnalyticsConfig(_SpecModel):
    events: Tuple[AnalyticsEvent, ...] = ()


class EnvironmentTarget(_SpecModel):
    domain: str
    api_url: str = Field(alias="apiUrl")


class EnvironmentConfig(_SpecModel):
    staging: EnvironmentTarget
    production: EnvironmentTarget


# =============================================================================
# Root document
# =============================================================================


class AppSpec(_SpecModel):
    """Root AppSpec document (schema version 0.3)."""
    id: str
    version: str = SCHEMA_VERSION
    meta: AppMeta
    theme: ThemeConfig
    roles: Tuple[Role, ...] = ()
    pages: Tuple[Page, ...] = ()
    workflow: WorkflowConfig
    api: ApiConfig
    analytics: AnalyticsConfig
    environments: EnvironmentConfig

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSpec":
        """Parse a JSON-like document (camelCase keys)."""
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON document, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def page_ids(self) -> List[str]:
        return [page.id for page in self.pages]
