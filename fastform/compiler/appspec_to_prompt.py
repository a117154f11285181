"""
appspec_to_prompt.py - Compile an AppSpec into a natural-language build prompt.

The compiler walks a structurally valid AppSpec and renders every part of it,
in a fixed section order, into one plain-text prompt for the code generator:

    header -> ROLES -> THEME -> PAGES -> WORKFLOW -> API -> ANALYTICS
           -> ENVIRONMENTS -> CONSTRAINTS

It is also the capability gate. Each construct is checked against the v1
allow-list where it is rendered, and the first unsupported one aborts
compilation with ``UnsupportedAppSpecFeatureError``. Nothing is silently
downgraded.

Key properties:
- Deterministic: same AppSpec, byte-identical prompt. No timestamps, ids or
  environment lookups; mapping-shaped data (the endpoint catalogue) is sorted.
- Lossless: every populated string in the AppSpec appears verbatim.
- Unknown validation rule types render as "<type>: <value>" instead of failing.

Usage:
    from fastform.compiler import compile_app_spec_to_prompt, UnsupportedAppSpecFeatureError

    try:
        prompt = compile_app_spec_to_prompt(spec)
    except UnsupportedAppSpecFeatureError as e:
        show_user(e.suggestion)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from fastform.appspec.capabilities import (
    ConditionOperator,
    PageType,
    ValidationRuleType,
    is_supported_field_type,
    is_supported_page_type,
    is_supported_workflow_state,
    is_workflow_too_complex,
)
from fastform.appspec.types import (
    Action,
    AnalyticsConfig,
    ApiConfig,
    AppSpec,
    Condition,
    EnvironmentConfig,
    FormField,
    Page,
    Role,
    ThemeConfig,
    ValidationRule,
    WorkflowConfig,
)
from fastform.appspec.workflow import WorkflowStateMachine

from .errors import UnsupportedAppSpecFeatureError

logger = logging.getLogger(__name__)

RUNTIME_API_URL_ENV = "NEXT_PUBLIC_FASTFORM_API_URL"

PAGE_TYPE_GUIDANCE: Dict[str, str] = {
    PageType.WELCOME.value: "consent and start page that introduces the app",
    PageType.FORM.value: "input form that collects the fields below",
    PageType.REVIEW.value: "read-only summary to confirm answers before submit or resubmit",
    PageType.SUCCESS.value: "confirmation shown after a successful submission",
    PageType.LOGIN.value: "staff sign-in page",
    PageType.LIST.value: "inbox table of submissions with status and submitted date",
    PageType.DETAIL.value: "single submission view with its answers, status history and actions",
}

THEME_PRESET_GUIDANCE: Dict[str, str] = {
    "healthcare-calm": "soft, calming colors, generous whitespace, clear readable typography",
}

CONSTRAINTS = """## CONSTRAINTS
These technical rules are mandatory. Follow every one of them.
1. Use only React, Next.js and Tailwind CSS primitives already in the project. Do not add external UI component libraries or form libraries.
2. Build forms with native inputs and controlled state; implement validation and conditional visibility by hand as described above.
3. Read the API base URL from the environment at runtime. Never hardcode an API host, domain or environment-specific URL.
4. Perform every data mutation on the server through the listed API endpoints. The client never writes submission data directly.
5. Scope every request and stored record by appId (multi-tenancy). Never read or write another app's data.
6. Use camelCase for all database columns, JSON keys and payload fields.
7. Enforce the workflow transitions and role gates exactly as listed. Reject any other state change.
8. Never persist the DRAFT state; it exists only on the client before the first submit.
9. Staff pages require an authenticated staff session; redirect unauthenticated staff to the login page.
10. Meet WCAG 2.1 AA accessibility: labelled inputs, keyboard navigation, visible focus states, sufficient contrast.
11. Make every page responsive from 320px mobile screens up to desktop.
12. Track the analytics events listed above through the trackEvent endpoint; never block the UI on analytics.
13. Do not include secrets, API keys or patient data in client-side code or logs.
14. Show clear loading, empty and error states for every network request."""


def format_value(value: Any) -> str:
    """Render a scalar the way it reads in JSON (true/false, null, 2 not 2.0)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class _PromptWriter:
    """Accumulates prompt lines; sections are separated by a blank line."""

    def __init__(self):
        self._lines: List[str] = []

    def section(self, title: str) -> None:
        if self._lines:
            self._lines.append("")
        self._lines.append(f"## {title}")

    def line(self, text: str = "", indent: int = 0) -> None:
        self._lines.append("  " * indent + text)

    def block(self, text: str) -> None:
        if self._lines:
            self._lines.append("")
        self._lines.extend(text.split("\n"))

    def render(self) -> str:
        return "\n".join(self._lines) + "\n"


# =============================================================================
# Header / roles / theme
# =============================================================================


def _render_header(spec: AppSpec, out: _PromptWriter) -> None:
    meta = spec.meta
    out.line(f"# APP BUILD SPECIFICATION: {meta.name}")
    out.line()
    out.line(
        f'Build a complete healthcare mini-app named "{meta.name}". '
        "Implement exactly what is specified below; do not ask clarifying questions."
    )
    out.section("APPLICATION")
    out.line(f"- Name: {meta.name}")
    out.line(f"- Slug: {meta.slug}")
    out.line(f"- Description: {meta.description}")
    out.line(f"- Organization: {meta.org_slug} (orgId: {meta.org_id})")
    out.line(f"- App ID: {spec.id}")
    out.line(f"- AppSpec version: {spec.version}")


def _describe_role(role: Role) -> str:
    auth = "authentication required" if role.auth_required else "no authentication required"
    text = f"- {role.id}: {auth}"
    if role.route_prefix is not None:
        text += f"; all pages live under the route prefix {role.route_prefix}"
    return text


def _render_roles(roles: tuple, out: _PromptWriter) -> None:
    out.section("ROLES")
    if not roles:
        out.line("- No roles declared")
        return
    for role in roles:
        out.line(_describe_role(role))


def _render_theme(theme: ThemeConfig, out: _PromptWriter) -> None:
    out.section("THEME")
    guidance = THEME_PRESET_GUIDANCE.get(theme.preset)
    out.line(f"- Preset: {theme.preset}" + (f" ({guidance})" if guidance else ""))
    if theme.logo is not None:
        out.line(f"- Logo: {theme.logo} (show it in the page header)")
    if theme.colors is not None:
        # Fixed order, independent of document key order.
        for label, value in (
            ("Primary color", theme.colors.primary),
            ("Background color", theme.colors.background),
            ("Text color", theme.colors.text),
        ):
            if value is not None:
                out.line(f"- {label}: {value}")


# =============================================================================
# Pages
# =============================================================================


_RULE_TEXT: Dict[str, str] = {
    ValidationRuleType.MIN_LENGTH.value: "minimum {} characters",
    ValidationRuleType.MAX_LENGTH.value: "maximum {} characters",
    ValidationRuleType.PATTERN.value: "must match pattern {}",
    ValidationRuleType.MIN.value: "minimum value {}",
    ValidationRuleType.MAX.value: "maximum value {}",
}


def describe_validation_rule(rule: ValidationRule) -> str:
    """Render a rule as "<type>: <meaning>" followed by its error message.

    Unknown rule types fall back to "<type>: <value>".
    """
    value = format_value(rule.value)
    template = _RULE_TEXT.get(rule.type, "{}")
    return f'{rule.type}: {template.format(value)} (error message: "{rule.message}")'


def describe_condition(condition: Condition) -> str:
    if condition.operator == ConditionOperator.EXISTS.value:
        return f'shown when field "{condition.field}" exists'
    if condition.value is None:
        return f'shown when field "{condition.field}" {condition.operator} (no value)'
    return (
        f'shown when field "{condition.field}" {condition.operator} '
        f"{format_value(condition.value)}"
    )


def _render_field(index: int, field: FormField, page: Page, out: _PromptWriter) -> None:
    if not is_supported_field_type(field.type):
        raise UnsupportedAppSpecFeatureError.field_type(field.type, field.id, page.id)

    requirement = "required" if field.required else "optional"
    out.line(f"{index}. {field.label} (id: {field.id}, type: {field.type}, {requirement})", 1)

    if field.placeholder is not None:
        out.line(f'- Placeholder: "{field.placeholder}"', 2)

    if field.options is not None:
        if field.options:
            options = ", ".join(f'"{o.label}" (value: {o.value})' for o in field.options)
            out.line(f"- Options: {options}", 2)
        else:
            out.line("- Options: none defined", 2)

    if field.validation:
        rules = "; ".join(describe_validation_rule(rule) for rule in field.validation)
        out.line(f"- Validation: {rules}", 2)

    if field.condition is not None:
        out.line(f"- Visibility: {describe_condition(field.condition)}", 2)


def _render_action(index: int, action: Action, page: Page, out: _PromptWriter) -> None:
    if not is_supported_workflow_state(action.target_state):
        raise UnsupportedAppSpecFeatureError.action_target_state(
            action.target_state, action.id, page.id
        )

    text = (
        f"{index}. {action.label} (id: {action.id}, variant: {action.variant}): "
        f"moves the submission to {action.target_state}"
    )
    if action.requires_note:
        text += "; requires the staff member to enter a note"
    out.line(text, 1)


def _render_page(number: int, page: Page, out: _PromptWriter) -> None:
    if not is_supported_page_type(page.type):
        raise UnsupportedAppSpecFeatureError.page_type(page.type, page.id)

    out.line()
    out.line(f"### Page {number}: {page.title}")
    out.line(f"- Page ID: {page.id}")
    out.line(f"- Type: {page.type.upper()} ({page.type} page: {PAGE_TYPE_GUIDANCE[page.type]})")
    out.line(f"- Route: {page.route}")
    out.line(f"- Role: {page.role}")
    if page.description is not None:
        out.line(f"- Description: {page.description}")

    if page.fields is not None:
        if page.fields:
            out.line("- Fields:")
            for index, field in enumerate(page.fields, start=1):
                _render_field(index, field, page, out)
        else:
            out.line("- Fields: none")

    if page.actions is not None:
        if page.actions:
            out.line("- Actions:")
            for index, action in enumerate(page.actions, start=1):
                _render_action(index, action, page, out)
        else:
            out.line("- Actions: none")


def _render_pages(pages: tuple, out: _PromptWriter) -> None:
    out.section("PAGES")
    out.line(f"The app has {len(pages)} page(s). Build each one exactly as described, in this order.")
    for number, page in enumerate(pages, start=1):
        _render_page(number, page, out)


# =============================================================================
# Workflow
# =============================================================================


def _roles_text(roles: Sequence[str]) -> str:
    return ", ".join(roles) if roles else "no role"


def _render_workflow(workflow: WorkflowConfig, out: _PromptWriter) -> None:
    out.section("WORKFLOW")
    out.line("Every submission follows this state machine. Enforce it on the server.")

    for state in workflow.states:
        if not is_supported_workflow_state(state):
            raise UnsupportedAppSpecFeatureError.workflow_state(state)
    out.line(f"- States: {', '.join(workflow.states)}")

    if not is_supported_workflow_state(workflow.initial_state):
        raise UnsupportedAppSpecFeatureError.workflow_state(
            workflow.initial_state, where="workflow.initialState"
        )
    out.line(
        f"- Initial state: {workflow.initial_state} "
        "(client-side only; DRAFT is never persisted as a submission status)"
    )

    if is_workflow_too_complex(len(workflow.transitions), len(workflow.states)):
        raise UnsupportedAppSpecFeatureError.workflow_complexity(
            len(workflow.transitions), len(workflow.states)
        )

    # Per declared transition: an empty source list expands to no edges.
    for transition in workflow.transitions:
        if not is_supported_workflow_state(transition.to):
            raise UnsupportedAppSpecFeatureError.workflow_state(
                transition.to, where="workflow.transitions"
            )

    machine = WorkflowStateMachine.from_config(workflow)
    edges = machine.edges()
    unsourced = [t for t in workflow.transitions if not t.sources]
    if not edges and not unsourced:
        out.line("- Transitions: none")
        return

    out.line("- Transitions (from -> to, who may perform it):")
    for edge in edges:
        if not is_supported_workflow_state(edge.source):
            raise UnsupportedAppSpecFeatureError.workflow_state(
                edge.source, where="workflow.transitions"
            )
        roles = _roles_text(edge.allowed_roles)
        out.line(f"- {edge.source} -> {edge.target} (allowed roles: {roles})", 1)
    for transition in unsourced:
        out.line(
            f"- (no source states) -> {transition.to} "
            f"(allowed roles: {_roles_text(transition.allowed_roles)}; unreachable, do not build it)",
            1,
        )

    terminal = machine.terminal_states()
    if terminal:
        out.line(f"- Terminal states (no further transitions): {', '.join(terminal)}")
    out.line("- Any transition not listed above must be rejected with an error.")


# =============================================================================
# API / analytics / environments
# =============================================================================


def _render_api(api: ApiConfig, out: _PromptWriter) -> None:
    out.section("API")
    out.line(
        f"- Base URL: {api.base_url} (placeholder; read the real value at runtime from "
        f"the {RUNTIME_API_URL_ENV} environment variable)"
    )
    out.line("- Endpoints (name: METHOD path):")
    catalogue = api.endpoints.as_catalogue()
    for name in sorted(catalogue):
        out.line(f"- {name}: {catalogue[name]}", 1)


def _render_analytics(analytics: AnalyticsConfig, out: _PromptWriter) -> None:
    out.section("ANALYTICS")
    if not analytics.events:
        out.line("- No analytics events declared")
        return
    out.line("Track these events:")
    for event in analytics.events:
        text = f"- {event.name} (trigger: {event.trigger}"
        if event.page is not None:
            text += f", page: {event.page}"
        out.line(text + ")")


def _render_environments(environments: EnvironmentConfig, out: _PromptWriter) -> None:
    out.section("ENVIRONMENTS")
    for label, target in (("Staging", environments.staging), ("Production", environments.production)):
        out.line(f"- {label}: domain {target.domain}, API URL {target.api_url}")


# =============================================================================
# Entry point
# =============================================================================


def _coerce_spec(spec: Union[AppSpec, Mapping[str, Any]]) -> AppSpec:
    if isinstance(spec, AppSpec):
        return spec
    return AppSpec.from_dict(dict(spec))


def compile_app_spec_to_prompt(spec: Union[AppSpec, Mapping[str, Any]]) -> str:
    """Compile an AppSpec into the build prompt for the code generator.

    Args:
        spec: A parsed AppSpec, or a structurally valid AppSpec document.

    Returns:
        The prompt as a single plain-text string.

    Raises:
        UnsupportedAppSpecFeatureError: On the first construct outside the
            v1 capability allow-list.
    """
    app_spec = _coerce_spec(spec)
    out = _PromptWriter()

    try:
        _render_header(app_spec, out)
        _render_roles(app_spec.roles, out)
        _render_theme(app_spec.theme, out)
        _render_pages(app_spec.pages, out)
        _render_workflow(app_spec.workflow, out)
        _render_api(app_spec.api, out)
        _render_analytics(app_spec.analytics, out)
        _render_environments(app_spec.environments, out)
        out.block(CONSTRAINTS)
    except UnsupportedAppSpecFeatureError as e:
        logger.info("AppSpec %s rejected: unsupported feature %s", app_spec.id, e.feature)
        raise

    prompt = out.render()
    logger.debug(
        "Compiled AppSpec %s: %d pages, %d chars", app_spec.id, len(app_spec.pages), len(prompt)
    )
    return prompt


def try_compile_app_spec(
    spec: Union[AppSpec, Mapping[str, Any]],
) -> Tuple[Optional[str], Optional[UnsupportedAppSpecFeatureError]]:
    """Compile, returning (prompt, None) or (None, error) for unsupported features."""
    try:
        return compile_app_spec_to_prompt(spec), None
    except UnsupportedAppSpecFeatureError as e:
        return None, e
