"""
fastform/appspec - The FastformAppSpec v0.3 document.

This package holds everything about the document itself:
- types: pydantic models mirroring the JSON document
- capabilities: the v1 allow-list (page/field types, states, complexity)
- validator: structural validation plus consistency warnings
- workflow: query interface over the submission state machine
- loader / templates: files on disk and the built-in starting spec

Usage:
    from fastform.appspec import AppSpec, is_valid_app_spec, validate_app_spec

    if is_valid_app_spec(doc):
        spec = AppSpec.from_dict(doc)
"""

from .types import (
    Action,
    AnalyticsConfig,
    AnalyticsEvent,
    ApiConfig,
    ApiEndpoints,
    AppMeta,
    AppSpec,
    Condition,
    EnvironmentConfig,
    EnvironmentTarget,
    FormField,
    Option,
    Page,
    Role,
    ThemeColors,
    ThemeConfig,
    Transition,
    ValidationRule,
    WorkflowConfig,
)

from .capabilities import (
    SUPPORTED_FIELD_TYPES,
    SUPPORTED_PAGE_TYPES,
    SUPPORTED_WORKFLOW_STATES,
    FieldType,
    PageType,
    WorkflowState,
    is_supported_field_type,
    is_supported_page_type,
    is_supported_workflow_state,
    is_workflow_too_complex,
)

from .validator import (
    consistency_warnings,
    find_consistency_issues,
    is_valid_app_spec,
    validate_app_spec,
)

from .workflow import Edge, WorkflowStateMachine

from .loader import AppSpecLoadError, dump_app_spec, load_app_spec, load_document

from .templates import psych_intake_template, seed_app_spec
