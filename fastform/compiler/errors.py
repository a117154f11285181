"""Errors raised by the AppSpec prompt compiler.

``UnsupportedAppSpecFeatureError`` is the contract for "show the user the
supported alternatives". Callers catch it exactly once, at the boundary that
talks to the user: ``feature`` goes to logs, ``suggestion`` to the user.
"""

from __future__ import annotations

from typing import Optional

from fastform.appspec.capabilities import (
    SUPPORTED_FIELD_TYPES,
    SUPPORTED_PAGE_TYPES,
    SUPPORTED_WORKFLOW_STATES,
    max_transitions,
)

DEFAULT_USER_MESSAGE = "This app uses something we can't build yet."


class UnsupportedAppSpecFeatureError(Exception):
    """Raised when an AppSpec uses a construct outside the v1 capability surface."""

    def __init__(self, message: str, feature: str, suggestion: Optional[str] = None):
        self.message = message
        self.feature = feature  # dotted path, e.g. "field.type.file"
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self):
        return {
            "error": "unsupported_feature",
            "message": self.message,
            "feature": self.feature,
            "suggestion": self.suggestion,
        }

    # -------------------------------------------------------------------------
    # Constructors for each capability axis
    # -------------------------------------------------------------------------

    @classmethod
    def page_type(cls, page_type: str, page_id: str) -> "UnsupportedAppSpecFeatureError":
        supported = ", ".join(SUPPORTED_PAGE_TYPES)
        return cls(
            f'Page type "{page_type}" (page "{page_id}") is not supported in v1. '
            f"Supported page types: {supported}",
            feature=f"page.type.{page_type}",
            suggestion=f"Use one of the supported page types: {supported}",
        )

    @classmethod
    def field_type(cls, field_type: str, field_id: str, page_id: str) -> "UnsupportedAppSpecFeatureError":
        supported = ", ".join(SUPPORTED_FIELD_TYPES)
        return cls(
            f'Field type "{field_type}" (field "{field_id}" on page "{page_id}") '
            f"is not supported in v1. Supported field types: {supported}",
            feature=f"field.type.{field_type}",
            suggestion=f"Use one of the supported field types: {supported}",
        )

    @classmethod
    def workflow_state(cls, state: str, where: str = "workflow.states") -> "UnsupportedAppSpecFeatureError":
        supported = ", ".join(SUPPORTED_WORKFLOW_STATES)
        return cls(
            f'Workflow state "{state}" (in {where}) is not supported in v1. '
            f"Supported workflow states: {supported}",
            feature=f"workflow.state.{state}",
            suggestion=f"Use simple workflow with states: {supported}",
        )

    @classmethod
    def action_target_state(cls, state: str, action_id: str, page_id: str) -> "UnsupportedAppSpecFeatureError":
        supported = ", ".join(SUPPORTED_WORKFLOW_STATES)
        return cls(
            f'Action target state "{state}" (action "{action_id}" on page "{page_id}") '
            f"is not supported in v1. Supported workflow states: {supported}",
            feature=f"action.targetState.{state}",
            suggestion=f"Point the action at one of: {supported}",
        )

    @classmethod
    def workflow_complexity(cls, transition_count: int, state_count: int) -> "UnsupportedAppSpecFeatureError":
        limit = max_transitions(state_count)
        return cls(
            f"Workflow is too complex for v1: {transition_count} transitions across "
            f"{state_count} states is not supported (maximum {limit} transitions).",
            feature="workflow.complexity",
            suggestion=(
                f"Simplify workflow to at most {limit} transitions, for example "
                "DRAFT -> SUBMITTED -> APPROVED / REJECTED with an optional NEEDS_INFO loop"
            ),
        )


def to_user_message(error: UnsupportedAppSpecFeatureError) -> str:
    """Friendly "not supported, try X/Y/Z" text for the end user."""
    if error.suggestion:
        return f"{DEFAULT_USER_MESSAGE} Supported alternatives: {error.suggestion}"
    return f"{DEFAULT_USER_MESSAGE} {error.message}"
