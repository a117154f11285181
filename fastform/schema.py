"""
Pydantic payload models for fastform's JSON output.

These are the shapes the CLI prints with ``--json`` and that a web layer
would return: heuristic names, validation reports, compiled prompts and the
unsupported-feature error.

Usage:
    from fastform.schema import CompileResponse, UnsupportedFeatureResponse

    payload = CompileResponse(app_id=spec.id, prompt=prompt, prompt_length=len(prompt))
    print(payload.model_dump_json(indent=2))
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from fastform.compiler.errors import UnsupportedAppSpecFeatureError, to_user_message
from fastform.naming import HeuristicName
from fastform.validator.errors import ValidationResult


# =============================================================================
# Naming
# =============================================================================


class HeuristicNameResponse(BaseModel):
    """Instant name and slug derived from the user's intent."""
    name: str = Field(description="Title-cased app name, at most 50 characters")
    slug: str = Field(description="URL-safe slug, at most 30 characters")

    @classmethod
    def from_heuristic(cls, heuristic: HeuristicName) -> "HeuristicNameResponse":
        return cls(name=heuristic.name, slug=heuristic.slug)


# =============================================================================
# Validation
# =============================================================================


class Diagnostic(BaseModel):
    """One validation error or consistency warning."""
    type: str = Field(description="Diagnostic category (SCHEMA, TYPE, CONSISTENCY)")
    location: str = Field(description="Dotted path into the document, e.g. pages[0].title")
    problem: str = Field(description="What is wrong")
    fix_action: str = Field(description="How to fix it")


class ValidationReport(BaseModel):
    """Structural validation result plus consistency warnings."""
    status: Literal["PASS", "FAIL"] = Field(description="FAIL if there is any error")
    errors: List[Diagnostic] = Field(default_factory=list)
    warnings: List[Diagnostic] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationReport":
        data = result.to_dict()
        return cls(status=data["status"], errors=data["errors"], warnings=data["warnings"])


# =============================================================================
# Compilation
# =============================================================================


class CompileResponse(BaseModel):
    """A successfully compiled build prompt."""
    app_id: str = Field(description="AppSpec id")
    prompt: str = Field(description="Compiled build prompt")
    prompt_length: int = Field(description="Prompt length in characters")


class UnsupportedFeatureResponse(BaseModel):
    """Compilation refused because the AppSpec uses an unsupported feature."""
    error: Literal["unsupported_feature"] = "unsupported_feature"
    message: str = Field(description="Developer-facing error message")
    feature: str = Field(description="Dotted feature path, e.g. field.type.file")
    suggestion: Optional[str] = Field(None, description="Supported alternatives")
    user_message: str = Field(description="Friendly text to show the end user")

    @classmethod
    def from_error(cls, error: UnsupportedAppSpecFeatureError) -> "UnsupportedFeatureResponse":
        return cls(
            message=error.message,
            feature=error.feature,
            suggestion=error.suggestion,
            user_message=to_user_message(error),
        )
