"""
fastform/compiler - AppSpec to build-prompt compilation.

Usage:
    from fastform.compiler import (
        compile_app_spec_to_prompt,
        UnsupportedAppSpecFeatureError,
        to_user_message,
        build_enriched_message,
    )
"""

from .appspec_to_prompt import (
    CONSTRAINTS,
    compile_app_spec_to_prompt,
    describe_condition,
    describe_validation_rule,
    format_value,
    try_compile_app_spec,
)

from .errors import (
    DEFAULT_USER_MESSAGE,
    UnsupportedAppSpecFeatureError,
    to_user_message,
)

from .messages import (
    BUILD_INSTRUCTION,
    TRIGGER_BUILD_MESSAGE,
    build_enriched_message,
    is_trigger_build,
)

__all__ = [
    "CONSTRAINTS",
    "compile_app_spec_to_prompt",
    "describe_condition",
    "describe_validation_rule",
    "format_value",
    "try_compile_app_spec",
    "DEFAULT_USER_MESSAGE",
    "UnsupportedAppSpecFeatureError",
    "to_user_message",
    "BUILD_INSTRUCTION",
    "TRIGGER_BUILD_MESSAGE",
    "build_enriched_message",
    "is_trigger_build",
]
