"""
fastform - AppSpec core for Fastform healthcare mini-apps.

An AppSpec is the structured description of an app that sits between the
user's chat and the code generator. This package validates it, names it,
and compiles it into a deterministic build prompt.

Usage:
    from fastform.appspec import AppSpec, is_valid_app_spec
    from fastform.compiler import compile_app_spec_to_prompt
    from fastform.naming import generate_heuristic_name
"""

__version__ = "0.3.0"
