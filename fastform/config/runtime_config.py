"""Runtime configuration for fastform.

Provides deployment targets, the default endpoint catalogue and the log
level. Environment variables take precedence over YAML config.

Usage:
    from fastform.config.runtime_config import get_environment_settings, get_log_level

    staging = get_environment_settings("staging")
    staging.domain_for("psych-intake", "test-org")
    # -> "psych-intake-test-org-staging.getfastform.com"

Environment variable overrides:
    FASTFORM_LOG_LEVEL
    FASTFORM_STAGING_API_URL, FASTFORM_PRODUCTION_API_URL
    FASTFORM_STAGING_DOMAIN_TEMPLATE, FASTFORM_PRODUCTION_DOMAIN_TEMPLATE
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).parent / "runtime.yaml"
_cached_config: Optional[Dict[str, Any]] = None

ENVIRONMENT_NAMES = ("staging", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Endpoint catalogue seeded into new AppSpecs (camelCase name -> "METHOD path").
# runtime.yaml may override single entries under api.endpoints.
DEFAULT_API_ENDPOINTS: Dict[str, str] = {
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


@dataclass(frozen=True)
class EnvironmentSettings:
    """Deployment target for one environment."""
    name: str
    domain_template: str
    api_url: str

    def domain_for(self, app_slug: str, org_slug: str) -> str:
        return self.domain_template.format(app_slug=app_slug, org_slug=org_slug)


def _load_config() -> Dict[str, Any]:
    """Load runtime.yaml configuration, with caching."""
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            _cached_config = yaml.safe_load(f) or {}
    else:
        _cached_config = _default_config()

    return _cached_config


def _default_config() -> Dict[str, Any]:
    """Return default configuration if runtime.yaml doesn't exist."""
    return {
        "version": "1.0",
        "logging": {"level": "WARNING"},
        "environments": {
            "staging": {
                "domain_template": "{app_slug}-{org_slug}-staging.getfastform.com",
                "api_url": "https://api-staging.getfastform.com",
            },
            "production": {
                "domain_template": "{app_slug}-{org_slug}.getfastform.com",
                "api_url": "https://api.getfastform.com",
            },
        },
        "api": {"endpoints": dict(DEFAULT_API_ENDPOINTS)},
    }


def reset_config() -> None:
    """Reset cached config (for testing)."""
    global _cached_config
    _cached_config = None


def get_log_level() -> str:
    """Get the log level name for the CLI.

    Precedence: FASTFORM_LOG_LEVEL, then logging.level in runtime.yaml,
    then WARNING. Unknown names fall back to WARNING.
    """
    level = os.environ.get("FASTFORM_LOG_LEVEL")
    if not level:
        config = _load_config()
        level = config.get("logging", {}).get("level", "WARNING")

    level = str(level).upper()
    if level not in LOG_LEVELS:
        logger.warning("Unknown log level %r, using WARNING", level)
        return "WARNING"
    return level


def get_environment_settings(name: str) -> EnvironmentSettings:
    """Get domain template and API URL for a deployment environment.

    Args:
        name: "staging" or "production"

    Raises:
        ValueError: If the environment name is unknown.
    """
    if name not in ENVIRONMENT_NAMES:
        raise ValueError(
            f"Unknown environment {name!r}; expected one of {', '.join(ENVIRONMENT_NAMES)}"
        )

    defaults = _default_config()["environments"][name]
    config = _load_config().get("environments", {}).get(name, {})
    prefix = f"FASTFORM_{name.upper()}"

    domain_template = (
        os.environ.get(f"{prefix}_DOMAIN_TEMPLATE")
        or config.get("domain_template")
        or defaults["domain_template"]
    )
    api_url = (
        os.environ.get(f"{prefix}_API_URL")
        or config.get("api_url")
        or defaults["api_url"]
    )
    return EnvironmentSettings(name=name, domain_template=domain_template, api_url=api_url)


def get_api_endpoints() -> Dict[str, str]:
    """Get the endpoint catalogue seeded into new AppSpecs (camelCase name -> "METHOD path")."""
    endpoints = dict(_default_config()["api"]["endpoints"])
    endpoints.update(_load_config().get("api", {}).get("endpoints", {}) or {})
    return endpoints


def get_available_environments() -> List[str]:
    return list(ENVIRONMENT_NAMES)
