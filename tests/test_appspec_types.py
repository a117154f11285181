"""Tests for the AppSpec pydantic models."""

import pydantic
import pytest

from fastform.appspec.types import AppSpec, Transition


class TestAppSpecModel:
    """Parsing and serialization of the root document."""

    def test_camel_case_aliases(self, complex_spec):
        spec = AppSpec.from_dict(complex_spec)
        assert spec.meta.org_slug == "test-org"
        assert spec.roles[1].route_prefix == "/staff"
        assert spec.workflow.initial_state == "DRAFT"
        assert spec.api.endpoints.transition_submission.startswith("POST ")
        assert spec.environments.staging.api_url == "https://api-staging.getfastform.com"

    def test_unsupported_literals_parse(self, minimal_spec):
        """The model stores gated axes as strings; the compiler decides support."""
        minimal_spec["pages"][0]["type"] = "dashboard"
        minimal_spec["pages"][0]["fields"] = [{"id": "f", "type": "file", "label": "File"}]
        spec = AppSpec.from_dict(minimal_spec)
        assert spec.pages[0].type == "dashboard"
        assert spec.pages[0].fields[0].type == "file"

    def test_frozen(self, minimal_spec):
        spec = AppSpec.from_dict(minimal_spec)
        with pytest.raises(pydantic.ValidationError):
            spec.id = "other"

    def test_missing_required_raises(self, minimal_spec):
        """Contract errors surface as pydantic validation errors."""
        del minimal_spec["meta"]
        with pytest.raises(pydantic.ValidationError):
            AppSpec.from_dict(minimal_spec)

    def test_to_dict_omits_unset_optionals(self, minimal_spec):
        doc = AppSpec.from_dict(minimal_spec).to_dict()
        assert "logo" not in doc["theme"]
        assert "routePrefix" not in doc["roles"][0]
        assert "fields" not in doc["pages"][0]

    def test_page_ids(self, complex_spec):
        assert AppSpec.from_dict(complex_spec).page_ids()[:2] == ["welcome", "intake-form"]

    def test_endpoint_catalogue(self, minimal_spec):
        catalogue = AppSpec.from_dict(minimal_spec).api.endpoints.as_catalogue()
        assert catalogue == minimal_spec["api"]["endpoints"]


class TestTransition:
    def test_sources_single(self):
        t = Transition.model_validate({"from": "DRAFT", "to": "SUBMITTED", "allowedRoles": ["PATIENT"]})
        assert t.sources == ("DRAFT",)

    def test_sources_multiple(self):
        t = Transition.model_validate({"from": ["SUBMITTED", "NEEDS_INFO"], "to": "REJECTED", "allowedRoles": []})
        assert t.sources == ("SUBMITTED", "NEEDS_INFO")
        assert t.model_dump(by_alias=True, mode="json")["from"] == ["SUBMITTED", "NEEDS_INFO"]
