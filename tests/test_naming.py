"""Tests for the heuristic app naming module.

Covers request-prefix stripping, title casing, name and slug truncation,
Unicode handling in slugs, and the "Untitled App" fallback.
"""

import pytest

from fastform.naming import (
    FALLBACK,
    NAME_MAX_LENGTH,
    SLUG_MAX_LENGTH,
    HeuristicName,
    generate_heuristic_name,
    generate_name,
    generate_slug,
    strip_request_prefix,
    title_case,
)


class TestGenerateHeuristicName:
    """End-to-end behaviour of generate_heuristic_name."""

    def test_task_manager_example(self):
        """The canonical example strips the prefix and title-cases the rest."""
        result = generate_heuristic_name("I need a task manager app")
        assert result == HeuristicName("Task Manager App", "task-manager-app")

    def test_returns_name_and_slug_fields(self):
        """Result exposes .name and .slug."""
        result = generate_heuristic_name("Appointment booking")
        assert result.name == "Appointment Booking"
        assert result.slug == "appointment-booking"

    def test_build_me_an_prefix(self):
        """'Build me an' is stripped and punctuation survives in the name only."""
        result = generate_heuristic_name("Build me an e-commerce site!")
        assert result.name == "E-commerce Site!"
        assert result.slug == "e-commerce-site"

    def test_an_prefix_not_cut_as_a_prefix(self):
        """'I need an' must not be treated as 'I need a' plus a stray 'n'."""
        result = generate_heuristic_name("I need an appointment scheduler")
        assert result.name == "Appointment Scheduler"

    def test_prefix_case_insensitive(self):
        """Prefixes match regardless of case."""
        assert generate_heuristic_name("CREATE A Patient Portal").name == "Patient Portal"

    def test_prefix_only_at_start(self):
        """A request phrase in the middle of the text is kept."""
        result = generate_heuristic_name("Please, I need a tool")
        assert result.name == "Please, I Need A Tool"
        assert result.slug == "please-i-need-a-tool"

    def test_only_one_prefix_stripped(self):
        """Stripping happens at most once."""
        result = generate_heuristic_name("I want a make me a thing")
        assert result.name == "Make Me A Thing"

    @pytest.mark.parametrize("intent", ["Task   Manager", "  Task Manager  ", "Task\n\tManager"])
    def test_whitespace_normalized(self, intent):
        """Whitespace runs and surrounding whitespace do not change the result."""
        assert generate_heuristic_name(intent) == HeuristicName("Task Manager", "task-manager")

    @pytest.mark.parametrize("intent", ["", "   ", "!@#$%", "I need a", "build me an   "])
    def test_fallback(self, intent):
        """Empty, punctuation-only and bare-prefix intents fall back to Untitled App."""
        assert generate_heuristic_name(intent) == FALLBACK
        assert generate_heuristic_name(intent) == HeuristicName("Untitled App", "untitled-app")

    def test_deterministic(self):
        """Identical input always yields identical output."""
        intent = "Build me a mental health check-in tracker"
        assert generate_heuristic_name(intent) == generate_heuristic_name(intent)

    def test_emoji_kept_in_name_dropped_from_slug(self):
        """Emoji are not ASCII and never reach the slug."""
        result = generate_heuristic_name("Task 🚀 Tracker")
        assert result.name == "Task 🚀 Tracker"
        assert result.slug == "task-tracker"


class TestTitleCase:
    """Tests for title_case."""

    def test_lowercases_rest_of_word(self):
        """Only the first character is uppercased; no acronym detection."""
        assert title_case("RESTful API") == "Restful Api"

    def test_hyphenated_word_is_one_token(self):
        """Tokens are space-delimited, so hyphenated words capitalize once."""
        assert title_case("e-commerce site") == "E-commerce Site"


class TestStripRequestPrefix:
    """Tests for strip_request_prefix."""

    def test_strips_and_trims(self):
        assert strip_request_prefix("make me a   form") == "form"

    def test_no_prefix_returns_input(self):
        assert strip_request_prefix("Clinic intake") == "Clinic intake"


class TestGenerateName:
    """Tests for name truncation."""

    def test_short_name_untouched(self):
        assert generate_name("short name") == "Short Name"

    def test_truncates_at_word_boundary(self):
        """A cut inside a word backs off to the previous space."""
        text = "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda"
        name = generate_name(text)
        assert name == "Alpha Beta Gamma Delta Epsilon Zeta Eta Theta..."
        assert len(name) <= NAME_MAX_LENGTH

    def test_truncates_mid_word_without_spaces(self):
        """Without a usable space the cut is hard, ellipsis included in the limit."""
        name = generate_name("a" * 60)
        assert name == "A" + "a" * 46 + "..."
        assert len(name) == NAME_MAX_LENGTH

    def test_early_space_is_not_used(self):
        """A space in the first 60% of the budget does not trigger a back-off."""
        name = generate_name("ab " + "c" * 60)
        assert name == "Ab " + "C" + "c" * 43 + "..."
        assert len(name) == NAME_MAX_LENGTH


class TestGenerateSlug:
    """Tests for slug generation."""

    def test_strips_diacritics(self):
        assert generate_slug("Café Résumé Builder") == "cafe-resume-builder"

    def test_underscores_become_hyphens(self):
        assert generate_slug("my_cool_app") == "my-cool-app"

    def test_collapses_hyphen_runs_and_trims(self):
        assert generate_slug("--patient -- intake!!") == "patient-intake"

    def test_truncates_and_strips_trailing_hyphen(self):
        """Truncation never leaves a trailing hyphen."""
        slug = generate_slug("alpha beta gamma delta epsilo zeta")
        assert slug == "alpha-beta-gamma-delta-epsilo"
        assert len(slug) <= SLUG_MAX_LENGTH

    def test_only_safe_characters(self):
        slug = generate_slug("Dr. Smith's Clinic (Main St.) #1")
        assert slug == "dr-smith-s-clinic-main-st-1"
