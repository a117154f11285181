"""
naming.py - Heuristic app name and slug from freeform intent text.

Gives the user an instant, stable name while the LLM is still elaborating the
rest of the AppSpec. Deterministic and pure.

    >>> generate_heuristic_name("I need a task manager app")
    HeuristicName(name='Task Manager App', slug='task-manager-app')
    >>> generate_heuristic_name("Build me an e-commerce site!")
    HeuristicName(name='E-commerce Site!', slug='e-commerce-site')
"""

from __future__ import annotations

import re
import unicodedata
from typing import NamedTuple, Tuple

# Checked in order; the "an" form must precede the "a" form.
COMMON_PREFIXES: Tuple[str, ...] = (
    "i need an",
    "i need a",
    "build me an",
    "build me a",
    "create an",
    "create a",
    "make me an",
    "make me a",
    "i want an",
    "i want a",
)

NAME_MAX_LENGTH = 50
SLUG_MAX_LENGTH = 30
ELLIPSIS = "..."
# Only back off to a word boundary if it keeps more than this share of the budget.
WORD_BOUNDARY_MIN_RATIO = 0.6

FALLBACK_NAME = "Untitled App"
FALLBACK_SLUG = "untitled-app"

_WHITESPACE_RE = re.compile(r"\s+")
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")
_SLUG_UNSAFE_RE = re.compile(r"[^a-z0-9\s-]")
_HYPHEN_RUN_RE = re.compile(r"-+")


class HeuristicName(NamedTuple):
    name: str
    slug: str


FALLBACK = HeuristicName(FALLBACK_NAME, FALLBACK_SLUG)


def strip_request_prefix(text: str) -> str:
    """Drop at most one leading request phrase ("I need a", "Build me an", ...)."""
    lowered = text.lower()
    for prefix in COMMON_PREFIXES:
        if lowered.startswith(prefix):
            return text[len(prefix):].strip()
    return text


def title_case(text: str) -> str:
    """Lowercase everything, then capitalize the first character of each word.

    No acronym detection: "RESTful API" becomes "Restful Api".
    """
    words = text.lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def generate_name(text: str) -> str:
    """Title-cased name, truncated to NAME_MAX_LENGTH including the ellipsis."""
    titled = title_case(text)
    if len(titled) <= NAME_MAX_LENGTH:
        return titled

    budget = NAME_MAX_LENGTH - len(ELLIPSIS)
    truncated = titled[:budget]
    last_space = truncated.rfind(" ")
    if last_space > budget * WORD_BOUNDARY_MIN_RATIO:
        truncated = truncated[:last_space]
    return truncated + ELLIPSIS


def generate_slug(text: str) -> str:
    """URL-safe slug: lowercase ASCII letters, digits and single hyphens."""
    slug = unicodedata.normalize("NFD", text.lower())
    slug = _COMBINING_MARKS_RE.sub("", slug)
    slug = _NON_ASCII_RE.sub("", slug)
    slug = slug.replace("_", "-")
    slug = _SLUG_UNSAFE_RE.sub(" ", slug)
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _HYPHEN_RUN_RE.sub("-", slug).strip("-")

    if len(slug) > SLUG_MAX_LENGTH:
        slug = slug[:SLUG_MAX_LENGTH].rstrip("-")
    return slug


def generate_heuristic_name(intent: str) -> HeuristicName:
    """Generate a title-cased name and URL slug from user intent.

    Empty, whitespace-only and punctuation-only intents (or a bare request
    prefix) fall back to "Untitled App" / "untitled-app".
    """
    processed = _WHITESPACE_RE.sub(" ", intent).strip()
    processed = strip_request_prefix(processed)

    if not processed:
        return FALLBACK

    slug = generate_slug(processed)
    if not slug:
        return FALLBACK

    return HeuristicName(generate_name(processed), slug)
