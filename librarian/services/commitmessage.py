"""Commit message model and the release-worthiness decision.

A ``CommitMessage`` is the structured form of a raw commit message:
conventional-commit entries, provenance footers, and explicit per-library
release triggers. ``is_release_worthy`` decides, for one library, whether
the commit justifies cutting a release.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "CommitMessage",
    "RELEASE_RULES",
    "ReleaseRule",
    "is_release_worthy",
    "parse_commit_message",
]


@dataclass(frozen=True, slots=True)
class CommitMessage:
    """Structured commit message.

    The default instance is an empty (unparsed) message and is never
    release worthy.
    """

    features: tuple[str, ...] = ()
    fixes: tuple[str, ...] = ()
    breaking: bool = False
    docs: tuple[str, ...] = ()
    piper_origins: tuple[str, ...] = ()
    source_links: tuple[str, ...] = ()
    commit_hash: str = ""
    trigger_libraries: frozenset[str] = frozenset()
    no_trigger_libraries: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class ReleaseRule:
    name: str
    applies: Callable[[CommitMessage, str], bool]
    release: bool


def _has_releasable_change(message: CommitMessage, library_id: str) -> bool:
    del library_id
    return bool(message.features or message.fixes or message.breaking)


# Evaluated in order, first match wins. An explicit no-trigger beats an
# explicit trigger for the same library.
RELEASE_RULES: tuple[ReleaseRule, ...] = (
    ReleaseRule(
        name="no-trigger",
        applies=lambda message, library_id: library_id in message.no_trigger_libraries,
        release=False,
    ),
    ReleaseRule(
        name="trigger",
        applies=lambda message, library_id: library_id in message.trigger_libraries,
        release=True,
    ),
    ReleaseRule(name="releasable-change", applies=_has_releasable_change, release=True),
)


def is_release_worthy(message: CommitMessage, library_id: str) -> bool:
    """Decide whether ``message`` warrants a release of ``library_id``.

    Docs, provenance footers and the commit hash never affect the outcome.
    """
    for rule in RELEASE_RULES:
        if rule.applies(message, library_id):
            return rule.release
    return False


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

_CONVENTIONAL_RE = re.compile(r"^(?P<type>[a-zA-Z]+)(?:\([^)]*\))?(?P<bang>!)?:\s*(?P<text>.+)$")
_FOOTER_RE = re.compile(r"^(?P<key>[A-Za-z][A-Za-z-]*):\s*(?P<value>.*)$")

_BREAKING_KEYS = {"BREAKING CHANGE", "BREAKING-CHANGE"}


def _split_libraries(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_commit_message(text: str, commit_hash: str = "") -> CommitMessage:
    """Extract a CommitMessage from raw commit message text.

    Recognized lines (anything else is ignored):
        feat: / fix: / docs: entries, with optional scope and "!" marker
        BREAKING CHANGE: <text>
        PiperOrigin-RevId: <id>
        Source-Link: <url>
        Trigger-Release: lib-a, lib-b
        No-Trigger-Release: lib-c
    """
    features: list[str] = []
    fixes: list[str] = []
    docs: list[str] = []
    piper_origins: list[str] = []
    source_links: list[str] = []
    trigger: set[str] = set()
    no_trigger: set[str] = set()
    breaking = False

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        head = line.split(":", 1)[0].strip()
        if head in _BREAKING_KEYS and ":" in line:
            breaking = True
            continue

        m = _CONVENTIONAL_RE.match(line)
        if m is not None and m.group("type").lower() in {"feat", "fix", "docs"}:
            kind = m.group("type").lower()
            entry = m.group("text").strip()
            if m.group("bang"):
                breaking = True
            if kind == "feat":
                features.append(entry)
            elif kind == "fix":
                fixes.append(entry)
            else:
                docs.append(entry)
            continue

        footer = _FOOTER_RE.match(line)
        if footer is None:
            continue
        key = footer.group("key").lower()
        value = footer.group("value").strip()
        match key:
            case "piperorigin-revid":
                if value:
                    piper_origins.append(value)
            case "source-link":
                if value:
                    source_links.append(value)
            case "trigger-release":
                trigger.update(_split_libraries(value))
            case "no-trigger-release":
                no_trigger.update(_split_libraries(value))
            case _:
                pass

    return CommitMessage(
        features=tuple(features),
        fixes=tuple(fixes),
        breaking=breaking,
        docs=tuple(docs),
        piper_origins=tuple(piper_origins),
        source_links=tuple(source_links),
        commit_hash=commit_hash,
        trigger_libraries=frozenset(trigger),
        no_trigger_libraries=frozenset(no_trigger),
    )
