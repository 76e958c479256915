"""Tests for the commit message model and release-worthiness decision."""

from __future__ import annotations

import pytest

from librarian.services.commitmessage import (
    RELEASE_RULES,
    CommitMessage,
    is_release_worthy,
    parse_commit_message,
)


class TestIsReleaseWorthy:
    @pytest.mark.parametrize(
        ("message", "library_id", "expected"),
        [
            pytest.param(CommitMessage(), "lib-B", False, id="no message"),
            pytest.param(
                CommitMessage(no_trigger_libraries=frozenset({"lib-A"})),
                "lib-A",
                False,
                id="no-trigger",
            ),
            pytest.param(
                CommitMessage(features=("new feature",), no_trigger_libraries=frozenset({"lib-A"})),
                "lib-A",
                False,
                id="no-trigger overrides features",
            ),
            pytest.param(
                CommitMessage(fixes=("bug fix",), no_trigger_libraries=frozenset({"lib-A"})),
                "lib-A",
                False,
                id="no-trigger overrides fixes",
            ),
            pytest.param(
                CommitMessage(breaking=True, no_trigger_libraries=frozenset({"lib-A"})),
                "lib-A",
                False,
                id="no-trigger overrides breaking",
            ),
            pytest.param(
                CommitMessage(trigger_libraries=frozenset({"lib-B"})),
                "lib-B",
                True,
                id="trigger",
            ),
            pytest.param(
                CommitMessage(
                    trigger_libraries=frozenset({"lib-B"}),
                    no_trigger_libraries=frozenset({"lib-B"}),
                ),
                "lib-B",
                False,
                id="no-trigger beats trigger",
            ),
            pytest.param(CommitMessage(features=("new feature",)), "lib-C", True, id="feature"),
            pytest.param(CommitMessage(fixes=("bug fix",)), "lib-D", True, id="fix"),
            pytest.param(CommitMessage(breaking=True), "lib-E", True, id="breaking"),
            pytest.param(
                CommitMessage(features=("f1",), fixes=("fx1",), breaking=True),
                "lib-G",
                True,
                id="feature fix and breaking",
            ),
            pytest.param(
                CommitMessage(
                    docs=("update docs",),
                    piper_origins=("p1",),
                    source_links=("s1",),
                    commit_hash="abc",
                ),
                "lib-H",
                False,
                id="docs and provenance only",
            ),
        ],
    )
    def test_decision(self, message: CommitMessage, library_id: str, expected: bool) -> None:
        assert is_release_worthy(message, library_id) is expected

    def test_no_trigger_for_other_library_does_not_apply(self) -> None:
        message = CommitMessage(fixes=("bug fix",), no_trigger_libraries=frozenset({"lib-A"}))
        assert is_release_worthy(message, "lib-B") is True

    def test_rule_order(self) -> None:
        assert [rule.name for rule in RELEASE_RULES] == [
            "no-trigger",
            "trigger",
            "releasable-change",
        ]


class TestParseCommitMessage:
    def test_empty(self) -> None:
        assert parse_commit_message("") == CommitMessage()

    def test_conventional_entries(self) -> None:
        text = "\n".join(
            [
                "feat: add streaming recognize",
                "",
                "fix(speech): handle empty audio",
                "docs: clarify quota",
                "chore: bump deps",
                "feat(tts): new voices",
            ]
        )

        message = parse_commit_message(text, commit_hash="abc123")

        assert message.features == ("add streaming recognize", "new voices")
        assert message.fixes == ("handle empty audio",)
        assert message.docs == ("clarify quota",)
        assert message.breaking is False
        assert message.commit_hash == "abc123"

    @pytest.mark.parametrize(
        "text",
        [
            "feat!: drop v1 surface",
            "fix(api)!: rename field",
            "chore: cleanup\n\nBREAKING CHANGE: removes Foo",
            "BREAKING-CHANGE: removes Foo",
        ],
    )
    def test_breaking(self, text: str) -> None:
        assert parse_commit_message(text).breaking is True

    def test_footers(self) -> None:
        text = "\n".join(
            [
                "docs: regenerate",
                "",
                "PiperOrigin-RevId: 123456",
                "Source-Link: https://github.com/googleapis/googleapis/commit/abc",
                "Trigger-Release: lib-A, lib-B,",
                "No-Trigger-Release: lib-C",
            ]
        )

        message = parse_commit_message(text)

        assert message.piper_origins == ("123456",)
        assert message.source_links == ("https://github.com/googleapis/googleapis/commit/abc",)
        assert message.trigger_libraries == frozenset({"lib-A", "lib-B"})
        assert message.no_trigger_libraries == frozenset({"lib-C"})
        assert is_release_worthy(message, "lib-A") is True
        assert is_release_worthy(message, "lib-C") is False
        assert is_release_worthy(message, "lib-D") is False
