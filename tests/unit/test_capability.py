"""Unit tests for subjects/capability.py — capability flag lookup."""
from __future__ import annotations

import logging

import pytest

from cani.errors import InvalidSubjectError
from cani.subjects.capability import (
    CapabilityAware,
    CapabilityState,
    capability_allows,
    capability_name,
    lookup_capability,
)


class Document:
    def __init__(self, **flags: object) -> None:
        for name, value in flags.items():
            setattr(self, name, value)


class Ticket:
    @property
    def can_close(self) -> bool:
        return False


class Approvable:
    def can_edit(self, user: object = None) -> bool:
        return True


class Folder:
    def __init__(self, answer: object) -> None:
        self._answer = answer

    def has_capability(self, action: str) -> object:
        return self._answer


class TestLookupCapability:
    def test_absent(self) -> None:
        assert lookup_capability(Document(), "edit") is CapabilityState.ABSENT

    def test_granted(self) -> None:
        assert lookup_capability(Document(can_edit=True), "edit") is CapabilityState.GRANTED

    def test_denied(self) -> None:
        assert lookup_capability(Document(can_edit=False), "edit") is CapabilityState.DENIED

    def test_none_is_malformed(self) -> None:
        assert lookup_capability(Document(can_edit=None), "edit") is CapabilityState.MALFORMED

    def test_non_bool_is_malformed(self) -> None:
        assert lookup_capability(Document(can_edit=1), "edit") is CapabilityState.MALFORMED

    def test_malformed_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="cani.subjects.capability"):
            lookup_capability(Document(can_edit="yes"), "edit")
        assert "not a boolean" in caplog.text

    @pytest.mark.parametrize("member", ["can_edit", "canEdit", "CanEdit", "CANEDIT"])
    def test_member_name_is_case_insensitive(self, member: str) -> None:
        subject = Document(**{member: False})
        assert lookup_capability(subject, "Edit") is CapabilityState.DENIED

    def test_property_is_evaluated(self) -> None:
        assert lookup_capability(Ticket(), "close") is CapabilityState.DENIED

    def test_method_is_not_a_flag(self) -> None:
        assert lookup_capability(Approvable(), "edit") is CapabilityState.ABSENT

    def test_private_members_ignored(self) -> None:
        assert lookup_capability(Document(_can_edit=False), "edit") is CapabilityState.ABSENT

    def test_class_subject_is_absent(self) -> None:
        assert lookup_capability(Ticket, "close") is CapabilityState.ABSENT

    def test_none_subject_raises(self) -> None:
        with pytest.raises(InvalidSubjectError):
            lookup_capability(None, "edit")


class TestCapabilityAware:
    def test_protocol_detected(self) -> None:
        assert isinstance(Folder(CapabilityState.GRANTED), CapabilityAware)

    def test_state_returned_directly(self) -> None:
        assert lookup_capability(Folder(CapabilityState.DENIED), "edit") is CapabilityState.DENIED

    def test_bool_answer_accepted(self) -> None:
        assert lookup_capability(Folder(True), "edit") is CapabilityState.GRANTED
        assert lookup_capability(Folder(False), "edit") is CapabilityState.DENIED

    def test_other_answer_is_malformed(self) -> None:
        assert lookup_capability(Folder("maybe"), "edit") is CapabilityState.MALFORMED


class TestCapabilityHelpers:
    @pytest.mark.parametrize(
        ("state", "expected"),
        [
            (CapabilityState.ABSENT, True),
            (CapabilityState.GRANTED, True),
            (CapabilityState.DENIED, False),
            (CapabilityState.MALFORMED, False),
        ],
    )
    def test_capability_allows(self, state: CapabilityState, expected: bool) -> None:
        assert capability_allows(state) is expected

    def test_capability_name(self) -> None:
        assert capability_name("Mark_Paid") == "canmarkpaid"
