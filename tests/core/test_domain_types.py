"""Domain Types: verifies identity wrappers, records and wire enums."""

import dataclasses

import pytest

from statusbot.core.domain_types import (
    BlockType, CallbackType, EventType, TeamName, TeamRecord, TextType,
    UserId, UserRecord,
)


def test_identity_types_wrap_str():
    assert UserId("U1") == "U1"
    assert TeamName("Eng") == "Eng"


def test_user_record_defaults_to_no_status():
    assert UserRecord(id=UserId("U1")).status is None


def test_records_are_immutable():
    team = TeamRecord(id=1, name=TeamName("Eng"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        team.name = TeamName("Ops")


def test_wire_enum_values():
    assert {b.value for b in BlockType} == {"header", "divider", "section"}
    assert {t.value for t in TextType} == {"plain_text", "mrkdwn"}
    assert CallbackType.URL_VERIFICATION.value == "url_verification"
    assert CallbackType.EVENT_CALLBACK.value == "event_callback"
    assert {e.value for e in EventType} == {"app_mention", "message"}
