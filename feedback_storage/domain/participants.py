"""Participant roles used by feedback questions."""
from __future__ import annotations

from enum import Enum


class FeedbackParticipantType(str, Enum):
    """Who answers a question, who is evaluated, and who may see the results."""

    SELF = "SELF"
    STUDENTS = "STUDENTS"
    INSTRUCTORS = "INSTRUCTORS"
    TEAMS = "TEAMS"
    OWN_TEAM = "OWN_TEAM"
    OWN_TEAM_MEMBERS = "OWN_TEAM_MEMBERS"
    OWN_TEAM_MEMBERS_INCLUDING_SELF = "OWN_TEAM_MEMBERS_INCLUDING_SELF"
    RECEIVER = "RECEIVER"
    RECEIVER_TEAM_MEMBERS = "RECEIVER_TEAM_MEMBERS"
    GIVER = "GIVER"
    NONE = "NONE"

    @property
    def is_valid_giver(self) -> bool:
        return self in _GIVERS

    @property
    def is_valid_recipient(self) -> bool:
        return self in _RECIPIENTS

    @property
    def is_valid_viewer(self) -> bool:
        return self in _VIEWERS

    @classmethod
    def parse(cls, value: "FeedbackParticipantType | str") -> "FeedbackParticipantType":
        if isinstance(value, cls):
            return value
        return cls((value or "").strip().upper())


_GIVERS = {
    FeedbackParticipantType.SELF,
    FeedbackParticipantType.STUDENTS,
    FeedbackParticipantType.INSTRUCTORS,
    FeedbackParticipantType.TEAMS,
}

_RECIPIENTS = {
    FeedbackParticipantType.SELF,
    FeedbackParticipantType.STUDENTS,
    FeedbackParticipantType.INSTRUCTORS,
    FeedbackParticipantType.TEAMS,
    FeedbackParticipantType.OWN_TEAM,
    FeedbackParticipantType.OWN_TEAM_MEMBERS,
    FeedbackParticipantType.OWN_TEAM_MEMBERS_INCLUDING_SELF,
    FeedbackParticipantType.NONE,
}

_VIEWERS = {
    FeedbackParticipantType.GIVER,
    FeedbackParticipantType.RECEIVER,
    FeedbackParticipantType.RECEIVER_TEAM_MEMBERS,
    FeedbackParticipantType.OWN_TEAM_MEMBERS,
    FeedbackParticipantType.STUDENTS,
    FeedbackParticipantType.INSTRUCTORS,
}
