"""
Team codec for both ranking cache representations.

Teams are encoded as compact JSON with a fixed field order, so the same
team always yields the same bytes and can be used as a sorted-set member.
"""

from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from teamstats.exceptions import DecodeError
from teamstats.schemas import TeamData

_team_list_adapter = TypeAdapter(list[TeamData])


def serialize(team: TeamData) -> bytes:
    """Encode a single team as a standalone member."""
    return team.model_dump_json().encode("utf-8")


def deserialize(data: bytes | str) -> TeamData:
    """Decode a single team, raising DecodeError on malformed input."""
    try:
        return TeamData.model_validate_json(data)
    except (ValidationError, UnicodeDecodeError) as e:
        raise DecodeError(f"Malformed team payload: {e}") from e


def serialize_seq(teams: Iterable[TeamData]) -> bytes:
    """Encode an ordered sequence of teams as one blob."""
    return _team_list_adapter.dump_json(list(teams))


def deserialize_seq(data: bytes | str) -> list[TeamData]:
    """Decode an ordered sequence of teams, raising DecodeError on malformed input."""
    try:
        return _team_list_adapter.validate_json(data)
    except (ValidationError, UnicodeDecodeError) as e:
        raise DecodeError(f"Malformed team list payload: {e}") from e


__all__ = ["serialize", "deserialize", "serialize_seq", "deserialize_seq"]
