"""Turns raw match-v5 records into match samples."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from lol_match_crawler.domain.entities import (
    MatchSample,
    ParticipantSetup,
    Rejected,
    BLUE_TEAM_ID,
    RED_TEAM_ID,
)
from lol_match_crawler.domain.entities.match_sample import PARTICIPANTS_PER_MATCH, PLAYERS_PER_TEAM
from lol_match_crawler.domain.enums import QueueType, RejectionReason, Role

_ANONYMOUS_PUUIDS = frozenset({"", "BOT", "00000000-0000-0000-0000-000000000000"})
_COMPLETE_RESULT = "GameComplete"

ExtractionResult = Union[MatchSample, Rejected]


class MatchExtractor:
    """
    Pure conversion of a raw match record into a :class:`MatchSample`.

    No I/O and no hidden state: the same record always gives the same sample
    or the same :class:`Rejected`.
    """

    def __init__(self, eligible_queues: Optional[Iterable[int]] = None) -> None:
        if eligible_queues is None:
            eligible_queues = [q.queue_id for q in QueueType.ranked_queues()]
        self.eligible_queues = frozenset(eligible_queues)

    def extract(self, raw: Any) -> ExtractionResult:
        if not isinstance(raw, dict):
            return Rejected(RejectionReason.MISSING_FIELDS, "record is not an object")
        metadata = raw.get("metadata")
        info = raw.get("info")
        if not isinstance(metadata, dict) or not isinstance(info, dict):
            return Rejected(RejectionReason.MISSING_FIELDS, "metadata/info missing")

        match_id = metadata.get("matchId")
        if not match_id:
            return Rejected(RejectionReason.MISSING_FIELDS, "matchId missing")

        queue_id = _as_int(info.get("queueId"))
        if queue_id is None:
            return Rejected(RejectionReason.MISSING_FIELDS, "queueId missing or not a number")
        if queue_id not in self.eligible_queues:
            return Rejected(RejectionReason.INELIGIBLE_MODE, f"queue {queue_id}")

        if not info.get("gameEndTimestamp"):
            return Rejected(RejectionReason.IN_PROGRESS, "no gameEndTimestamp")
        end_result = info.get("endOfGameResult")
        if end_result is not None and end_result != _COMPLETE_RESULT:
            return Rejected(RejectionReason.IN_PROGRESS, f"endOfGameResult={end_result}")

        raw_participants = info.get("participants")
        if not isinstance(raw_participants, list) or len(raw_participants) != PARTICIPANTS_PER_MATCH:
            return Rejected(RejectionReason.MISSING_FIELDS, "expected ten participants")
        if any(p.get("gameEndedInEarlySurrender") for p in raw_participants if isinstance(p, dict)):
            return Rejected(RejectionReason.INELIGIBLE_MODE, "remake")

        participants = _parse_participants(raw_participants)
        if isinstance(participants, Rejected):
            return participants

        winning_team = _winning_team(info.get("teams"), raw_participants)
        if winning_team is None:
            return Rejected(RejectionReason.MISSING_FIELDS, "no winning side")

        blue_bans, red_bans = _bans(info.get("teams"))
        return MatchSample(
            match_id=str(match_id),
            queue_id=queue_id,
            game_version=str(info.get("gameVersion") or ""),
            participants=participants,
            blue_bans=blue_bans,
            red_bans=red_bans,
            winning_team=winning_team,
        )

    @staticmethod
    def participant_ids(raw: Any) -> List[str]:
        """PUUIDs of the record's players in provider order, without anonymous ones."""
        if not isinstance(raw, dict):
            return []
        info = raw.get("info") if isinstance(raw.get("info"), dict) else {}
        participants = info.get("participants")
        if isinstance(participants, list):
            candidates = [p.get("puuid") if isinstance(p, dict) else None for p in participants]
        else:
            metadata = raw.get("metadata") if isinstance(raw.get("metadata"), dict) else {}
            candidates = list(metadata.get("participants") or [])
        return [p for p in candidates if isinstance(p, str) and p not in _ANONYMOUS_PUUIDS]


def _parse_participants(raw_participants: List[Any]) -> Union[Tuple[ParticipantSetup, ...], Rejected]:
    sides: Dict[int, List[ParticipantSetup]] = {BLUE_TEAM_ID: [], RED_TEAM_ID: []}
    for p in raw_participants:
        if not isinstance(p, dict):
            return Rejected(RejectionReason.MISSING_FIELDS, "participant is not an object")
        team_id = _as_int(p.get("teamId"))
        if team_id not in sides:
            return Rejected(RejectionReason.MISSING_FIELDS, f"unknown teamId {p.get('teamId')!r}")
        champion_id = _as_int(p.get("championId"))
        if not champion_id:
            return Rejected(RejectionReason.MISSING_FIELDS, "participant without championId")
        keystone, primary_style, sub_style = _perks(p.get("perks"))
        role = Role.from_string(p.get("teamPosition"))
        sides[team_id].append(ParticipantSetup(
            team_id=team_id,
            champion_id=champion_id,
            champion_name=str(p.get("championName") or ""),
            team_position=role.value if role else "",
            summoner1_id=_as_int(p.get("summoner1Id"), 0),
            summoner2_id=_as_int(p.get("summoner2Id"), 0),
            keystone_id=keystone,
            primary_style_id=primary_style,
            sub_style_id=sub_style,
            summoner_level=_as_int(p.get("summonerLevel"), 0),
        ))
    if any(len(side) != PLAYERS_PER_TEAM for side in sides.values()):
        return Rejected(RejectionReason.MISSING_FIELDS, "sides are not five versus five")
    return tuple(sides[BLUE_TEAM_ID] + sides[RED_TEAM_ID])


def _perks(perks: Any) -> Tuple[int, int, int]:
    """(keystone, primary style, sub style); zeros where the record has none."""
    keystone = primary_style = sub_style = 0
    styles = perks.get("styles") if isinstance(perks, dict) else None
    for style in styles or []:
        if not isinstance(style, dict):
            continue
        if style.get("description") == "primaryStyle":
            primary_style = _as_int(style.get("style"), 0)
            selections = style.get("selections")
            if isinstance(selections, list) and selections and isinstance(selections[0], dict):
                keystone = _as_int(selections[0].get("perk"), 0)
        elif style.get("description") == "subStyle":
            sub_style = _as_int(style.get("style"), 0)
    return keystone, primary_style, sub_style


def _winning_team(teams: Any, raw_participants: List[Dict[str, Any]]) -> Optional[int]:
    winners = {
        _as_int(t.get("teamId")) for t in _team_records(teams)
        if t.get("win") is True
    }
    if not winners:
        winners = {_as_int(p.get("teamId")) for p in raw_participants if p.get("win") is True}
    if len(winners) != 1:
        return None
    winner = winners.pop()
    return winner if winner in (BLUE_TEAM_ID, RED_TEAM_ID) else None


def _bans(teams: Any) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    by_team: Dict[int, Tuple[int, ...]] = {BLUE_TEAM_ID: (), RED_TEAM_ID: ()}
    for t in _team_records(teams):
        team_id = _as_int(t.get("teamId"))
        if team_id not in by_team:
            continue
        raw_bans = t.get("bans")
        bans = [b for b in raw_bans if isinstance(b, dict)] if isinstance(raw_bans, list) else []
        bans.sort(key=lambda b: _as_int(b.get("pickTurn"), 0))
        by_team[team_id] = tuple(_as_int(b.get("championId"), -1) for b in bans)
    return by_team[BLUE_TEAM_ID], by_team[RED_TEAM_ID]


def _team_records(teams: Any) -> List[Dict[str, Any]]:
    return [t for t in teams if isinstance(t, dict)] if isinstance(teams, list) else []


def _as_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """``value`` as an int, or ``default`` when it is missing or not a whole number."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default
