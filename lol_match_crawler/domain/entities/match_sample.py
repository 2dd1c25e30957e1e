"""Match sample entity: one match's draft setup plus its outcome."""
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..enums import RejectionReason

SCHEMA_VERSION = 1

PARTICIPANTS_PER_MATCH = 10
PLAYERS_PER_TEAM = 5
BANS_PER_TEAM = 5

BLUE_TEAM_ID = 100
RED_TEAM_ID = 200

_PARTICIPANT_COLUMNS = (
    'team_id',
    'champion_id',
    'champion_name',
    'position',
    'summoner1_id',
    'summoner2_id',
    'keystone_id',
    'primary_style_id',
    'sub_style_id',
    'summoner_level',
)


@dataclass(frozen=True)
class ParticipantSetup:
    """Starting conditions of a single participant."""

    team_id: int  # 100 = blue, 200 = red
    champion_id: int
    champion_name: str
    team_position: str  # empty when the provider assigned no role
    summoner1_id: int = 0
    summoner2_id: int = 0
    keystone_id: int = 0
    primary_style_id: int = 0
    sub_style_id: int = 0
    summoner_level: int = 0

    def to_row(self) -> List[Any]:
        return [
            self.team_id,
            self.champion_id,
            self.champion_name,
            self.team_position,
            self.summoner1_id,
            self.summoner2_id,
            self.keystone_id,
            self.primary_style_id,
            self.sub_style_id,
            self.summoner_level,
        ]


@dataclass(frozen=True)
class MatchSample:
    """One output row: a finished match's setup and its winning side.

    Participants are ordered blue side first, then red, each side in the
    provider's participant order.
    """

    match_id: str
    queue_id: int
    game_version: str
    participants: Tuple[ParticipantSetup, ...]
    blue_bans: Tuple[int, ...]
    red_bans: Tuple[int, ...]
    winning_team: int

    @property
    def blue_win(self) -> bool:
        return self.winning_team == BLUE_TEAM_ID

    def to_row(self) -> List[Any]:
        """Flatten into the column order given by :func:`csv_header`."""
        row: List[Any] = [self.match_id, self.queue_id, self.game_version]
        for participant in self.participants:
            row.extend(participant.to_row())
        row.extend(_pad_bans(self.blue_bans))
        row.extend(_pad_bans(self.red_bans))
        row.append(self.winning_team)
        return row


@dataclass(frozen=True)
class Rejected:
    """Why a raw match record did not produce a sample."""

    reason: RejectionReason
    detail: str = ''


def _pad_bans(bans: Tuple[int, ...]) -> List[Optional[int]]:
    padded: List[Optional[int]] = list(bans[:BANS_PER_TEAM])
    padded.extend([None] * (BANS_PER_TEAM - len(padded)))
    return padded


def csv_header() -> List[str]:
    """Column names of schema version 1."""
    header = ['match_id', 'queue_id', 'game_version']
    for slot in range(1, PARTICIPANTS_PER_MATCH + 1):
        header.extend(f'p{slot}_{column}' for column in _PARTICIPANT_COLUMNS)
    header.extend(f'blue_ban{i}' for i in range(1, BANS_PER_TEAM + 1))
    header.extend(f'red_ban{i}' for i in range(1, BANS_PER_TEAM + 1))
    header.append('winning_team')
    return header
