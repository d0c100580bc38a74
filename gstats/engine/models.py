"""Validated response shapes for the local and remote match-data APIs.

Attribute names are the wire names, so ``MatchID`` stays ``MatchID``.
Only the fields this project reads are required; everything else is
optional and any unmodeled field is kept (``extra="allow"``) so new
server fields never break decoding.
"""
from __future__ import annotations

from typing import Any, Iterator, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError

from gstats.engine.errors import DecodeError


class Shape(BaseModel):
    """Common base: tolerate unknown fields, validate known ones."""

    model_config = ConfigDict(extra="allow")


M = TypeVar("M", bound=BaseModel)


def decode(model: type[M], body: str, path: str) -> M:
    """Parse a JSON ``body`` into ``model`` or raise DecodeError."""
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(path, str(e)) from e


# ── Local API ───────────────────────────────────────────────────────


class EntitlementsTokenResponse(Shape):
    # bearer token for remote requests
    accessToken: str
    entitlements: list[Any] = Field(default_factory=list)
    issuer: str = ""
    # player uuid
    subject: str = ""
    # entitlement JWT for remote requests
    token: str


class ChatSessionResponse(Shape):
    federated: bool = False
    game_name: str = ""
    game_tag: str = ""
    loaded: bool = False
    name: str = ""
    pid: str = ""
    puuid: str
    region: str = ""
    resource: str = ""
    state: str = ""


class LaunchConfiguration(Shape):
    arguments: list[str] = Field(default_factory=list)
    executable: str = ""
    locale: str | None = None
    voiceLocale: str | None = None
    workingDirectory: str = ""


class ProductSession(Shape):
    exitCode: int = 0
    exitReason: Any = None
    isInternal: bool = False
    launchConfiguration: LaunchConfiguration | None = None
    patchlineFullName: str = ""
    patchlineId: str = ""
    phase: str = ""
    productId: str
    version: str


class SessionsResponse(RootModel[dict[str, ProductSession]]):
    """All active product sessions keyed by session id."""

    def __iter__(self) -> Iterator[ProductSession]:  # type: ignore[override]
        return iter(self.root.values())

    def __len__(self) -> int:
        return len(self.root)

    def find_product(self, productId: str) -> ProductSession | None:
        """First session for ``productId`` in the order the service listed them."""
        return next((s for s in self if s.productId == productId), None)


class LocalHelpResponse(Shape):
    events: dict[str, str] = Field(default_factory=dict)
    functions: dict[str, str] = Field(default_factory=dict)
    types: dict[str, str] = Field(default_factory=dict)


# ── Remote API: shared pieces ───────────────────────────────────────


class Identity(Shape):
    Subject: str
    PlayerCardID: str = ""
    PlayerTitleID: str = ""
    AccountLevel: int = 0
    PreferredLevelBorderID: str = ""
    Incognito: bool = False
    HideAccountLevel: bool = False


class SeasonalBadge(Shape):
    SeasonID: str = ""
    NumberOfWins: int = 0
    WinsByTier: Any = None
    Rank: int = 0
    LeaderboardRank: int = 0


class PlayerMatchPointer(Shape):
    """Which match (or pre-game) a player is currently in."""

    Subject: str
    MatchID: str
    Version: int = 0


# ── Remote API: pre-game ────────────────────────────────────────────


class PreGamePlayerResponse(PlayerMatchPointer):
    pass


class PreGamePlayer(Shape):
    Subject: str
    CharacterID: str = ""
    CharacterSelectionState: str = ""
    PregamePlayerState: str = ""
    CompetitiveTier: int = 0
    PlayerIdentity: Identity | None = None
    SeasonalBadgeInfo: SeasonalBadge | None = None
    IsCaptain: bool = False


class PreGameTeam(Shape):
    TeamID: str
    Players: list[PreGamePlayer] = Field(default_factory=list)


class PreGameMatchResponse(Shape):
    ID: str
    Version: int = 0
    Teams: list[PreGameTeam] = Field(default_factory=list)
    AllyTeam: PreGameTeam | None = None
    EnemyTeam: PreGameTeam | None = None
    ObserverSubjects: list[Any] = Field(default_factory=list)
    MatchCoaches: list[Any] = Field(default_factory=list)
    EnemyTeamSize: int = 0
    EnemyTeamLockCount: int = 0
    PregameState: str = ""
    # ISO 8601
    LastUpdated: str = ""
    MapID: str = ""
    MapSelectPool: list[Any] = Field(default_factory=list)
    BannedMapIDs: list[Any] = Field(default_factory=list)
    CastedVotes: Any = None
    MapSelectSteps: list[Any] = Field(default_factory=list)
    MapSelectStep: int = 0
    Team1: str = ""
    GamePodID: str = ""
    Mode: str = ""
    VoiceSessionID: str = ""
    MUCName: str = ""
    TeamMatchToken: str = ""
    QueueID: str = ""
    ProvisioningFlowID: str = ""
    IsRanked: bool = False
    PhaseTimeRemainingNS: int = 0
    StepTimeRemainingNS: int = 0
    altModesFlagADA: bool = False
    TournamentMetadata: Any = None
    RosterMetadata: Any = None


# ── Remote API: current game ────────────────────────────────────────


class CurrentGamePlayerResponse(PlayerMatchPointer):
    pass


class GameConnection(Shape):
    GameServerHosts: list[str] = Field(default_factory=list)
    GameServerHost: str = ""
    GameServerPort: int = 0
    GameServerObfuscatedIP: int = 0
    GameClientHash: int = 0
    PlayerKey: str = ""


class CurrentGamePlayer(Shape):
    Subject: str
    TeamID: str = ""
    CharacterID: str = ""
    PlayerIdentity: Identity | None = None
    SeasonalBadgeInfo: SeasonalBadge | None = None
    IsCoach: bool = False
    IsAssociated: bool = False


class CurrentGameMatchResponse(Shape):
    MatchID: str
    Version: int = 0
    State: str = ""
    MapID: str = ""
    ModeID: str = ""
    ProvisioningFlow: str = ""
    GamePodID: str = ""
    AllMUCName: str = ""
    TeamMUCName: str = ""
    TeamVoiceID: str = ""
    TeamMatchToken: str = ""
    IsReconnectable: bool = False
    ConnectionDetails: GameConnection | None = None
    PostGameDetails: Any = None
    Players: list[CurrentGamePlayer] = Field(default_factory=list)
    MatchmakingData: Any = None


# ── Remote API: match history ───────────────────────────────────────


class MatchHistoryEntry(Shape):
    MatchID: str
    # milliseconds since epoch
    GameStartTime: int
    QueueID: str = ""


class MatchHistoryResponse(Shape):
    Subject: str
    BeginIndex: int
    EndIndex: int
    Total: int
    History: list[MatchHistoryEntry] = Field(default_factory=list)


# ── Remote API: match details ───────────────────────────────────────


class Location(Shape):
    x: float
    y: float


class PlayerLocation(Shape):
    subject: str
    viewRadians: float = 0.0
    location: Location


class PlatformInfo(Shape):
    platformType: str = ""
    platformOS: str = ""
    platformOSVersion: str = ""
    platformChipset: str = ""


class AbilityCasts(Shape):
    grenadeCasts: int = 0
    ability1Casts: int = 0
    ability2Casts: int = 0
    ultimateCasts: int = 0


class PlayerStats(Shape):
    score: int = 0
    roundsPlayed: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    playtimeMillis: int = 0
    abilityCasts: AbilityCasts | None = None


class RoundDamage(Shape):
    round: int
    receiver: str
    damage: int


class MatchInfo(Shape):
    matchId: str
    mapId: str = ""
    gamePodId: str = ""
    gameLoopZone: str = ""
    gameServerAddress: str = ""
    gameVersion: str = ""
    gameLengthMillis: int | None = None
    gameStartMillis: int = 0
    provisioningFlowID: str = ""
    isCompleted: bool = False
    customGameName: str = ""
    forcePostProcessing: bool = False
    queueID: str = ""
    gameMode: str = ""
    isRanked: bool = False
    isMatchSampled: bool = False
    seasonId: str = ""
    completionState: str = ""
    platformType: str = ""
    partyRRPenalties: dict[str, float] | None = None
    shouldMatchDisablePenalties: bool = False


class MatchPlayer(Shape):
    subject: str
    gameName: str = ""
    tagLine: str = ""
    platformInfo: PlatformInfo | None = None
    teamId: str = ""
    partyId: str = ""
    characterId: str = ""
    stats: PlayerStats | None = None
    roundDamage: list[RoundDamage] | None = None
    competitiveTier: int = 0
    isObserver: bool = False
    playerCard: str = ""
    playerTitle: str = ""
    preferredLevelBorder: str | None = None
    accountLevel: int = 0
    sessionPlaytimeMinutes: int | None = None
    xpModifications: list[dict[str, Any]] | None = None
    behaviorFactors: dict[str, Any] | None = None
    newPlayerExperienceDetails: dict[str, Any] | None = None


class Coach(Shape):
    subject: str
    teamId: str


class Team(Shape):
    teamId: str
    won: bool
    roundsPlayed: int = 0
    roundsWon: int = 0
    numPoints: int = 0


class FinishingDamage(Shape):
    damageType: str = ""
    damageItem: str = ""
    isSecondaryFireMode: bool = False


class Kill(Shape):
    gameTime: int
    roundTime: int
    killer: str
    victim: str
    victimLocation: Location | None = None
    assistants: list[str] = Field(default_factory=list)
    playerLocations: list[PlayerLocation] = Field(default_factory=list)
    finishingDamage: FinishingDamage | None = None
    # only present on the match-wide kill list
    round: int | None = None


class Damage(Shape):
    receiver: str
    damage: int = 0
    legshots: int = 0
    bodyshots: int = 0
    headshots: int = 0


class Economy(Shape):
    subject: str | None = None
    loadoutValue: int = 0
    weapon: str = ""
    armor: str = ""
    remaining: int = 0
    spent: int = 0


class PlayerRoundStats(Shape):
    subject: str
    kills: list[Kill] = Field(default_factory=list)
    damage: list[Damage] = Field(default_factory=list)
    score: int = 0
    economy: Economy | None = None
    ability: dict[str, Any] | None = None
    wasAfk: bool = False
    wasPenalized: bool = False
    stayedInSpawn: bool = False


class PlayerScore(Shape):
    subject: str
    score: int = 0


class RoundResult(Shape):
    roundNum: int
    roundResult: str = ""
    roundCeremony: str = ""
    winningTeam: str = ""
    bombPlanter: str | None = None
    bombDefuser: str | None = None
    # ms since round start; 0 if never planted
    plantRoundTime: int | None = None
    plantPlayerLocations: list[PlayerLocation] | None = None
    plantLocation: Location | None = None
    plantSite: Literal["A", "B", "C", ""] = ""
    defuseRoundTime: int | None = None
    defusePlayerLocations: list[PlayerLocation] | None = None
    defuseLocation: Location | None = None
    playerStats: list[PlayerRoundStats] = Field(default_factory=list)
    roundResultCode: str = ""
    playerEconomies: list[Economy] | None = None
    playerScores: list[PlayerScore] | None = None


class MatchDetailsResponse(Shape):
    matchInfo: MatchInfo
    players: list[MatchPlayer] = Field(default_factory=list)
    bots: list[Any] = Field(default_factory=list)
    coaches: list[Coach] = Field(default_factory=list)
    teams: list[Team] | None = None
    roundResults: list[RoundResult] | None = None
    kills: list[Kill] | None = None

    def player(self, subject: str) -> MatchPlayer | None:
        return next((p for p in self.players if p.subject == subject), None)
