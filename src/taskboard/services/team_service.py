"""Team service - creation, discovery and capped, idempotent joins."""

from uuid import uuid4

from src.taskboard.core.exceptions import NotFoundError, UserNotFoundError, ValidationError
from src.taskboard.core.logging import get_logger
from src.taskboard.models import Principal, Team, TeamMember, TeamRole, TeamSettings
from src.taskboard.realtime import TEAM_CREATED, TEAM_UPDATED, RealtimeHub
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.team import TeamCreate, TeamRead

logger = get_logger(__name__)


class TeamService:
    def __init__(self, repos: Repositories, hub: RealtimeHub):
        self.repos = repos
        self.hub = hub

    async def list_all(self) -> list[Team]:
        return await self.repos.teams.find_many()

    async def list_mine(self, principal: Principal) -> list[Team]:
        return await self.repos.teams.list_for_member(principal.id)

    async def get(self, team_id: str) -> Team:
        team = await self.repos.teams.get_by_id(team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team

    async def _member_for(self, principal: Principal, role: TeamRole) -> TeamMember:
        user = await self.repos.users.get_by_id(principal.id)
        if user is None:
            raise UserNotFoundError()
        return TeamMember(user_id=user.id, email=user.email, name=user.name, role=role)

    async def create(self, principal: Principal, data: TeamCreate) -> Team:
        """Create a team whose only member is its creator, as owner.

        Team creation is announced to every connected socket.
        """
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Team name is required")

        settings = (
            TeamSettings.model_validate(data.settings.model_dump())
            if data.settings is not None
            else TeamSettings()
        )
        owner = await self._member_for(principal, TeamRole.OWNER)
        team = await self.repos.teams.create(
            Team(
                id=f"team_{uuid4().hex}",
                name=name,
                description=data.description.strip(),
                settings=settings,
                members=[owner],
            )
        )

        await self.hub.broadcast(TEAM_CREATED, TeamRead.payload(team))
        logger.info("Team created", team_id=team.id)
        return team

    async def join(self, principal: Principal, team_id: str) -> tuple[Team, bool]:
        """Join a team. Returns the team and whether membership changed.

        Joining twice is a no-op. A full team raises TeamFullError.
        """
        team = await self.get(team_id)
        if team.has_member(principal.id):
            return team, False

        member = await self._member_for(principal, TeamRole.MEMBER)
        team = await self.repos.teams.add_member(team.id, member)

        await self.hub.broadcast(TEAM_UPDATED, TeamRead.payload(team))
        logger.info("Team joined", team_id=team.id, members=len(team.members))
        return team, True
