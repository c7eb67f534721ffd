"""Team endpoints. Team discovery is global; create and join are broadcast."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentPrincipal, TeamServiceDep
from src.taskboard.schemas.team import TeamCreate, TeamJoinResponse, TeamRead, TeamResponse

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=list[TeamRead])
async def list_teams(principal: CurrentPrincipal, service: TeamServiceDep) -> list[TeamRead]:
    teams = await service.list_all()
    return [TeamRead.model_validate(team) for team in teams]


@router.get("/mine", response_model=list[TeamRead])
async def list_my_teams(principal: CurrentPrincipal, service: TeamServiceDep) -> list[TeamRead]:
    teams = await service.list_mine(principal)
    return [TeamRead.model_validate(team) for team in teams]


@router.post(
    "",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Team created with the caller as owner",
            "content": {
                "application/json": {
                    "example": {
                        "ok": True,
                        "team": {
                            "id": "team_9d7c1e2f3a4b4c5d8e9f0a1b2c3d4e5f",
                            "name": "Eng",
                            "description": "",
                            "settings": {
                                "allowMemberInvites": True,
                                "allowTaskCreation": True,
                                "allowTaskAssignment": True,
                                "maxMembers": 10,
                                "visibility": "public",
                            },
                            "members": [
                                {
                                    "userId": "3f2b9c0e5d4a4f6b8e1c2a7d9b0e4f13",
                                    "email": "alice@example.com",
                                    "name": "alice",
                                    "role": "owner",
                                    "isActive": True,
                                }
                            ],
                            "createdAt": "2024-06-10T09:12:00",
                            "updatedAt": "2024-06-10T09:12:00",
                        },
                    }
                }
            },
        },
        400: {"description": "Team name is required"},
    },
)
async def create_team(
    data: TeamCreate, principal: CurrentPrincipal, service: TeamServiceDep
) -> TeamResponse:
    team = await service.create(principal, data)
    return TeamResponse(team=TeamRead.model_validate(team))


@router.get(
    "/{team_id}",
    response_model=TeamRead,
    responses={404: {"description": "Team not found"}},
)
async def get_team(team_id: str, principal: CurrentPrincipal, service: TeamServiceDep) -> TeamRead:
    team = await service.get(team_id)
    return TeamRead.model_validate(team)


@router.post(
    "/{team_id}/join",
    response_model=TeamJoinResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Team has reached its member limit"},
        404: {"description": "Team not found"},
    },
)
async def join_team(
    team_id: str, principal: CurrentPrincipal, service: TeamServiceDep
) -> TeamJoinResponse:
    """Join a team. Joining a team you already belong to is a no-op."""
    team, joined = await service.join(principal, team_id)
    message = None if joined else "Already a member of this team"
    return TeamJoinResponse(message=message, team=TeamRead.model_validate(team))
