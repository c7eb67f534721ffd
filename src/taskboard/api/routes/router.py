from fastapi import APIRouter

from src.taskboard.api.routes import admin, auth, boards, messages, tasks, teams, users

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(boards.router)
api_router.include_router(messages.router)
api_router.include_router(teams.router)
api_router.include_router(tasks.router)
api_router.include_router(admin.router)
