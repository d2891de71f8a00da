from fastapi import APIRouter

from coding_agent.api.routes import health, tasks

api_router = APIRouter()

api_router.include_router(tasks.router)
api_router.include_router(health.router)
