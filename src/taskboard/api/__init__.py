"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Authentication is enforced at two layers. The session gate
middleware rejects protected paths without a valid cookie, and protected
routers also carry Depends(get_current_user), which hands each handler
its principal.
"""

from fastapi import APIRouter, Depends

from taskboard.api.auth import router as auth_router
from taskboard.api.health import router as health_router
from taskboard.api.profile import router as profile_router
from taskboard.api.tasks import router as tasks_router
from taskboard.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api/v1")

# Open routes — no session required (auth router guards /me itself)
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid session cookie
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
api_router.include_router(profile_router, tags=["profile"], dependencies=_auth)
