from fastapi import APIRouter

from nursery_api.modules.maintenance import router as maintenance_router
from nursery_api.modules.submissions import router as submissions_router
from nursery_api.modules.waitlist import router as waitlist_router

api_router = APIRouter()

api_router.include_router(submissions_router, tags=["Forms"])

api_router.include_router(waitlist_router, prefix="/waitlist", tags=["Waitlist"])

api_router.include_router(maintenance_router, prefix="/cron", tags=["Maintenance"])
