from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.birthdays import router as birthdays_router
from app.api.comments import router as comments_router
from app.api.messages import router as messages_router
from app.api.profile import router as profile_router

router = APIRouter()

router.include_router(auth_router, prefix="/auth", tags=["auth"])
router.include_router(profile_router)
router.include_router(messages_router)
router.include_router(comments_router)
router.include_router(birthdays_router)


@router.get("/", tags=["root"])
def read_root() -> dict[str, str]:
    return {"message": "Welcome to the Wishing You API"}
