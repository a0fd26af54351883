from fastapi import APIRouter

from app.api import announcements, exchanges, hubble, telegram, webhooks, words_count

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


router.include_router(announcements.router)
router.include_router(words_count.router)
router.include_router(exchanges.router)
router.include_router(hubble.router)
router.include_router(webhooks.router)
router.include_router(telegram.router)
