from fastapi import APIRouter

from translator_api.api.routes import records, translate

router = APIRouter()
router.include_router(records.router)
router.include_router(translate.router)
