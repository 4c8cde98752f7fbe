"""
/api routes aggregation.
"""
from getcode.fastapis.tagged_api_router import TaggedAPIRouter

from .execute import router as execute_router
from .generate import router as generate_router
from .languages import router as languages_router
from .status import router as status_router

router = TaggedAPIRouter(prefix="/api")
router.include_router(generate_router)
router.include_router(execute_router)
router.include_router(languages_router)
router.include_router(status_router)
