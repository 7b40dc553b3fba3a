from kanban.web.routers.admin import router as admin_router
from kanban.web.routers.auth import router as auth_router
from kanban.web.routers.comments import router as comments_router
from kanban.web.routers.epics import router as epics_router
from kanban.web.routers.tasks import router as tasks_router
from kanban.web.routers.upload import router as upload_router

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "epics_router",
    "tasks_router",
    "upload_router",
]
