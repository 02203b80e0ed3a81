"""API route modules."""

from taskmind.api.routes.categories import router as categories_router
from taskmind.api.routes.context import router as context_router
from taskmind.api.routes.misc import router as misc_router
from taskmind.api.routes.tasks import router as tasks_router

__all__ = [
    "categories_router",
    "context_router",
    "misc_router",
    "tasks_router",
]
