"""API route handlers."""

from .recommendations import router as recommendations_router
from .rankings import router as rankings_router
from .cache import router as cache_router
