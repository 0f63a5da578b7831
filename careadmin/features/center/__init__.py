from .routes_locations import router as locations_router
from .routes_staff import router as staff_router
from .routes_treatments import router as treatments_router
from .routes_testimonials import router as testimonials_router
from .routes_content import router as content_router
from .routes_videos import router as videos_router

routers = [
    locations_router,
    staff_router,
    treatments_router,
    testimonials_router,
    content_router,
    videos_router,
]

__all__ = [
    'routers',
    'locations_router',
    'staff_router',
    'treatments_router',
    'testimonials_router',
    'content_router',
    'videos_router',
]
