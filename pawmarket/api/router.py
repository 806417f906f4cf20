from fastapi import APIRouter

from pawmarket.api.admin.router import router as admin_router
from pawmarket.api.adoption.router import dashboard_router
from pawmarket.api.adoption.router import public_router as public_adoption_router
from pawmarket.api.adoption.router import router as adoption_router
from pawmarket.api.auth.router import router as auth_router
from pawmarket.api.breeders.router import router as breeders_router
from pawmarket.api.catalog.router import router as catalog_router
from pawmarket.api.favorites.router import router as favorites_router
from pawmarket.api.health.router import root_router
from pawmarket.api.health.router import router as health_router
from pawmarket.api.images.router import router as images_router
from pawmarket.api.payments.router import router as payments_router

# V1 API router
v1_router = APIRouter(prefix="/api/v1")

# Include domain routers
v1_router.include_router(auth_router)
v1_router.include_router(breeders_router)
v1_router.include_router(adoption_router)
v1_router.include_router(public_adoption_router)
v1_router.include_router(dashboard_router)
v1_router.include_router(catalog_router)
v1_router.include_router(favorites_router)
v1_router.include_router(images_router)
v1_router.include_router(payments_router)

# Main API router
api_router = APIRouter()
api_router.include_router(root_router)
api_router.include_router(health_router)
api_router.include_router(v1_router)
api_router.include_router(admin_router, prefix="/api")
