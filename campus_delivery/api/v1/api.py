"""API v1 router composition."""

from fastapi import APIRouter

from campus_delivery.api.v1.endpoints import admin, auth, checkout, my_restaurants, orders, restaurants, users

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
api_router.include_router(my_restaurants.router, prefix="/my-restaurants", tags=["my-restaurants"])
api_router.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(admin.public_router, prefix="/settings", tags=["settings"])
