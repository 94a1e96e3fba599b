"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from travelbuddy.api.routes import plans, join_requests, reviews, users, payments

api_router = APIRouter()

# Include all route modules
api_router.include_router(plans.router)
api_router.include_router(join_requests.router)
api_router.include_router(reviews.router)
api_router.include_router(users.router)
api_router.include_router(payments.router)
