"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from skillbridge.api.routes.auth_routes import router as auth_router
from skillbridge.api.routes.student_routes import router as student_router
from skillbridge.api.routes.company_routes import router as company_router
from skillbridge.api.routes.evaluator_routes import router as evaluator_router
from skillbridge.api.routes.internship_routes import router as internship_router
from skillbridge.api.routes.recommendation_routes import router as recommendation_router
from skillbridge.api.routes.chat_routes import router as chat_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(company_router)
api_router.include_router(evaluator_router)
api_router.include_router(internship_router)
api_router.include_router(recommendation_router)
api_router.include_router(chat_router)
