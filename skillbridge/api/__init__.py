"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from skillbridge.api.routes import api_router
    app.include_router(api_router)
"""
