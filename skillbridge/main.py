"""
SkillBridge - Main Application

FastAPI backend with:
- SQL identity store (users table, PostgreSQL in production)
- MongoDB for profiles, internships and applications
- Weighted skill matching for browse, apply and recommendations
- JWT authentication with student / company / evaluator roles
- EmailJS notifications

Run: uvicorn skillbridge.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillbridge import __version__
from skillbridge.api.routes import api_router
from skillbridge.core.config import get_settings
from skillbridge.core.logging_config import setup_logging
from skillbridge.db.mongodb import init_mongo_indexes, test_mongo_connection
from skillbridge.db.postgres import init_sql_schema, test_postgres_connection

settings = get_settings()

setup_logging(settings.log_level, settings.log_file or None)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="SkillBridge",
    description="""
    Internship marketplace connecting students, companies and evaluators.

    ## Features
    - **Authentication**: JWT-based auth for students, companies and evaluators
    - **Students**: Skills, projects, certifications, computed readiness
    - **Companies**: Internship posting, applicants ranked by match score
    - **Evaluators**: Anonymised review queue and scoring
    - **Internships**: Search, filter, match and apply
    - **Recommendations**: Top skill-based matches

    ## Databases
    - SQL: identity (users)
    - MongoDB: documents (profiles, internships, applications)
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create the users table and MongoDB indexes."""
    try:
        init_sql_schema()
    except Exception:
        logger.exception("SQL schema initialization failed")
    try:
        init_mongo_indexes()
    except Exception:
        logger.exception("MongoDB index initialization failed")


@app.get("/", tags=["Root"])
async def root():
    return {"status": "healthy", "app": "SkillBridge", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
