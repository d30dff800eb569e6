"""SalesTracker API: FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.analytics.routes import router as analytics_router
from src.appointments.routes import router as appointments_router
from src.auth.provider import SupabaseIdentityProvider
from src.auth.routes import router as auth_router
from src.catalog.routes import router as catalog_router
from src.config.cors import SecurityHeadersMiddleware, configure_cors
from src.config.settings import get_settings
from src.middleware.error_handler import register_error_handlers
from src.middleware.request_id import RequestIDMiddleware
from src.middleware.session_cookies import SessionCookieMiddleware
from src.profiles.routes import router as profiles_router
from src.team.routes import router as team_router
from src.visits.routes import router as visits_router

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests install their own provider before startup.
    if getattr(app.state, "identity_provider", None) is None:
        app.state.identity_provider = SupabaseIdentityProvider(get_settings())
    yield


app = FastAPI(
    title="SalesTracker API",
    description=(
        "Backend for field sales teams: visits, appointments, team roster, analytics and product catalog.\n\n"
        "## Authentication\n"
        "Sign in through `/api/auth/login`. The session lives in two HttpOnly cookies "
        "(access and refresh token). Expired access tokens are refreshed transparently and "
        "the rotated cookies are returned on the same response."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Auth", "description": "Login, logout, password management"},
        {"name": "Profiles", "description": "Current user profile"},
        {"name": "Team", "description": "Commercial roster with visit counters"},
        {"name": "Visits", "description": "Client visits, notes, stats and duplicate check"},
        {"name": "Appointments", "description": "Appointment CRUD"},
        {"name": "Analytics", "description": "Monthly performance and revenue aggregates"},
        {"name": "Catalog", "description": "Product families, categories and products"},
    ],
)

# --- Middleware (last added runs outermost) ---
app.add_middleware(SessionCookieMiddleware)
configure_cors(app)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(auth_router)
app.include_router(profiles_router)
app.include_router(team_router)
app.include_router(visits_router)
app.include_router(appointments_router)
app.include_router(analytics_router)
app.include_router(catalog_router)


@app.get("/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
async def health_check():
    return {"status": "ok"}
