import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from bson.errors import InvalidId
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
import database
from database import collection_counts, get_db
from errors import ApiError, error_response
from routers import auth, projects, skills, themes, users
from security import TokenStore

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = {
    "documentation": "/api-docs",
    "authentication": "/auth/login",
    "themes": "/theme",
    "users": "/user",
    "projects": "/project",
    "skills": "/skill",
    "health": "/health",
    "collections": "/test/collections",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    owns_client = getattr(app.state, "db", None) is None
    if owns_client:
        # The client reconnects lazily; routes answer 503 until MongoDB is reachable.
        app.state.db = database.connect()
        app.state.indexes_ready = False
        app.state.db_ready_until = 0
        if database.is_ready(app.state):
            logger.info("Connected to MongoDB database %s", config.DATABASE_NAME)
        else:
            logger.error("MongoDB not reachable at startup, will retry per request")
    logger.info("Portfolio Builder API %s started", config.API_VERSION)
    yield
    if owns_client:
        database.close()
        app.state.db = None
    logger.info("Portfolio Builder API stopped")


app = FastAPI(
    title="Portfolio Builder API",
    version=config.API_VERSION,
    description="API server for a portfolio builder website: themes, users, projects and skills",
    docs_url="/api-docs",
    redoc_url=None,
    lifespan=lifespan,
)
app.state.db = None
app.state.indexes_ready = False
app.state.db_ready_until = 0
app.state.token_store = TokenStore()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Errors

@app.exception_handler(ApiError)
@app.exception_handler(RequestValidationError)
@app.exception_handler(PyMongoError)
@app.exception_handler(InvalidId)
def handle_api_error(request: Request, exc: Exception):
    return error_response(exc)


@app.exception_handler(StarletteHTTPException)
def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "message": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception):
    return error_response(exc)


# Routes

app.include_router(auth.router)
app.include_router(themes.router)
app.include_router(users.router)
app.include_router(projects.router)
app.include_router(skills.router)


@app.get("/")
def read_root():
    return {
        "message": "Welcome to Portfolio Builder API v2.0",
        "version": config.API_VERSION,
        "documentation": "/api-docs",
        "features": ["CRUD Operations", "Token Authentication", "Data Validation", "Soft Delete"],
        "collections": ["themes", "users", "projects", "skills"],
        "authentication": {"login": "POST /auth/login", "logout": "POST /auth/logout"},
    }


@app.get("/health")
def health(request: Request):
    status = {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.API_VERSION,
        "database": "disconnected",
    }
    db = getattr(request.app.state, "db", None)
    if database.is_ready(request.app.state):
        try:
            status["collections"] = collection_counts(db)
            status["database"] = "connected"
        except PyMongoError as e:
            logger.warning("Health check could not count documents: %s", e)
    return status


@app.get("/test/collections")
def test_collections(db: Database = Depends(get_db)):
    counts = collection_counts(db)
    return {
        "success": True,
        "message": "Collections statistics retrieved successfully",
        "collections": counts,
        "totalDocuments": sum(counts.values()),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=config.HOST, port=config.PORT)
