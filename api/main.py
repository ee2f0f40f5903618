# api/main.py
import logging
import os
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from atlas.graph.errors import StoreUnavailableError
from atlas.sa.database import db
from api.routes.genres import router as genres_router

logging.basicConfig(level=os.getenv("GENRE_ATLAS_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Genre Atlas")

# CORS configuration
DEFAULT_ORIGINS = [
    "http://localhost:5173",        # Local Vite dev server
    "http://localhost:4173",        # Local Vite preview
    "http://127.0.0.1:5173",
    "http://localhost",             # Local production URL
]
origins = [
    origin.strip()
    for origin in os.getenv("GENRE_ATLAS_CORS_ORIGINS", ",".join(DEFAULT_ORIGINS)).split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    db.init_db()
    logger.info(f"Database ready at {db.engine.url.render_as_string(hide_password=True)}")

@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error(f"Store unavailable while handling {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error while handling {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Genre store unavailable"},
    )

@app.get("/")
async def root():
    return {"message": "Genre Atlas"}

app.include_router(genres_router)
