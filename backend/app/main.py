from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .routers import floor_plans, projects, rooms
from .database import engine, Base
from .exceptions import FloorPlanError
from .config import CORS_ORIGINS, ENVIRONMENT
import logging
from dotenv import load_dotenv
from datetime import datetime, timezone

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Floor Plan API",
    version="1.0.0",
    description="Room layout generation, drawing capture and editing for floor plans"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def jsonable_errors(exc: RequestValidationError):
    # Validator errors carry the raised exception in ctx
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in error.items()}
        for error in exc.errors()
    ]

# Global error handlers
@app.exception_handler(FloorPlanError)
async def floor_plan_exception_handler(request: Request, exc: FloorPlanError):
    logger.warning(f"Floor plan error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": str(exc),
            "message": str(exc)
        }
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "detail": jsonable_errors(exc),
            "message": "Validation error - please check your input"
        }
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "An internal error occurred. Please try again later.",
            "error": str(exc) if ENVIRONMENT == "development" else "Internal server error"
        }
    )

# Include routers
app.include_router(rooms.router)
app.include_router(floor_plans.router)
app.include_router(projects.router)

@app.get("/")
async def root():
    return {
        "message": "Floor Plan API",
        "version": "1.0.0",
        "status": "running",
        "environment": ENVIRONMENT
    }

@app.get("/health")
async def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
