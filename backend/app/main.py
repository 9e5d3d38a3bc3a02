import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import database
from app.config import settings
from app.routers import applications, auth, jobs, my_jobs

logger = logging.getLogger("app")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one client (and its connection pool) for the process lifetime
    client = database.create_client()
    try:
        app.state.job_collection = database.connect(client)
    except Exception:
        logger.error("Could not connect to the database at startup.")
        client.close()
        raise
    yield
    # Shutdown
    database.close(client)


app = FastAPI(
    title="Job Portal",
    description="Job postings and applicant tracking",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    # Security: restrict CORS to the local frontend dev servers; the auth
    # cookie is sent cross-site so credentials must be allowed.
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    location = ".".join(str(p) for p in errors[0]["loc"]) if errors else "request"
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": f"Invalid request data: {location}"},
    )


app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(my_jobs.router)
app.include_router(applications.router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
