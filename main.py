import time
import traceback
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from db.database import Base, SessionLocal, engine
from env import CORS_ORIGINS, ENVIRONMENT, IS_DEVELOPMENT, PORT
from logger_manager import log_error, log_info, log_request, log_warning
from routers.ai import router as ai_router
from routers.auth import router as auth_router
from routers.products import router as product_router
from routers.questions import product_questions_router, router as question_router
from routers.reports import router as report_router
from utils.errors import AppError

START_TIME = time.time()

app = FastAPI(title="Product Transparency API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    log_info(f"Starting Product Transparency API ({ENVIRONMENT})")
    Base.metadata.create_all(bind=engine)
    log_info("Database tables ready")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    log_request(request.method, str(request.url), response.status_code, (time.perf_counter() - started) * 1000)
    return response


def error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        log_error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        log_warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return error_response(exc.status_code, exc.message, exc.details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        # drop the "body"/"query"/"path" prefix from the location
        location = [str(part) for part in error.get("loc", ())[1:]]
        details.append({
            "field": ".".join(location),
            "message": error.get("msg"),
            "type": error.get("type"),
        })
    log_warning(f"Validation failed for {request.method} {request.url.path}: {details}")
    return error_response(400, "Validation failed", details)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log_error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc)
    content = {"success": False, "error": "Server Error"}
    if IS_DEVELOPMENT:
        content["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(status_code=500, content=content)


@app.get("/")
def read_root():
    return {"message": "Product Transparency API is running"}


@app.get("/health")
def health_check():
    database = "connected"
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
    except Exception as e:
        log_error(f"Health check database probe failed: {str(e)}", e)
        database = "disconnected"
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.time() - START_TIME, 2),
        "environment": ENVIRONMENT,
        "database": database,
    }


app.include_router(auth_router, prefix="/api/auth")
app.include_router(product_router, prefix="/api/products")
app.include_router(product_questions_router, prefix="/api/products")
app.include_router(question_router, prefix="/api/questions")
app.include_router(report_router, prefix="/api/reports")
app.include_router(ai_router, prefix="/api/ai")

# To run the FastAPI app, use the command: uvicorn main:app --reload
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
