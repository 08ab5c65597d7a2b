import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from string_analyzer.api.routes import router
from string_analyzer.config import get_settings
from string_analyzer.errors import (
    AlreadyExistsError,
    ConflictingFiltersError,
    EmptyQueryError,
    InvalidFilterParameterError,
    InvalidInputError,
    InvalidValueTypeError,
    MissingValueError,
    NotFoundError,
    StringAnalyzerError,
    TranslationError,
    UnparseableQueryError,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Most specific first; the first matching class wins
ERROR_STATUS_CODES = [
    (MissingValueError, status.HTTP_400_BAD_REQUEST),
    (InvalidValueTypeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidFilterParameterError, status.HTTP_400_BAD_REQUEST),
    (EmptyQueryError, status.HTTP_400_BAD_REQUEST),
    (UnparseableQueryError, status.HTTP_400_BAD_REQUEST),
    (ConflictingFiltersError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (TranslationError, status.HTTP_400_BAD_REQUEST),
]


def status_code_for(exc: StringAnalyzerError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


app = FastAPI(
    title=settings.app_title,
    description="Analyze, store and query string properties",
    version=settings.app_version
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": settings.app_title,
        "version": settings.app_version,
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


app.include_router(router, tags=["strings"])


# Core error handler
@app.exception_handler(StringAnalyzerError)
async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
    status_code = status_code_for(exc)
    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error['loc'])
        details[field] = error['msg']

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request body or missing 'value' field",
            "code": "VALIDATION_ERROR",
            "details": details
        }
    )


# Generic error handler
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "code": "INTERNAL_ERROR"
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host=settings.host, port=settings.port, reload=settings.reload)
