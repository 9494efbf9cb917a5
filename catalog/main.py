from fastapi import FastAPI, Depends, Request, Body, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from typing import Any
import logging

from catalog.config import LOG_LEVEL, CORS_ORIGINS, HOST, PORT
from catalog.database import repository
from catalog.database.db import get_session, wait_for_db
from catalog.errors import CatalogError, InternalError, NotFound
from catalog.models import utcnow
from catalog.validation import parse_movie_id, clean_movie_input

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Movie catalog service",
    description="API for managing the movie catalog",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info("Launching the movie catalog service...")
    wait_for_db()
    logger.info("The service is ready to work")


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}: {exc.error}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message} {exc.errors or ''}".rstrip())
    return JSONResponse(status_code=exc.status_code, content=exc.envelope())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} rejected: malformed request {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Validation errors", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.get("/api/health", summary="Service health check")
async def health():
    return {
        "success": True,
        "message": "Movie Catalog API is running",
        "timestamp": utcnow().isoformat(),
    }


@app.get("/api/movies",
         summary="Get a list of all movies",
         response_description="All movies, newest first")
def read_movies(session: Session = Depends(get_session)):
    try:
        movies = repository.list_movies(session)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Error fetching movies")
        raise InternalError("Error fetching movies", error=str(e))

    logger.info(f"A list of movies was requested, {len(movies)} entries were found")
    return {
        "success": True,
        "count": len(movies),
        "data": [movie.model_dump() for movie in movies],
    }


@app.get("/api/movies/{movie_id}",
         summary="Get a movie by ID",
         responses={
             400: {"description": "The movie ID is not an integer"},
             404: {"description": "The movie was not found"}
         })
def read_movie(movie_id: str, session: Session = Depends(get_session)):
    pk = parse_movie_id(movie_id)
    try:
        movie = repository.get_movie(session, pk)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error fetching movie ID {pk}")
        raise InternalError("Error fetching movie", error=str(e))

    if not movie:
        raise NotFound()
    return {"success": True, "data": movie.model_dump()}


@app.post("/api/movies",
          status_code=status.HTTP_201_CREATED,
          summary="Add a new movie",
          response_description="The data of the created movie",
          responses={400: {"description": "The payload failed validation"}})
def create_movie(payload: Any = Body(default=None), session: Session = Depends(get_session)):
    data = clean_movie_input(payload)
    try:
        movie = repository.create_movie(session, data)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Error when adding a movie")
        raise InternalError("Error adding movie", error=str(e))

    logger.info(f"A new movie has been added: ID {movie.id}, {movie.title}")
    return {
        "success": True,
        "message": "Movie added successfully",
        "data": movie.model_dump(),
    }


@app.put("/api/movies/{movie_id}",
         summary="Replace movie data",
         responses={
             400: {"description": "Invalid movie ID or payload"},
             404: {"description": "The movie was not found"}
         })
def update_movie(
        movie_id: str,
        payload: Any = Body(default=None),
        session: Session = Depends(get_session)
):
    pk = parse_movie_id(movie_id)
    try:
        movie = repository.get_movie(session, pk)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error fetching movie ID {pk}")
        raise InternalError("Error updating movie", error=str(e))

    # A missing row is reported as 404 even when the payload is also invalid
    if not movie:
        raise NotFound()
    data = clean_movie_input(payload)
    try:
        movie = repository.update_movie(session, movie, data)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error when updating movie ID {pk}")
        raise InternalError("Error updating movie", error=str(e))

    logger.info(f"Updated movie ID {pk}: {movie.title}")
    return {
        "success": True,
        "message": "Movie updated successfully",
        "data": movie.model_dump(),
    }


@app.delete("/api/movies/{movie_id}",
            summary="Delete a movie",
            responses={
                400: {"description": "The movie ID is not an integer"},
                404: {"description": "The movie was not found"}
            })
def delete_movie(movie_id: str, session: Session = Depends(get_session)):
    pk = parse_movie_id(movie_id)
    try:
        movie = repository.get_movie(session, pk)
        if not movie:
            raise NotFound()
        deleted = repository.delete_movie(session, movie)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error when deleting movie ID {pk}")
        raise InternalError("Error deleting movie", error=str(e))

    logger.info(f"Deleted movie ID {deleted.id}: {deleted.title}")
    return {
        "success": True,
        "message": "Movie deleted successfully",
        "data": deleted.model_dump(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("catalog.main:app", host=HOST, port=PORT)
