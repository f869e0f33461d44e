"""
FastAPI server exposing the movie catalog.
Endpoints:
- GET /health: readiness and degraded-catalog signal
- GET /movies: full catalog plus the genre list
- GET /movies/search?name=...&id=...&genre=...: filtered search
- GET /movies/{movie_id}: single movie details
- GET /genres: distinct genres

Startup loads the catalog once from MOVIE_CATALOG_CATALOG_PATH (default data/movies.json).
Run: uvicorn api:app --reload
"""

import sys  # loguru sink target
from contextlib import asynccontextmanager  # startup/shutdown lifespan
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import Depends, FastAPI, HTTPException, Query, Request  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for configuration, data loading and search
from movie_catalog.config import Settings, get_settings  # environment settings
from movie_catalog.data_loader import DataLoader  # loads and validates movies
from movie_catalog.models import Movie  # core movie record
from movie_catalog.search_engine import SearchEngine  # query engine

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int
	title: str
	director: str
	year: int
	genre: str
	description: str
	duration_minutes: int
	rating: float

	@classmethod
	def from_movie(cls, movie: Movie) -> "MovieOut":
		return cls(
			id=movie.id,
			title=movie.title,
			director=movie.director,
			year=movie.year,
			genre=movie.genre,
			description=movie.description,
			duration_minutes=movie.duration_minutes,
			rating=movie.rating,
		)


class SearchCriteriaOut(BaseModel):
	name: Optional[str] = None  # raw name filter as received
	id: Optional[int] = None  # raw id filter
	genre: Optional[str] = None  # raw genre filter


# Pydantic model for the complete search response payload
class SearchResponse(BaseModel):
	success: bool
	results: List[MovieOut]
	count: int
	search_criteria: SearchCriteriaOut
	message: str


class CatalogResponse(BaseModel):
	movies: List[MovieOut]
	genres: List[str]


class GenresResponse(BaseModel):
	genres: List[str]


class HealthResponse(BaseModel):
	status: str  # "ok" or "degraded"
	movie_count: int
	load_error: Optional[str] = None


def configure_logging(level: str) -> None:
	"""Route loguru output to stderr at the configured level."""
	logger.remove()  # drop the default sink so the level applies
	logger.add(sys.stderr, level=level.upper())


def build_engine(settings: Settings) -> SearchEngine:
	"""Load the catalog file once and wrap it in a SearchEngine."""
	result = DataLoader().load_from_file(settings.catalog_path)
	if not result.succeeded and settings.abort_on_load_failure:
		raise RuntimeError(f"Movie catalog failed to load: {result.error}")
	return SearchEngine.from_load_result(result)


def get_engine(request: Request) -> SearchEngine:
	"""Dependency returning the engine owned by this application."""
	return request.app.state.engine


def search_message(count: int) -> str:
	if count == 0:
		return "No movies found matching the search criteria."
	return f"Found {count} movie{'' if count == 1 else 's'} matching the search."


def create_app(engine: Optional[SearchEngine] = None, settings: Optional[Settings] = None) -> FastAPI:
	"""
	Build the FastAPI application.
	An injected engine is used as-is; otherwise the catalog is loaded at startup.
	"""
	settings = settings or get_settings()

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		configure_logging(settings.log_level)
		if app.state.engine is None:
			logger.info("[API] Startup: loading movie catalog...")
			app.state.engine = build_engine(settings)
			mode = 'degraded' if app.state.engine.degraded else 'ok'
			logger.info(f"[API] Startup complete with {len(app.state.engine.get_all())} movies ({mode}).")
		yield

	app = FastAPI(title="Movie Catalog API", version="1.0.0", lifespan=lifespan)
	app.state.engine = engine  # None until startup when not injected

	@app.get("/health", response_model=HealthResponse)
	async def health(engine: SearchEngine = Depends(get_engine)):
		"""Return catalog status for liveness/readiness probes."""
		return HealthResponse(
			status='degraded' if engine.degraded else 'ok',
			movie_count=len(engine.get_all()),
			load_error=engine.load_error,
		)

	@app.get("/movies", response_model=CatalogResponse)
	async def list_movies(engine: SearchEngine = Depends(get_engine)):
		"""Return the whole catalog in source order with the genre list."""
		logger.info("[API] /movies requested")
		return CatalogResponse(
			movies=[MovieOut.from_movie(m) for m in engine.get_all()],
			genres=engine.list_genres(),
		)

	# Declared before /movies/{movie_id} so "search" is not parsed as an id
	@app.get("/movies/search", response_model=SearchResponse)
	async def search_movies(
		name: Optional[str] = Query(None, description="Title substring, case-insensitive"),
		id: Optional[int] = Query(None, description="Exact movie id"),
		genre: Optional[str] = Query(None, description="Genre substring, case-insensitive"),
		engine: SearchEngine = Depends(get_engine),
	):
		"""Filter the catalog by any combination of name, id and genre."""
		logger.debug(f"[API] /movies/search name={name!r} id={id} genre={genre!r}")
		results = engine.search(name=name, id=id, genre=genre)
		return SearchResponse(
			success=True,
			results=[MovieOut.from_movie(m) for m in results],
			count=len(results),
			search_criteria=SearchCriteriaOut(name=name, id=id, genre=genre),
			message=search_message(len(results)),
		)

	@app.get("/movies/{movie_id}", response_model=MovieOut)
	async def movie_details(movie_id: int, engine: SearchEngine = Depends(get_engine)):
		"""Return one movie or 404."""
		movie = engine.get_by_id(movie_id)
		if movie is None:
			logger.warning(f"[API] Movie with ID {movie_id} not found")
			raise HTTPException(status_code=404, detail=f"Movie with ID {movie_id} was not found.")
		return MovieOut.from_movie(movie)

	@app.get("/genres", response_model=GenresResponse)
	async def list_genres(engine: SearchEngine = Depends(get_engine)):
		return GenresResponse(genres=engine.list_genres())

	return app


app = create_app()  # module-level app for uvicorn
