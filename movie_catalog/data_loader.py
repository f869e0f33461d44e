"""
Catalog loading and validation module.
Reads raw movie records from JSON/JSONL, validates them into Movie objects
and builds the primary-key index. A load either fully succeeds or fails as a whole.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON arrays and JSON lines
from types import MappingProxyType  # read-only index view
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes used across the project
from .models import LoadResult, Movie  # structured movie record and load outcome

# Console logging
from loguru import logger  # console logger


class CatalogLoadError(ValueError):
	"""Raised when the catalog source is unreadable or a record is malformed."""


class DataLoader:
	"""
	Handles reading and validating the movie catalog.
	"""

	# Source field names for every Movie attribute, in Movie field order
	FIELD_MAP = (
		('id', 'id'),
		('title', 'movieName'),
		('director', 'director'),
		('year', 'year'),
		('genre', 'genre'),
		('description', 'description'),
		('duration_minutes', 'duration'),
		('rating', 'imdbRating'),
	)

	def read_records(self, filepath: str) -> List[Dict[str, Any]]:
		"""
		Read raw records from a JSON file holding one top-level array,
		or from a JSON Lines file (.jsonl) with one object per line.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise CatalogLoadError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Reading movie records from {filepath}...")

		try:
			text = filepath.read_text(encoding='utf-8')
		except UnicodeDecodeError as e:
			raise CatalogLoadError(f"{filepath} is not valid UTF-8: {e}") from e

		if filepath.suffix == '.jsonl':
			return self._read_jsonl(text, filepath)

		try:
			payload = json.loads(text)
		except (ValueError, RecursionError) as e:  # JSONDecodeError is a ValueError; deep nesting recurses
			raise CatalogLoadError(f"Invalid JSON in {filepath}: {e}") from e

		if not isinstance(payload, list):
			raise CatalogLoadError(f"Expected a JSON array of movies in {filepath}, got {type(payload).__name__}")
		return payload

	def _read_jsonl(self, text: str, filepath: Path) -> List[Dict[str, Any]]:
		records = []  # accumulator for raw dicts
		for line_num, line in enumerate(text.split('\n'), 1):  # keep track of line number for diagnostics
			if not line.strip():
				continue  # blank lines carry no record
			try:
				records.append(json.loads(line))
			except (ValueError, RecursionError) as e:
				# one bad line spoils the whole catalog
				raise CatalogLoadError(f"Invalid JSON at line {line_num} of {filepath}: {e}") from e
		return records

	def parse_movies(self, records: Iterable[Mapping[str, Any]]) -> List[Movie]:
		"""
		Convert raw records into Movie objects, preserving source order.
		Raises CatalogLoadError on the first malformed record.
		"""
		movies = []  # parsed movies in source order
		for position, data in enumerate(records):
			try:
				movies.append(self._parse_movie_data(data))
			except CatalogLoadError as e:
				raise CatalogLoadError(f"Record {position}: {e}") from e
		return movies

	def _parse_movie_data(self, data: Mapping[str, Any]) -> Movie:
		"""
		Validate one raw record and build a Movie.
		Every field is required; no defaults are filled in.
		"""
		if not isinstance(data, Mapping):
			raise CatalogLoadError(f"expected an object, got {type(data).__name__}")

		missing = [source for _, source in self.FIELD_MAP if source not in data]
		if missing:
			raise CatalogLoadError(f"missing field(s): {', '.join(missing)}")

		movie_id = self._require_int(data['id'], 'id')
		if movie_id < 1:
			raise CatalogLoadError(f"id must be >= 1, got {movie_id}")

		title = self._require_str(data['movieName'], 'movieName')
		if not title.strip():
			raise CatalogLoadError("movieName must not be empty")

		duration = self._require_int(data['duration'], 'duration')
		if duration < 1:
			raise CatalogLoadError(f"duration must be >= 1, got {duration}")

		return Movie(
			id=movie_id,
			title=title,
			director=self._require_str(data['director'], 'director'),
			year=self._require_int(data['year'], 'year'),
			genre=self._require_str(data['genre'], 'genre'),
			description=self._require_str(data['description'], 'description'),
			duration_minutes=duration,
			rating=self._require_float(data['imdbRating'], 'imdbRating'),
		)

	@staticmethod
	def _require_int(value: Any, name: str) -> int:
		# bool is a subclass of int but never a valid number here
		if isinstance(value, bool) or not isinstance(value, int):
			raise CatalogLoadError(f"{name} must be an integer, got {value!r}")
		return value

	@staticmethod
	def _require_float(value: Any, name: str) -> float:
		if isinstance(value, bool) or not isinstance(value, (int, float)):
			raise CatalogLoadError(f"{name} must be a number, got {value!r}")
		return float(value)

	@staticmethod
	def _require_str(value: Any, name: str) -> str:
		if not isinstance(value, str):
			raise CatalogLoadError(f"{name} must be a string, got {value!r}")
		return value

	def build_index(self, movies: Iterable[Movie]) -> Mapping[int, Movie]:
		"""Map each movie id to its Movie. Duplicate ids reject the load."""
		index: Dict[int, Movie] = {}
		for movie in movies:
			if movie.id in index:
				raise CatalogLoadError(f"duplicate movie id {movie.id}")
			index[movie.id] = movie
		return MappingProxyType(index)

	def load(self, records: Iterable[Mapping[str, Any]]) -> LoadResult:
		"""
		Parse and index a fully materialized record sequence.
		Data problems are logged and reported in the result, never raised.
		"""
		try:
			movies = self.parse_movies(records)
			index = self.build_index(movies)
		except CatalogLoadError as e:
			logger.bind(event='catalog_load_failed', cause=str(e)).error(f"[DataLoader] Failed to load movies: {e}")
			return LoadResult.failure(str(e))

		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")
		return LoadResult.success(tuple(movies), index)

	def load_from_file(self, filepath: str) -> LoadResult:
		"""Read the catalog file and load it; unreadable files become a failed result."""
		try:
			records = self.read_records(filepath)
		except (CatalogLoadError, OSError) as e:
			logger.bind(event='catalog_load_failed', cause=str(e)).error(f"[DataLoader] Failed to load movies: {e}")
			return LoadResult.failure(str(e))
		return self.load(records)

	def get_all_directors(self, movies: Iterable[Movie]) -> List[str]:
		"""Distinct non-blank director names, sorted."""
		return sorted({m.director for m in movies if m.director.strip()})

	def get_year_range(self, movies: Iterable[Movie]) -> Optional[Tuple[int, int]]:
		"""Return (earliest, latest) release year, or None for an empty catalog."""
		years = [m.year for m in movies]
		if not years:
			return None
		return min(years), max(years)
