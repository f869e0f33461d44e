"""
Search engine module.
Answers id lookups, multi-criteria filtered searches and genre listings
over the immutable catalog produced by the loader.
"""

from types import MappingProxyType  # read-only index view
from typing import List, Mapping, Optional, Sequence, Tuple  # type annotations for clarity

# Import project data structures
from .data_loader import DataLoader  # index building shared with the loader
from .models import LoadResult, Movie, SearchCriteria  # core data classes

# Import loguru for console logging
from loguru import logger  # simple structured logger


class SearchEngine:
	"""
	Read-only query service over a loaded catalog.
	Built once and shared by every caller; no method mutates its state,
	so it can be used from any number of threads without locking.
	"""
	def __init__(
		self,
		movies: Sequence[Movie],  # catalog in source order
		index: Optional[Mapping[int, Movie]] = None,  # id -> movie, built from movies if omitted
		load_error: Optional[str] = None,  # cause of a failed load, if any
	):
		self._movies: Tuple[Movie, ...] = tuple(movies)  # frozen copy of the catalog
		if index is None:
			index = DataLoader().build_index(self._movies)  # duplicate ids raise CatalogLoadError
		self._index: Mapping[int, Movie] = MappingProxyType(dict(index))  # primary-key index
		self.load_error = load_error  # kept so callers can tell degraded from empty
		# Genre list never changes after load, so compute it once
		self._genres: List[str] = sorted({m.genre for m in self._movies})
		logger.info(f"[Engine] Ready with {len(self._movies)} movies and {len(self._genres)} genres")

	@classmethod
	def from_load_result(cls, result: LoadResult) -> "SearchEngine":
		"""Build an engine from a load outcome; a failed load gives an empty, degraded engine."""
		if not result.succeeded:
			logger.warning(f"[Engine] Serving an empty catalog after load failure: {result.error}")
			return cls((), load_error=result.error)
		return cls(result.movies, index=result.index)

	@property
	def degraded(self) -> bool:
		return self.load_error is not None

	def get_all(self) -> Tuple[Movie, ...]:
		"""Return every movie in catalog order."""
		return self._movies

	def get_by_id(self, movie_id: Optional[int]) -> Optional[Movie]:
		"""Return the movie with this id, or None. Non-positive ids never reach the index."""
		event = logger.bind(event='movie_lookup', id=movie_id)
		if movie_id is None or movie_id <= 0:
			event.bind(found=False).debug(f"[Engine] Rejected lookup key {movie_id!r}")
			return None
		movie = self._index.get(movie_id)
		event.bind(found=movie is not None).debug(f"[Engine] Lookup id={movie_id} found={movie is not None}")
		return movie

	def search(self, name: Optional[str] = None, id: Optional[int] = None, genre: Optional[str] = None) -> List[Movie]:
		"""
		Return movies matching every supplied criterion, in catalog order.
		- name: case-insensitive substring of the title
		- id: exact id
		- genre: case-insensitive substring of the genre field
		With no usable criteria the result is empty, never the whole catalog.
		"""
		criteria = SearchCriteria.normalize(name=name, id=id, genre=genre)  # trim and drop blanks
		event = logger.bind(event='movie_search', name=criteria.name, id=criteria.id, genre=criteria.genre)

		if criteria.is_empty:
			event.bind(result_count=0).info("[Engine] No search criteria provided, returning no results")
			return []

		results = [m for m in self._movies if self._matches(m, criteria)]
		event.bind(result_count=len(results)).info(
			f"[Engine] Search name={criteria.name!r} id={criteria.id} genre={criteria.genre!r} matched {len(results)} movies"
		)
		return results

	@staticmethod
	def _matches(movie: Movie, criteria: SearchCriteria) -> bool:
		"""AND-combine the supplied criteria against one movie."""
		# casefold, not lower: "STRASSE" and "ss" both match a title with "ß"
		if criteria.name is not None and criteria.name.casefold() not in movie.title.casefold():
			return False
		if criteria.id is not None and movie.id != criteria.id:
			return False
		if criteria.genre is not None and criteria.genre.casefold() not in movie.genre.casefold():
			return False
		return True

	def list_genres(self) -> List[str]:
		"""Return each distinct genre value once, sorted ascending. Compound genres stay whole."""
		return list(self._genres)  # copy so callers cannot reorder the cached list
