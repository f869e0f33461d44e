"""
Data models for the Movie Catalog.
Defines the core data structures shared by the loader, the engine and the API.
"""

from dataclasses import dataclass, field  # immutable record-like classes
from types import MappingProxyType  # read-only view over the id index
from typing import Mapping, Optional, Tuple  # type hints


@dataclass(frozen=True)
class Movie:
	"""
	A single movie in the catalog.
	Instances are created once by the loader and never modified afterwards.
	"""
	id: int  # primary key, always >= 1
	title: str  # display title (source field 'movieName')
	director: str  # director name as shipped
	year: int  # release year
	genre: str  # single opaque genre field, may be compound like "Action/Crime"
	description: str  # short synopsis
	duration_minutes: int  # runtime in minutes (source field 'duration')
	rating: float  # IMDb-style score (source field 'imdbRating')


@dataclass(frozen=True)
class SearchCriteria:
	"""
	Normalized search filters.
	Text criteria are trimmed; blank text is treated as not supplied.
	"""
	name: Optional[str] = None  # title substring
	id: Optional[int] = None  # exact movie id
	genre: Optional[str] = None  # genre substring

	@classmethod
	def normalize(cls, name: Optional[str] = None, id: Optional[int] = None, genre: Optional[str] = None) -> "SearchCriteria":
		"""Build criteria from raw user input, dropping whitespace-only text."""
		return cls(name=_clean_text(name), id=id, genre=_clean_text(genre))

	@property
	def is_empty(self) -> bool:
		return self.name is None and self.id is None and self.genre is None


def _clean_text(value: Optional[str]) -> Optional[str]:
	if value is None:
		return None
	value = value.strip()
	return value or None  # "   " behaves like an absent criterion


@dataclass(frozen=True)
class LoadResult:
	"""
	Outcome of a catalog load: either the parsed movies with their index,
	or the cause of the failure. The caller decides whether to degrade or abort.
	"""
	movies: Tuple[Movie, ...] = ()  # source order
	index: Mapping[int, Movie] = field(default_factory=lambda: MappingProxyType({}))  # id -> movie
	error: Optional[str] = None  # failure cause, None on success

	@classmethod
	def success(cls, movies: Tuple[Movie, ...], index: Mapping[int, Movie]) -> "LoadResult":
		return cls(movies=tuple(movies), index=MappingProxyType(dict(index)))

	@classmethod
	def failure(cls, error: str) -> "LoadResult":
		return cls(error=error)

	@property
	def succeeded(self) -> bool:
		return self.error is None
