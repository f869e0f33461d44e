"""Shared fixtures for the movie catalog tests."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from movie_catalog.data_loader import DataLoader
from movie_catalog.search_engine import SearchEngine


def make_record(movie_id, name, genre, **overrides):
	"""Raw catalog record in the on-disk field naming."""
	record = {
		'id': movie_id,
		'movieName': name,
		'director': 'Test Director',
		'year': 2000,
		'genre': genre,
		'description': f'About {name}',
		'duration': 120,
		'imdbRating': 4.0,
	}
	record.update(overrides)
	return record


@pytest.fixture
def records():
	return [
		make_record(1, 'The Prison Escape', 'Drama', year=1994),
		make_record(2, 'The Family Boss', 'Action/Crime', year=1972),
		make_record(3, 'Dream Heist', 'Action/Sci-Fi', year=2010),
		make_record(4, 'Urban Stories', 'Crime/Drama', year=1994),
		make_record(5, 'Quiet Drama Club', 'Drama', year=2001),
	]


@pytest.fixture
def loader():
	return DataLoader()


@pytest.fixture
def engine(loader, records):
	return SearchEngine.from_load_result(loader.load(records))


@pytest.fixture
def log_records():
	"""Collect loguru records emitted during a test."""
	from loguru import logger

	collected = []
	handler_id = logger.add(lambda message: collected.append(message.record), level='DEBUG')
	yield collected
	logger.remove(handler_id)
