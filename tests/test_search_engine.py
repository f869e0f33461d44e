"""
Tests for SearchEngine: id lookup, filtered search and genre listing.
Run: pytest tests/test_search_engine.py
"""

import pytest

from conftest import make_record

from movie_catalog.data_loader import CatalogLoadError
from movie_catalog.models import LoadResult, SearchCriteria
from movie_catalog.search_engine import SearchEngine


def ids(movies):
	return [m.id for m in movies]


def test_get_all_returns_catalog_in_source_order(engine, records):
	movies = engine.get_all()
	assert len(movies) == len(records)
	assert [m.title for m in movies] == [r['movieName'] for r in records]


def test_get_by_id_found(engine):
	movie = engine.get_by_id(1)
	assert movie is not None
	assert movie.title == 'The Prison Escape'


@pytest.mark.parametrize('movie_id', [None, 0, -1, -100, 999])
def test_get_by_id_not_found(engine, movie_id):
	assert engine.get_by_id(movie_id) is None


def test_get_by_id_skips_index_for_non_positive_ids():
	class RecordingIndex(dict):
		lookups = []

		def get(self, key, default=None):
			self.lookups.append(key)
			return super().get(key, default)

	engine = SearchEngine((), index={})
	engine._index = RecordingIndex()
	engine.get_by_id(0)
	engine.get_by_id(-5)
	engine.get_by_id(None)
	assert RecordingIndex.lookups == []


def test_scenario_from_two_movie_catalog(loader):
	result = loader.load([
		make_record(1, 'The Prison Escape', 'Drama'),
		make_record(2, 'The Family Boss', 'Action/Crime'),
	])
	engine = SearchEngine.from_load_result(result)
	assert ids(engine.search('prison', None, None)) == [1]
	assert ids(engine.search(None, 2, None)) == [2]
	assert ids(engine.search(None, None, 'crime')) == [2]
	assert ids(engine.search('the', None, 'drama')) == [1]
	assert engine.search(None, None, None) == []
	assert engine.get_by_id(0) is None
	assert engine.get_by_id(1).id == 1


@pytest.mark.parametrize('name, genre', [
	(None, None),
	('', ''),
	('   ', None),
	(None, '\t \n'),
	('  ', '  '),
])
def test_search_without_criteria_is_empty(engine, name, genre):
	assert engine.search(name=name, genre=genre) == []


def test_search_by_name_is_case_insensitive_substring(engine):
	assert ids(engine.search(name='PRISON')) == [1]
	assert ids(engine.search(name='the')) == [1, 2]
	assert ids(engine.search(name='heist')) == [3]


def test_search_name_is_trimmed(engine):
	assert engine.search(name='  Prison  ') == engine.search(name='Prison')


def test_search_name_matches_title_only(engine):
	# "Drama" appears in a title and in genres; only the title counts for name
	assert ids(engine.search(name='drama')) == [5]


def test_search_by_id_is_exact(engine):
	assert ids(engine.search(id=4)) == [4]
	assert engine.search(id=42) == []
	assert engine.search(id=-1) == []


def test_search_by_genre_matches_compound_values(engine):
	assert ids(engine.search(genre='crime')) == [2, 4]
	assert ids(engine.search(genre='DRAMA')) == [1, 4, 5]
	assert ids(engine.search(genre='action/crime')) == [2]
	assert ids(engine.search(genre=' sci ')) == [3]


def test_search_combines_criteria_with_and(engine):
	assert ids(engine.search(name='the', genre='drama')) == [1]
	assert ids(engine.search(name='prison', id=1, genre='drama')) == [1]
	assert engine.search(name='prison', id=2) == []
	assert ids(engine.search(name='   ', genre='crime')) == [2, 4]


def test_search_no_matches(engine):
	assert engine.search(name='NonExistentMovie') == []


def test_search_is_idempotent(engine):
	first = engine.search(name='the', genre='a')
	second = engine.search(name='the', genre='a')
	assert first == second


def test_search_result_is_a_fresh_list(engine):
	results = engine.search(genre='drama')
	results.clear()
	assert ids(engine.search(genre='drama')) == [1, 4, 5]


def test_list_genres_sorted_and_distinct(engine):
	assert engine.list_genres() == ['Action/Crime', 'Action/Sci-Fi', 'Crime/Drama', 'Drama']


def test_list_genres_independent_of_source_order(loader, records):
	reversed_engine = SearchEngine.from_load_result(loader.load(list(reversed(records))))
	forward_engine = SearchEngine.from_load_result(loader.load(records))
	assert reversed_engine.list_genres() == forward_engine.list_genres()


def test_list_genres_returns_a_copy(engine):
	engine.list_genres().append('Zzz')
	assert 'Zzz' not in engine.list_genres()


def test_failed_load_gives_degraded_empty_engine():
	engine = SearchEngine.from_load_result(LoadResult.failure('boom'))
	assert engine.degraded
	assert engine.load_error == 'boom'
	assert engine.get_all() == ()
	assert engine.get_by_id(1) is None
	assert engine.search(name='the') == []
	assert engine.list_genres() == []


def test_successful_load_is_not_degraded(engine):
	assert not engine.degraded
	assert engine.load_error is None


def test_engine_builds_its_own_index_when_not_given(loader, records):
	movies = loader.load(records).movies
	engine = SearchEngine(movies)
	assert engine.get_by_id(3).title == 'Dream Heist'


def test_search_criteria_normalization():
	criteria = SearchCriteria.normalize(name='  Boss ', id=None, genre='   ')
	assert criteria == SearchCriteria(name='Boss', id=None, genre=None)
	assert not criteria.is_empty
	assert SearchCriteria.normalize(name=' ', genre='').is_empty
	assert not SearchCriteria.normalize(id=0).is_empty


def test_search_logs_normalized_criteria_and_count(engine, log_records):
	engine.search(name='  The ', genre=' drama ')
	events = [r for r in log_records if r['extra'].get('event') == 'movie_search']
	assert len(events) == 1
	extra = events[0]['extra']
	assert (extra['name'], extra['id'], extra['genre']) == ('The', None, 'drama')
	assert extra['result_count'] == 1


def test_search_without_criteria_logs_zero_count(engine, log_records):
	engine.search(name='   ')
	events = [r for r in log_records if r['extra'].get('event') == 'movie_search']
	assert [e['extra']['result_count'] for e in events] == [0]
	assert events[0]['extra']['name'] is None


def test_get_by_id_logs_lookup_outcome(engine, log_records):
	engine.get_by_id(2)
	engine.get_by_id(999)
	engine.get_by_id(0)
	events = [r['extra'] for r in log_records if r['extra'].get('event') == 'movie_lookup']
	assert [(e['id'], e['found']) for e in events] == [(2, True), (999, False), (0, False)]


def test_engine_without_index_rejects_duplicate_ids(loader, records):
	movies = list(loader.load(records).movies)
	movies.append(movies[0])
	with pytest.raises(CatalogLoadError):
		SearchEngine(movies)


def test_name_search_uses_full_case_folding(loader):
	engine = SearchEngine.from_load_result(loader.load([
		make_record(1, 'Die Straße', 'Drama'),
		make_record(2, 'Grass Fields', 'Drama'),
	]))
	assert ids(engine.search(name='STRASSE')) == [1]
	assert ids(engine.search(name='ss')) == [1, 2]
	assert ids(engine.search(name='straße')) == [1]
