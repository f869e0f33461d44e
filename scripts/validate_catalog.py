"""
Validate a movie catalog file before shipping it.

This script:
1) Reads the catalog (JSON array or JSON Lines)
2) Validates every record and the uniqueness of ids
3) Prints catalog statistics (movies, genres, directors, years)

Usage:
    python -m scripts.validate_catalog [path/to/movies.json]

Exits with status 1 when the catalog would fail to load.
"""

import sys  # exit status and argv
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from movie_catalog.data_loader import DataLoader  # data ingestion
from movie_catalog.search_engine import SearchEngine  # genre listing


def main(argv=None) -> int:
	argv = sys.argv[1:] if argv is None else argv

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Validate Movie Catalog")
	logger.info("=" * 60)

	# Resolve the catalog path, defaulting to the shipped data file
	root = Path(__file__).resolve().parents[1]  # project root
	data_path = Path(argv[0]) if argv else root / 'data' / 'movies.json'

	# 1) Load and validate
	logger.info(f"[1/2] Loading {data_path}...")
	loader = DataLoader()  # loader instance
	result = loader.load_from_file(str(data_path))
	if not result.succeeded:
		logger.error(f"[FAIL] Catalog rejected: {result.error}")
		return 1
	logger.info(f"[OK] Loaded {len(result.movies)} movies")

	# 2) Statistics
	logger.info("[2/2] Catalog statistics")
	engine = SearchEngine.from_load_result(result)
	genres = engine.list_genres()
	logger.info(f"  Unique genres: {len(genres)} -> {', '.join(genres)}")
	logger.info(f"  Unique directors: {len(loader.get_all_directors(result.movies))}")
	year_range = loader.get_year_range(result.movies)
	if year_range:
		logger.info(f"  Year range: {year_range[0]} - {year_range[1]}")

	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke validator
