"""Content catalog service: songs, albums, genres and their aggregates."""
