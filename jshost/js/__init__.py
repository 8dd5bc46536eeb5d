"""JavaScript sources bundled with jshost."""
