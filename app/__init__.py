"""Economic risk dashboard backend."""
