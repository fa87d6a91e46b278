"""Core exclusion list logic: catalogs, building, serialization and applying."""
