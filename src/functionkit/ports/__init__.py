"""Port definitions used by the application services."""
