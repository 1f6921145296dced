"""Service packages."""
