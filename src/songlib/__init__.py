"""songlib - song catalog service with paginated listing and verse-paged lyrics."""

__version__ = "1.0.0"
