"""Entity Gateway - catalog and solutions CRUD backends."""

__version__ = "1.0.0"
