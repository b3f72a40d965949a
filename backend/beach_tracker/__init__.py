"""Beach Tracker backend: career profiles, PDF imports, activities and AI recommendations."""

__version__ = "1.0.0"
