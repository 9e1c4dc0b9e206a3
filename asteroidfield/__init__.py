"""A two-player arcade asteroid shooter built on a small entity-component core."""

__version__ = "0.1.0"