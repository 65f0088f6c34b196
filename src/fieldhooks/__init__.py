"""fieldhooks — pluggable content-field handlers for a CMS host."""

__version__ = "0.1.0"
