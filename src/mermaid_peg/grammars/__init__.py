"""Dialect grammars. Each module exposes a cached ``grammar()`` and its tree schemas."""
