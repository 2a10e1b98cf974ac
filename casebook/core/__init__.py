"""
Core utilities shared across the casebook package.

This package hosts configuration helpers (env vars, storage paths) and
cross-cutting concerns such as logging setup. Services and routers should
depend on these primitives instead of reading os.environ directly.
"""
