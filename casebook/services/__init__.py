"""
High-level use cases for casebook.

Each service module orchestrates repositories/adapters to implement the
catalog's rules (create/update/delete cases, filters, export/import).

Routers and scripts should call these services instead of touching the
storage slot directly.
"""
