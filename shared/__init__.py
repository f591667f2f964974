"""Shared domain package for the Field Ops activity engine.

This package holds the code that does not depend on how the engine is hosted:

- Enums (enums.py) - activity types, phases, photo and session statuses
- Schemas (schemas.py) - pydantic models for templates, task state, drafts and records
- Database model (models.py) - SQLAlchemy key-value table backing the local store
- Validation (validation.py) - input sanitisation and authoring-time template checks
- Errors (errors.py) - the engine's exception taxonomy
- Templates (templates/) - the static table of generic and property activity templates
- Utility functions (utils.py) - application clock, season derivation, photo hashing
"""
