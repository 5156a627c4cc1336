"""
Persistence layer: SQLAlchemy models, the DBStorage engine/session wrapper
and the per-component repositories built on top of it.

There is no module-level storage instance; ``api.create_app`` builds one from
configuration and hands it to the repositories.
"""
from models.db_storage import DBStorage

__all__ = ["DBStorage"]
