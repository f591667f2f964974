import logging
import os
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.errors import PersistenceFailure
from shared.models import Base, KeyValueEntry


class LocalStore:
    """Durable key-value store on a local SQLite database.

    Values are bytes; str values are stored UTF-8 encoded. Every public method
    runs in its own session, and set_many/delete_many commit as one transaction.
    SQLAlchemy errors surface as PersistenceFailure.
    """

    def __init__(self, db_path='field_ops.db'):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.db_path = db_path

        if db_path == ':memory:':
            # One shared connection, otherwise each session sees an empty database
            self.engine = create_engine(
                'sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool
            )
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            # Autosave runs on a timer thread
            self.engine = create_engine(
                f'sqlite:///{db_path}', connect_args={'check_same_thread': False}
            )
        self.logger.info(f"Local store opened at {db_path}")

        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)

    def _get_session(self):
        return self.Session()

    @staticmethod
    def _encode(value):
        if isinstance(value, str):
            return value.encode('utf-8')
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        raise TypeError(f"LocalStore values must be bytes or str, got {type(value).__name__}")

    def get(self, key):
        """Return the stored bytes for key, or None."""
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry else None
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to read {key}: {e}") from e
        finally:
            session.close()

    def set(self, key, value):
        self.set_many({key: value})

    def set_many(self, mapping):
        """Write several keys in one transaction."""
        session = self._get_session()
        try:
            for key, value in mapping.items():
                session.merge(KeyValueEntry(key=key, value=self._encode(value)))
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(f"Failed to write {', '.join(mapping)}: {e}") from e
        finally:
            session.close()

    def delete(self, key):
        return self.delete_many([key]) > 0

    def delete_many(self, keys):
        """Delete several keys in one transaction; returns how many existed."""
        keys = list(keys)
        if not keys:
            return 0
        session = self._get_session()
        try:
            deleted = session.query(KeyValueEntry).filter(
                KeyValueEntry.key.in_(keys)
            ).delete(synchronize_session=False)
            session.commit()
            return deleted
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(f"Failed to delete {', '.join(keys)}: {e}") from e
        finally:
            session.close()

    def keys(self, prefix=''):
        """List stored keys starting with prefix, sorted."""
        session = self._get_session()
        try:
            query = session.query(KeyValueEntry.key)
            if prefix:
                query = query.filter(KeyValueEntry.key.startswith(prefix, autoescape=True))
            return sorted(row[0] for row in query.all())
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to list keys with prefix {prefix!r}: {e}") from e
        finally:
            session.close()

    def close(self):
        self.engine.dispose()
        self.logger.debug(f"Local store closed ({self.db_path})")

    def __repr__(self):
        return f"LocalStore({os.fspath(self.db_path)!r})"
