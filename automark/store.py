"""
Keyed record access used by the plugin and the backup/restore steps.

The plugin never touches a session directly. It is handed a record store
and talks to it in table names and condition dicts, the same shape the host
uses for every other subplugin.
"""

import logging
from types import SimpleNamespace

from sqlalchemy import delete, func, select, update

from .errors import InvalidFieldError, UnknownTableError
from .models import TABLES

logger = logging.getLogger(__name__)


def _as_dict(record):
    if isinstance(record, dict):
        return dict(record)
    return dict(vars(record))


class RecordStore:
    """Interface for the host's generic record store."""

    def get_record(self, table, conditions):
        raise NotImplementedError

    def get_records(self, table, conditions=None):
        raise NotImplementedError

    def insert_record(self, table, record):
        raise NotImplementedError

    def update_record(self, table, record):
        raise NotImplementedError

    def delete_records(self, table, conditions):
        raise NotImplementedError

    def record_exists(self, table, conditions):
        return self.get_record(table, conditions) is not None


class SQLAlchemyRecordStore(RecordStore):
    """
    Record store over a SQLAlchemy session.

    Args:
        session: SQLAlchemy session (``db.session`` inside a Flask app)
        autocommit (bool): commit after each write, so every call is its
            own unit of work
    """

    def __init__(self, session, autocommit=False):
        self.session = session
        self.autocommit = autocommit

    def _model(self, table):
        try:
            return TABLES[table]
        except KeyError:
            raise UnknownTableError(table) from None

    def _columns(self, table, model, fields):
        columns = model.__table__.c
        for field in fields:
            if field not in columns:
                raise InvalidFieldError(table, field)
        return columns

    def _where(self, table, model, conditions):
        columns = self._columns(table, model, conditions or {})
        return [columns[field] == value for field, value in (conditions or {}).items()]

    def _row(self, model, mapping):
        return SimpleNamespace(**{c.name: mapping[c.name] for c in model.__table__.c})

    def _done(self):
        if self.autocommit:
            self.session.commit()
        else:
            self.session.flush()

    def get_records(self, table, conditions=None):
        model = self._model(table)
        stmt = (
            select(model.__table__)
            .where(*self._where(table, model, conditions))
            .order_by(model.__table__.c.id)
        )
        rows = self.session.execute(stmt).mappings().all()
        return [self._row(model, row) for row in rows]

    def get_record(self, table, conditions):
        # Lookups are by submission alone, so the oldest matching row wins
        records = self.get_records(table, conditions)
        return records[0] if records else None

    def insert_record(self, table, record):
        model = self._model(table)
        values = _as_dict(record)
        values.pop("id", None)
        self._columns(table, model, values)
        entry = model(**values)
        self.session.add(entry)
        self._done()
        logger.debug("Inserted %s row %s", table, entry.id)
        return entry.id

    def update_record(self, table, record):
        model = self._model(table)
        values = _as_dict(record)
        record_id = values.pop("id", None)
        if not record_id:
            raise ValueError(f"Cannot update {table} row without an id")
        columns = self._columns(table, model, values)
        stmt = update(model.__table__).where(columns.id == record_id).values(**values)
        result = self.session.execute(stmt)
        self._done()
        return result.rowcount > 0

    def delete_records(self, table, conditions):
        model = self._model(table)
        stmt = delete(model.__table__).where(*self._where(table, model, conditions))
        result = self.session.execute(stmt)
        self._done()
        return result.rowcount

    def count_records(self, table, conditions=None):
        model = self._model(table)
        stmt = (
            select(func.count())
            .select_from(model.__table__)
            .where(*self._where(table, model, conditions))
        )
        return self.session.execute(stmt).scalar_one()
