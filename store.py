"""
Document-style access to the catalog database.

`CatalogStore` is constructed once, opened against a Flask app at startup,
handed to every controller and closed at shutdown. Queries run on the
request's own session; `gather()` fans independent reads out to a thread
pool, each call in a fresh application context and therefore its own session.
"""

import os
from concurrent.futures import ThreadPoolExecutor, wait

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import make_url

from app_logging import get_logger
from data_models import db

logger = get_logger("catalog.store")


class StoreClosedError(RuntimeError):
    """Raised when the store is used before open() or after close()."""


class CatalogStore:

    def __init__(self, database=None, max_workers: int = 4):
        self.db = database or db
        self.max_workers = max_workers
        self._app = None
        self._executor = None

    @property
    def is_open(self) -> bool:
        return self._executor is not None

    def open(self, app):
        """
        Bind the store to an app, create missing tables and start the worker pool.
        """
        if self.is_open:
            return self
        _ensure_sqlite_dir(app.config["SQLALCHEMY_DATABASE_URI"])
        if "sqlalchemy" not in app.extensions:
            self.db.init_app(app)
        with app.app_context():
            self.db.create_all()
        self._app = app
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="catalog-store",
        )
        app.extensions["catalog_store"] = self
        logger.info("store opened (%s, %d workers)", app.config["SQLALCHEMY_DATABASE_URI"], self.max_workers)
        return self

    def close(self):
        if not self.is_open:
            return
        self._executor.shutdown(wait=True)
        self._executor = None
        with self._app.app_context():
            self.db.engine.dispose()
        logger.info("store closed")

    # --- Reads ---

    def find_all(self, model, *criteria, order_by=None, **filters):
        query = self.db.select(model).filter_by(**filters)
        if criteria:
            query = query.where(*criteria)
        if order_by is not None:
            query = query.order_by(*(order_by if isinstance(order_by, (list, tuple)) else [order_by]))
        return self.db.session.execute(query).scalars().all()

    def find_by_id(self, model, doc_id):
        return self.db.session.get(model, doc_id)

    def find_one(self, model, *criteria, **filters):
        query = self.db.select(model).filter_by(**filters)
        if criteria:
            query = query.where(*criteria)
        return self.db.session.execute(query.limit(1)).scalars().first()

    def count(self, model, *criteria, **filters) -> int:
        query = self.db.select(self.db.func.count()).select_from(model).filter_by(**filters)
        if criteria:
            query = query.where(*criteria)
        return self.db.session.execute(query).scalar_one()

    def gather(self, **calls):
        """
        Run independent reads concurrently and wait for all of them.

        Args:
            **calls: name -> zero-argument callable.

        Returns:
            dict: name -> result. The first failure is re-raised after every call finished.
        """
        if not self.is_open:
            raise StoreClosedError("store is not open")
        futures = {name: self._executor.submit(self._in_context, call) for name, call in calls.items()}
        wait(futures.values())
        return {name: future.result() for name, future in futures.items()}

    def _in_context(self, call):
        with self._app.app_context():
            return call()

    # --- Writes ---

    def insert(self, document):
        self.db.session.add(document)
        self._commit()
        return document

    def replace(self, model, doc_id, fields: dict):
        """
        Overwrite every given field of an existing document, keeping its identity.

        Returns:
            The updated document, or None if no document has that id.
        """
        document = self.find_by_id(model, doc_id)
        if document is None:
            return None
        for name, value in fields.items():
            setattr(document, name, value)
        self._commit()
        return document

    def delete(self, model, doc_id) -> bool:
        document = self.find_by_id(model, doc_id)
        if document is None:
            return False
        self.db.session.delete(document)
        self._commit()
        return True

    def _commit(self):
        try:
            self.db.session.commit()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise


def _ensure_sqlite_dir(uri: str):
    url = make_url(uri)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        directory = os.path.dirname(url.database)
        if directory:
            os.makedirs(directory, exist_ok=True)


def get_store(app) -> CatalogStore:
    return app.extensions["catalog_store"]
