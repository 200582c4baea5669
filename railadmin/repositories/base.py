import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class Repository:
    """Shared plumbing for the table repositories.

    A repository built without a session is permanently disconnected: every
    operation becomes a no-op returning None, [] or False.
    """

    def __init__(self, db: Session | None):
        self.db = db

    @property
    def is_connected(self):
        return self.db is not None

    def _fail(self, action, error):
        # the session is unusable until the failed transaction is rolled back
        self.db.rollback()
        logger.error("Error %s: %s", action, error)
