import csv
import logging
from datetime import datetime

from ..config import get_audit_file

logger = logging.getLogger(__name__)


class AuditService:
    """Append-only CSV trail of user actions: ``action_name,timestamp``."""

    def __init__(self, path=None):
        self.path = path or get_audit_file()
        self._file = None
        self._writer = None
        try:
            self._file = open(self.path, "a", newline="", encoding="utf-8")
            self._writer = csv.writer(self._file)
        except OSError as e:
            logger.error("Error creating audit log %s: %s", self.path, e)

    def log_action(self, action_name):
        if self._writer is None:
            return
        self._writer.writerow([action_name, datetime.now().isoformat()])
        self._file.flush()

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None
