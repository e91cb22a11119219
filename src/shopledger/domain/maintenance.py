"""Maintenance domain service."""

import logging

from shopledger.database.base import Database

logger = logging.getLogger(__name__)


class MaintenanceService:
    """Destructive housekeeping for test and demo environments."""

    def __init__(self, db: Database):
        self.db = db

    def reset_all(self) -> dict[str, int]:
        """Delete every row from every table.

        Irreversible. Returns the number of rows removed per table.
        """
        counts = self.db.reset_all()
        logger.warning("Database reset: removed %d row(s)", sum(counts.values()))
        return counts
