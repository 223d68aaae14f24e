"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager
from db.store import RecordStore
from services.expenses import ExpenseService


class Services:
    """Container for all application services.

    Makes it easy to inject a test database manager.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, the
            database path in config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)
        self.store = RecordStore(self.db_manager, key=config.storage_key)
        self.expenses = ExpenseService(self.store)
