from .db_manage import DbManageService
from .db_session import DbSessionService, create_db_engine

__all__ = ["DbManageService", "DbSessionService", "create_db_engine"]
