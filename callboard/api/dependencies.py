"""FastAPI dependency injection factories for repositories and services.

Each repository factory takes AsyncSession via Depends(get_async_session) and
returns a repository instance. API endpoints use these via Depends().
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from callboard.config.settings import Settings, get_settings
from callboard.dashboard.service import DashboardService
from callboard.db.session import get_async_session
from callboard.repositories.call_logs import CallLogRepository

# ---------------------------------------------------------------------------
# Call logs
# ---------------------------------------------------------------------------


async def get_call_log_repo(
    session: AsyncSession = Depends(get_async_session),
) -> CallLogRepository:
    return CallLogRepository(session)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def get_dashboard_service(
    settings: Settings = Depends(get_settings),
) -> DashboardService:
    return DashboardService(records_per_page=settings.RECORDS_PER_PAGE)
