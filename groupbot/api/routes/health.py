"""
Health check endpoints for groupbot.
"""

import time
from typing import Any

from fastapi import APIRouter, Request

from groupbot.core.config.settings import settings
from groupbot.core.logging.logger import get_app_logger

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """
    Liveness plus the size of the ledger and catalog mirrors.
    """
    start_time = time.time()
    services = getattr(request.app.state, "services", None)

    state: dict[str, Any] = {"loaded": services is not None}
    if services is not None:
        state.update(
            {
                "ledger_records": len(services.ledger),
                "catalog_entries": len(services.catalog),
                "rotation_pending": services.rotation.pending,
                "state_owner_running": services.state.is_running,
                "state_backlog": services.state.backlog,
            }
        )

    response_time = time.time() - start_time
    health_data = {
        "status": "healthy" if services is not None else "starting",
        "timestamp": time.time(),
        "response_time_ms": round(response_time * 1000, 2),
        "environment": {
            "environment": settings.environment,
            "version": settings.version,
            "log_level": settings.log_level,
            "store_type": getattr(request.app.state, "store_type", settings.store_type),
        },
        "state": state,
    }

    get_app_logger().debug(f"Health check completed - Status: {health_data['status']}")
    return health_data
