from fastapi import APIRouter, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from relcal_lib.services.resolver import resolve_service
from .interfaces import TrackerAuthError, TrackerConfigError, TrackerSearchError

import logging
router = APIRouter()
logger = logging.getLogger(__name__)

_SEARCH_ERRORS = {
    401: "Jira authentication failed - check username and password/token",
    403: "Jira access forbidden - check user permissions",
    404: "Jira project not found - check project key",
}


@router.get('/jira-tickets')
async def api_jira_tickets(request: Request):
    """Return tickets matching the configured JQL, or [] when unconfigured."""
    svc = resolve_service(request, 'ticket_service')
    try:
        return await run_in_threadpool(svc.list_tickets)
    except TrackerConfigError as e:
        logger.error("Tracker config error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    except TrackerAuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except TrackerSearchError as e:
        if e.status_code is None:
            detail = str(e)
        else:
            detail = _SEARCH_ERRORS.get(e.status_code, f"Jira API error: {e.status_code}")
        raise HTTPException(status_code=500, detail=detail)
