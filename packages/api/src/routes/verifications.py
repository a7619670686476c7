# This project was developed with assistance from AI tools.
"""Verification request routes for institution staff, with RBAC enforcement."""

from db import InMemoryStore, get_store
from db.enums import PermissionAction, PermissionResource, VerificationStatus
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.config import settings
from ..middleware.auth import CurrentUser, require_permission
from ..schemas import Pagination
from ..schemas.status import StatusBadgeItem
from ..schemas.verification import (
    ActionResponse,
    BulkCreateResponse,
    BulkVerificationCreate,
    ExtendRequest,
    FiltersPatch,
    StatusUpdateRequest,
    VerificationCreate,
    VerificationFilters,
    VerificationListResponse,
    VerificationResponse,
)
from ..services import verification as verification_service
from ..services.notifications import NotificationService, get_notification_service
from ..services.status import list_status_badges
from ..services.verification import (
    InvalidTransitionError,
    VerificationActionError,
    build_verification_response,
)

router = APIRouter()

_VERIFICATIONS = PermissionResource.VERIFICATIONS
_can_read = require_permission(_VERIFICATIONS, PermissionAction.READ)
_can_create = require_permission(_VERIFICATIONS, PermissionAction.CREATE)
_can_update = require_permission(_VERIFICATIONS, PermissionAction.UPDATE)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Verification not found",
    )


@router.get(
    "/",
    response_model=VerificationListResponse,
    dependencies=[Depends(_can_read)],
)
async def list_verifications(
    store: InMemoryStore = Depends(get_store),
    search: str = "",
    status_filter: VerificationStatus | None = Query(default=None, alias="status"),
    agent: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> VerificationListResponse:
    """Search and page through verification requests, newest first."""
    filters = VerificationFilters(
        search=search, status=status_filter, agent=agent, page=page, limit=limit
    )
    items, total = verification_service.list_verifications(store, filters)
    return VerificationListResponse(
        data=[build_verification_response(v) for v in items],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "/",
    response_model=VerificationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(_can_create)],
)
async def create_verification(
    body: VerificationCreate,
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
    notifier: NotificationService = Depends(get_notification_service),
) -> VerificationResponse:
    """Create a verification request and send the borrower their link."""
    verification = verification_service.create_verification(store, body, user.email, notifier)
    return build_verification_response(verification)


@router.post(
    "/bulk",
    response_model=BulkCreateResponse,
    dependencies=[Depends(_can_create)],
)
async def create_bulk(
    body: BulkVerificationCreate,
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
    notifier: NotificationService = Depends(get_notification_service),
) -> BulkCreateResponse:
    """Create many verifications at once. Bad rows are reported, not fatal."""
    successful, failed = verification_service.create_bulk_verifications(
        store, body.verifications, user.email, notifier
    )
    return BulkCreateResponse(
        successful=[build_verification_response(v) for v in successful],
        failed=failed,
    )


@router.get(
    "/statuses",
    response_model=list[StatusBadgeItem],
    dependencies=[Depends(_can_read)],
)
async def list_statuses() -> list[StatusBadgeItem]:
    """Badge label, variant, and color for every status."""
    return list_status_badges()


@router.get("/filters", response_model=VerificationFilters, dependencies=[Depends(_can_read)])
async def get_filters(
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
) -> VerificationFilters:
    """The caller's saved list filters."""
    return verification_service.get_filters(store, user.user_id)


@router.patch("/filters", response_model=VerificationFilters, dependencies=[Depends(_can_read)])
async def update_filters(
    body: FiltersPatch,
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
) -> VerificationFilters:
    """Merge filter changes. Changing anything but ``page`` resets to page 1."""
    return verification_service.update_filters(store, user.user_id, **body.changes())


@router.get(
    "/{verification_id}",
    response_model=VerificationResponse,
    dependencies=[Depends(_can_read)],
)
async def get_verification(
    verification_id: str,
    store: InMemoryStore = Depends(get_store),
) -> VerificationResponse:
    verification = verification_service.get_verification(store, verification_id)
    if verification is None:
        raise _not_found()
    return build_verification_response(verification)


@router.patch(
    "/{verification_id}/status",
    response_model=ActionResponse,
    dependencies=[Depends(_can_update)],
)
async def update_status(
    verification_id: str,
    body: StatusUpdateRequest,
    store: InMemoryStore = Depends(get_store),
) -> ActionResponse:
    """Move a verification to a new status, subject to the transition rules."""
    try:
        verification = verification_service.update_status(store, verification_id, body.status)
    except InvalidTransitionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    if verification is None:
        raise _not_found()
    return ActionResponse(
        message=f"Status updated to {verification.status.value}",
        verification=build_verification_response(verification),
    )


@router.post(
    "/{verification_id}/resend",
    response_model=ActionResponse,
    dependencies=[Depends(_can_update)],
)
async def resend(
    verification_id: str,
    store: InMemoryStore = Depends(get_store),
    notifier: NotificationService = Depends(get_notification_service),
) -> ActionResponse:
    try:
        verification = verification_service.resend(store, verification_id, notifier)
    except VerificationActionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    if verification is None:
        raise _not_found()
    return ActionResponse(
        message="Verification link resent",
        verification=build_verification_response(verification),
    )


@router.post(
    "/{verification_id}/extend",
    response_model=ActionResponse,
    dependencies=[Depends(_can_update)],
)
async def extend(
    verification_id: str,
    body: ExtendRequest | None = None,
    store: InMemoryStore = Depends(get_store),
) -> ActionResponse:
    """Push the expiry date out. Defaults to the configured extension."""
    days = body.days if body is not None else settings.DEFAULT_EXTENSION_DAYS
    try:
        verification = verification_service.extend(store, verification_id, days)
    except VerificationActionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e
    if verification is None:
        raise _not_found()
    return ActionResponse(
        message=f"Expiration extended by {days} days",
        verification=build_verification_response(verification),
    )


@router.post(
    "/{verification_id}/cancel",
    response_model=ActionResponse,
    dependencies=[Depends(_can_update)],
)
async def cancel(
    verification_id: str,
    store: InMemoryStore = Depends(get_store),
) -> ActionResponse:
    """Cancel a verification; its link stops working immediately."""
    try:
        verification = verification_service.cancel(store, verification_id)
    except InvalidTransitionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    if verification is None:
        raise _not_found()
    return ActionResponse(
        message="Verification cancelled",
        verification=build_verification_response(verification),
    )
