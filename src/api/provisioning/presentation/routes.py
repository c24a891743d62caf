"""HTTP routes for user provisioning functions."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from provisioning.application.exceptions import (
    EmptyBatchError,
    InvalidProvisioningRequestError,
    ProfileLinkError,
    TeamAssignmentError,
)
from provisioning.application.services import (
    BulkImportService,
    UserProvisioningService,
)
from provisioning.application.value_objects import AuthorizedCaller
from provisioning.dependencies import (
    get_admin_caller,
    get_bulk_import_service,
    get_observation_context,
    get_route_probe,
    get_user_provisioning_service,
)
from provisioning.ports.exceptions import IdentityProviderError
from provisioning.presentation.models import (
    BulkImportRequest,
    BulkImportResponse,
    CreateUserRequest,
    InviteUserRequest,
    ProvisionedUserResponse,
)
from provisioning.presentation.observability import ProvisioningRouteProbe
from shared_kernel.observability_context import ObservationContext

router = APIRouter(
    prefix="/functions/v1",
    tags=["provisioning"],
)

_ERROR_RESPONSES = {
    401: {"description": "Authentication required"},
    403: {"description": "Caller is not an owner or admin"},
    500: {"description": "Internal server error"},
}


def _bad_request(
    probe: ProvisioningRouteProbe, operation: str, message: str
) -> HTTPException:
    probe.request_rejected(
        operation=operation, status_code=status.HTTP_400_BAD_REQUEST, reason=message
    )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _server_error(
    probe: ProvisioningRouteProbe, operation: str, error: Exception
) -> HTTPException:
    probe.request_failed(operation=operation, error=error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Server error",
    )


@router.post(
    "/bulk-import-users",
    summary="Bulk import users",
    description="Invite or create many users from CSV text or pre-parsed rows",
    responses={
        200: {"description": "Per-row results"},
        400: {"description": "No rows provided"},
        **_ERROR_RESPONSES,
    },
)
async def bulk_import_users(
    request: BulkImportRequest,
    caller: Annotated[AuthorizedCaller, Depends(get_admin_caller)],
    service: Annotated[BulkImportService, Depends(get_bulk_import_service)],
    probe: Annotated[ProvisioningRouteProbe, Depends(get_route_probe)],
    observation: Annotated[ObservationContext, Depends(get_observation_context)],
) -> BulkImportResponse:
    """Provision every row of a batch and report each row's outcome.

    Row failures are reported in the results, never as an HTTP error.

    Raises:
        HTTPException: 400 if the batch has no rows
        HTTPException: 500 for unexpected errors
    """
    observation = observation.with_caller(caller.user_id)
    probe = probe.with_context(observation)
    try:
        report = await service.import_users(request.to_batch(), observation=observation)
    except EmptyBatchError as e:
        raise _bad_request(probe, "bulk_import_users", str(e))
    except Exception as e:
        raise _server_error(probe, "bulk_import_users", e)

    return BulkImportResponse.from_domain(report)


@router.post(
    "/create-user",
    summary="Create a user",
    description="Create an unconfirmed user with a profile and optional team",
    responses={
        400: {"description": "Invalid request or provisioning failure"},
        **_ERROR_RESPONSES,
    },
)
async def create_user(
    request: CreateUserRequest,
    caller: Annotated[AuthorizedCaller, Depends(get_admin_caller)],
    service: Annotated[UserProvisioningService, Depends(get_user_provisioning_service)],
    probe: Annotated[ProvisioningRouteProbe, Depends(get_route_probe)],
    observation: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ProvisionedUserResponse:
    """Create one user directly.

    Raises:
        HTTPException: 400 if the request is invalid, the identity provider
            refuses the user, the profile cannot be written or the team
            assignment fails (the latter also carries the new user_id)
        HTTPException: 500 for unexpected errors
    """
    observation = observation.with_caller(caller.user_id)
    probe = probe.with_context(observation)
    try:
        user = await service.with_context(observation).create_user(request.to_command())
    except (InvalidProvisioningRequestError, IdentityProviderError) as e:
        raise _bad_request(probe, "create_user", str(e))
    except ProfileLinkError as e:
        raise _bad_request(probe, "create_user", f"profile upsert failed: {e.reason}")
    except TeamAssignmentError as e:
        message = f"team assignment failed: {e.reason}"
        probe.request_rejected(
            operation="create_user",
            status_code=status.HTTP_400_BAD_REQUEST,
            reason=message,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": message, "user_id": e.user_id},
        )
    except Exception as e:
        raise _server_error(probe, "create_user", e)

    return ProvisionedUserResponse(user_id=user.user_id)


@router.post(
    "/invite-user",
    summary="Invite a user",
    description="Send an invitation email and record the invitee's role",
    responses={
        400: {"description": "Invalid request or invitation refused"},
        **_ERROR_RESPONSES,
    },
)
async def invite_user(
    request: InviteUserRequest,
    caller: Annotated[AuthorizedCaller, Depends(get_admin_caller)],
    service: Annotated[UserProvisioningService, Depends(get_user_provisioning_service)],
    probe: Annotated[ProvisioningRouteProbe, Depends(get_route_probe)],
    observation: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ProvisionedUserResponse:
    """Invite one user by email.

    Raises:
        HTTPException: 400 if the request is invalid or the identity
            provider refuses the invitation
        HTTPException: 500 for unexpected errors
    """
    observation = observation.with_caller(caller.user_id)
    probe = probe.with_context(observation)
    try:
        user = await service.with_context(observation).invite_user(request.to_command())
    except (InvalidProvisioningRequestError, IdentityProviderError) as e:
        raise _bad_request(probe, "invite_user", str(e))
    except Exception as e:
        raise _server_error(probe, "invite_user", e)

    return ProvisionedUserResponse(user_id=user.user_id)
