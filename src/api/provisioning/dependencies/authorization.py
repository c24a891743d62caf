"""Caller authorization dependency for provisioning routes.

Runs before any route body, so a request from an unauthenticated or
non-admin caller never reaches the identity provider's admin API.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from ulid import ULID

from provisioning.application.exceptions import (
    CallerForbiddenError,
    CallerUnauthenticatedError,
)
from provisioning.application.services import CallerAuthorizationService
from provisioning.application.value_objects import AuthorizedCaller
from provisioning.dependencies.services import get_caller_authorization_service
from provisioning.presentation.observability import (
    DefaultProvisioningRouteProbe,
    ProvisioningRouteProbe,
)
from shared_kernel.observability_context import ObservationContext

# auto_error=False so a missing header is answered with our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_route_probe() -> ProvisioningRouteProbe:
    """Get ProvisioningRouteProbe instance.

    Returns:
        DefaultProvisioningRouteProbe instance for observability
    """
    return DefaultProvisioningRouteProbe()


def get_observation_context(request: Request) -> ObservationContext:
    """Build the request's observation context.

    Reuses the caller's X-Request-ID when present so log lines correlate
    with the client's own request logs.
    """
    request_id = request.headers.get("x-request-id") or str(ULID())
    return ObservationContext(request_id=request_id)


async def get_admin_caller(
    service: Annotated[
        CallerAuthorizationService, Depends(get_caller_authorization_service)
    ],
    probe: Annotated[ProvisioningRouteProbe, Depends(get_route_probe)],
    observation: Annotated[ObservationContext, Depends(get_observation_context)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> AuthorizedCaller:
    """Require an owner or admin caller.

    Raises:
        HTTPException: 401 if the caller is not authenticated
        HTTPException: 403 if the caller lacks an administrative role
        HTTPException: 500 if the caller could not be checked
    """
    token = credentials.credentials if credentials else None
    try:
        return await service.authorize_admin(token)
    except CallerUnauthenticatedError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    except CallerForbiddenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    except Exception as e:
        probe.with_context(observation).request_failed(
            operation="authorize_caller", error=e
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
