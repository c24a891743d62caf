"""Application services for the provisioning bounded context.

Application services orchestrate the identity provider and the backend's
profile and team stores to fulfill use cases. They are the "front door" to
the provisioning context.
"""

from provisioning.application.services.bulk_import_service import BulkImportService
from provisioning.application.services.caller_authorization_service import (
    CallerAuthorizationService,
)
from provisioning.application.services.user_provisioning_service import (
    UserProvisioningService,
)

__all__ = [
    "BulkImportService",
    "CallerAuthorizationService",
    "UserProvisioningService",
]
