"""Domain-Oriented Observability for the provisioning application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from provisioning.application.observability.bulk_import_probe import (
    BulkImportProbe,
    DefaultBulkImportProbe,
)
from provisioning.application.observability.caller_authorization_probe import (
    CallerAuthorizationProbe,
    DefaultCallerAuthorizationProbe,
)
from provisioning.application.observability.profile_link_probe import (
    DefaultProfileLinkProbe,
    ProfileLinkProbe,
)
from provisioning.application.observability.user_provisioning_probe import (
    DefaultUserProvisioningProbe,
    UserProvisioningProbe,
)

__all__ = [
    "BulkImportProbe",
    "DefaultBulkImportProbe",
    "CallerAuthorizationProbe",
    "DefaultCallerAuthorizationProbe",
    "ProfileLinkProbe",
    "DefaultProfileLinkProbe",
    "UserProvisioningProbe",
    "DefaultUserProvisioningProbe",
]
