"""Application exceptions for the provisioning bounded context.

Raised by application services and translated to HTTP responses by the
presentation layer.
"""


class CallerUnauthenticatedError(Exception):
    """Raised when the caller's bearer token does not resolve to an identity.

    The presentation layer returns HTTP 401 without further detail.
    """

    pass


class CallerForbiddenError(Exception):
    """Raised when an authenticated caller is neither an owner nor an admin.

    The presentation layer returns HTTP 403 without further detail.
    """

    pass


class EmptyBatchError(Exception):
    """Raised when a bulk import request carries no rows."""

    pass


class InvalidProvisioningRequestError(Exception):
    """Raised when a single-user request fails validation.

    The message is returned to the caller as-is.
    """

    pass


class ProfileLinkError(Exception):
    """Raised when an identity was provisioned but no profile could be written.

    Attributes:
        user_id: The identity left without a profile
    """

    def __init__(self, user_id: str, reason: str):
        super().__init__(reason)
        self.user_id = user_id
        self.reason = reason


class TeamAssignmentError(Exception):
    """Raised when a created user could not be added to the requested team.

    The user and profile already exist when this is raised.

    Attributes:
        user_id: The created user's identity id
    """

    def __init__(self, user_id: str, reason: str):
        super().__init__(reason)
        self.user_id = user_id
        self.reason = reason
