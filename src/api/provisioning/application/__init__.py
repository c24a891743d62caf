"""Application layer for the provisioning bounded context."""
