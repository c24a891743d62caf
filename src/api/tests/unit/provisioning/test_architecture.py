"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the provisioning bounded context.
"""

from pytest_archon import archrule


class TestProvisioningDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not know about databases or HTTP clients."""
        (
            archrule("domain_no_infrastructure")
            .match("provisioning.domain*")
            .should_not_import("provisioning.infrastructure*", "infrastructure*")
            .check("provisioning")
        )

    def test_domain_does_not_import_application(self):
        """Domain objects should be usable without application services."""
        (
            archrule("domain_no_application")
            .match("provisioning.domain*")
            .should_not_import("provisioning.application*")
            .check("provisioning")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain layer should be framework-agnostic."""
        (
            archrule("domain_no_frameworks")
            .match("provisioning.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*", "httpx*")
            .check("provisioning")
        )


class TestProvisioningPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces, not implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("provisioning.ports*")
            .should_not_import("provisioning.infrastructure*")
            .check("provisioning")
        )

    def test_ports_does_not_import_application(self):
        """Ports are used by the application layer, not the reverse."""
        (
            archrule("ports_no_application")
            .match("provisioning.ports*")
            .should_not_import("provisioning.application*")
            .check("provisioning")
        )


class TestProvisioningApplicationLayerBoundaries:
    """Tests that the application layer depends only on ports and domain."""

    def test_application_does_not_import_infrastructure(self):
        """Application services reach adapters only through ports."""
        (
            archrule("application_no_infrastructure")
            .match("provisioning.application*")
            .should_not_import("provisioning.infrastructure*")
            .check("provisioning")
        )

    def test_application_does_not_import_fastapi(self):
        """Application services should not know about HTTP."""
        (
            archrule("application_no_fastapi")
            .match("provisioning.application*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check("provisioning")
        )

    def test_application_does_not_import_presentation(self):
        (
            archrule("application_no_presentation")
            .match("provisioning.application*")
            .should_not_import("provisioning.presentation*")
            .check("provisioning")
        )
