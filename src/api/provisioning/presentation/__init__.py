"""Provisioning presentation layer.

Routes mirror the hosted backend's function URLs (`/functions/v1/<name>`)
so the admin console can call them without change.
"""
