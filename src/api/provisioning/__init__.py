"""Provisioning bounded context.

Privileged user provisioning for the LMS: bulk import from CSV or JSON rows,
single-user creation and invitation, profile reconciliation and team
membership assignment against the hosted identity provider and database.
"""
