"""Pharmacy operations dashboard package.

Organized by feature modules (licenses, staff, leave, attendance, admins,
reports) over pluggable backend collaborators (record store, blob store,
identity provider), with a thin Flask controller layer on top.
"""
