"""Membership bounded context.

Persistence of users, tenants, join requests and tenant memberships, plus
the invitation workflow built on them. ``membership.store`` is the entry
point.
"""
