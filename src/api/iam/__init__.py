"""IAM (Identity and Access Management) bounded context.

Tenant access decisions, session dependencies, the user directory and
staff presence.
"""
