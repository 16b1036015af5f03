"""Authentication collaborators.

The admin API does not authenticate anyone itself; it only forwards
sign-out to whichever provider is configured.
"""
