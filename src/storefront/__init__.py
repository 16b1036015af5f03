"""Storefront admin API.

Route handlers for the admin backend (authentication, diagnostics,
messaging inbox) and the server-side image guard used by rendered pages.
"""

__version__ = "1.0.0"
