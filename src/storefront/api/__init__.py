"""API module for the storefront admin.

Route modules declare Route objects (see contract.py) and mount them on
a FastAPI router; handlers stay framework-free.
"""
