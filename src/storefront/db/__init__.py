"""Database access.

The admin API only talks to the database through raw probe queries; the
catalog schema is owned elsewhere.
"""
