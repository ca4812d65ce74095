"""Taskboard — personal task management API.

Users register, sign in with a cookie-borne session, and manage their
own to-do items. Every task read or write is checked against its owner.
"""

__version__ = "0.1.0"
