"""Workspace document logic.

Functions here raise domain exceptions (``PathError``, ``ParseError``,
``WorkspaceIOError``), never click exceptions -- that translation is the
CLI's responsibility.
"""
