"""Attendance Session Engine package.

This package is organized by feature modules (shifts, session, oracle, countdown, ...)
with a thin Flask layer exposing the session operations to the mobile UI shell.
"""
