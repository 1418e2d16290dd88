"""Shared validators package for the application.

This package contains reusable validation functions that can be used
across different features and schemas.

Available validators:
- email.py: Email address format check (value kept as given)
- password.py: Password policy for new credentials
"""
