"""Presence System package.

Feature modules (access_codes, attendance, schedules, ...) each carry a model,
a repository protocol with its MySQL implementation, a service and a thin Flask
controller layer.
"""
