"""Tuition Center reporting package.

This package is organized by feature modules (staff, teaching_hours, reports, ...)
with a thin Flask controller layer and service/repository layers behind it.
"""
