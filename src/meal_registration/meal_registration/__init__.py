"""Meal Registration package.

This package is organized by feature modules (meals, users, groups, admins, reports, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
