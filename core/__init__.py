"""Core application for the wellness admin backend.

This package contains models, the data-access layer, serializers, views
and route registrations implementing the API used by the admin dashboard.
"""
