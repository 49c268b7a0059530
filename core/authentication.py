"""
Bearer-token authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication`` so
that the project's configuration has a stable import path.  Keeping it
separate from any view definitions avoids circular imports when REST
framework loads authentication classes during initialisation.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication


class BearerTokenAuthentication(JWTAuthentication):
    """Authenticate ``Authorization: Bearer <jwt>`` headers.

    Inactive accounts are rejected by the parent class; tokens for users
    that have since been deleted fail with 401 as well.
    """

    www_authenticate_realm = 'wellness'
