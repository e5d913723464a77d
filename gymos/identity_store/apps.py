"""
GymOS Identity Store - App Configuration
========================================
Persistent identity primitives: tenant, branch, user, role, assignment.
"""

from django.apps import AppConfig


class GymosIdentityStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "gymos.identity_store"
    label = "gymos_identity_store"
    verbose_name = "GymOS Identity Store"
