"""
GymOS Permissions Store - App Configuration
===========================================
Persistent permission catalog and role-to-permission grants.
"""

from django.apps import AppConfig


class GymosPermissionsStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "gymos.permissions_store"
    label = "gymos_permissions_store"
    verbose_name = "GymOS Permissions Store"
