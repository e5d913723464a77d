"""
GymOS Permissions Store - Relational Permission Catalog
=======================================================
Permission rows are catalog entries (wildcards included, unexpanded).
RolePermission maps identity roles to catalog permissions.
"""

from __future__ import annotations

from django.db import models


class Permission(models.Model):
    name = models.CharField(max_length=128, unique=True)
    description = models.CharField(max_length=255, default="", blank=True)
    module = models.CharField(max_length=64)
    action = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "gymos_permissions"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["module"], name="idx_permission_module"),
        ]

    def __str__(self) -> str:
        return self.name


class RolePermission(models.Model):
    role = models.ForeignKey(
        "gymos_identity_store.Role",
        on_delete=models.PROTECT,
        related_name="role_permissions",
        db_column="role_id",
    )
    permission = models.ForeignKey(
        Permission,
        on_delete=models.PROTECT,
        related_name="role_permissions",
        db_column="permission_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "gymos_role_permissions"
        ordering = ["role_id", "permission_id", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["role", "permission"],
                name="uq_role_permission",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.role_id}:{self.permission_id}"
