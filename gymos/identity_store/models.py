"""
GymOS Identity Store - Relational Identity State
================================================
DB-backed tenants, branches, users, role templates and role assignments.

Roles are tenant-agnostic templates; the tenant (and optional branch)
boundary lives on the assignment.
"""

from __future__ import annotations

from django.db import models


class RoleAssignmentStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"


class Tenant(models.Model):
    tenant_id = models.UUIDField(primary_key=True, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gymos_identity_tenants"
        ordering = ["tenant_id"]

    def __str__(self) -> str:
        return f"{self.tenant_id} ({self.name})"


class Branch(models.Model):
    branch_id = models.UUIDField(primary_key=True, editable=False)
    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.PROTECT,
        related_name="branches",
        db_column="tenant_id",
    )
    name = models.CharField(max_length=255)
    timezone = models.CharField(max_length=64, default="UTC")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gymos_identity_branches"
        ordering = ["tenant_id", "branch_id"]
        indexes = [
            models.Index(fields=["tenant", "branch_id"], name="idx_branch_tenant_branch"),
        ]

    def __str__(self) -> str:
        return f"{self.branch_id} ({self.name})"


class User(models.Model):
    user_id = models.CharField(primary_key=True, max_length=255)
    display_name = models.CharField(max_length=255, default="", blank=True)
    email = models.CharField(max_length=255, default="", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gymos_identity_users"
        ordering = ["user_id"]

    def __str__(self) -> str:
        return self.user_id


class Role(models.Model):
    role_id = models.UUIDField(primary_key=True, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=255, default="", blank=True)
    is_system = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gymos_identity_roles"
        ordering = ["name", "role_id"]

    def __str__(self) -> str:
        return self.name


class RoleAssignment(models.Model):
    id = models.UUIDField(primary_key=True, editable=False)
    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.PROTECT,
        related_name="role_assignments",
        db_column="tenant_id",
    )
    branch = models.ForeignKey(
        Branch,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="role_assignments",
        db_column="branch_id",
    )
    user = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="role_assignments",
        db_column="user_id",
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.PROTECT,
        related_name="assignments",
        db_column="role_id",
    )
    status = models.CharField(
        max_length=20,
        choices=RoleAssignmentStatus.choices,
        default=RoleAssignmentStatus.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gymos_identity_role_assignments"
        ordering = ["tenant_id", "user_id", "branch_id", "role_id", "id"]
        indexes = [
            models.Index(
                fields=["tenant", "user", "status"],
                name="idx_role_asg_tenant_user",
            ),
            models.Index(
                fields=["tenant", "branch", "status"],
                name="idx_role_asg_tenant_branch",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "branch", "user", "role"],
                name="uq_identity_role_assignment",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id}:{self.role_id}:{self.status}"
