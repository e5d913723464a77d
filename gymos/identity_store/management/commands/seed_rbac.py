"""
Seed the GymOS permission catalog and default roles.

Usage:
    python manage.py seed_rbac
    python manage.py seed_rbac --tenant-id <uuid> --tenant-name "Downtown Gym" \
        --branch "Main" --branch "Annex" --admin-user owner-1
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from gymos.identity_store.service import (
    assign_role,
    bootstrap_tenant,
    seed_roles_and_permissions,
)
from gymos.permissions.constants import ROLE_ADMIN


class Command(BaseCommand):
    help = "Upsert the permission catalog and default roles, optionally bootstrapping a tenant."

    def add_arguments(self, parser):
        parser.add_argument("--tenant-id", default=None)
        parser.add_argument("--tenant-name", default=None)
        parser.add_argument(
            "--branch",
            action="append",
            default=None,
            dest="branches",
            help="Branch name; repeat for several branches.",
        )
        parser.add_argument(
            "--admin-user",
            default=None,
            help="User id to receive a tenant-wide admin assignment.",
        )

    def handle(self, *args, **options):
        summary = seed_roles_and_permissions()
        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(summary['permissions'])} permissions and "
                f"{len(summary['roles'])} roles."
            )
        )

        tenant_id = options.get("tenant_id")
        if tenant_id is None:
            if options.get("admin_user") or options.get("branches"):
                raise CommandError("--tenant-id is required with --branch/--admin-user.")
            return

        branches = None
        if options.get("branches"):
            branches = [{"name": name} for name in options["branches"]]

        try:
            tenant = bootstrap_tenant(
                tenant_id=tenant_id,
                name=options.get("tenant_name") or str(tenant_id),
                branches=branches,
            )
            self.stdout.write(
                f"Tenant {tenant['tenant']['tenant_id']} with "
                f"{len(tenant['branches'])} branches."
            )

            admin_user = options.get("admin_user")
            if admin_user:
                assignment = assign_role(
                    tenant_id=tenant_id,
                    user_id=admin_user,
                    role_name=ROLE_ADMIN,
                )
                self.stdout.write(
                    f"Assigned '{assignment['role_name']}' to '{assignment['user_id']}'."
                )
        except ValueError as exc:
            raise CommandError(str(exc)) from exc
