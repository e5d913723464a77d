from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tenant",
            fields=[
                ("tenant_id", models.UUIDField(editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "gymos_identity_tenants",
                "ordering": ["tenant_id"],
            },
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                ("user_id", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("display_name", models.CharField(blank=True, default="", max_length=255)),
                ("email", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "gymos_identity_users",
                "ordering": ["user_id"],
            },
        ),
        migrations.CreateModel(
            name="Role",
            fields=[
                ("role_id", models.UUIDField(editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("is_system", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "gymos_identity_roles",
                "ordering": ["name", "role_id"],
            },
        ),
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("branch_id", models.UUIDField(editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("timezone", models.CharField(default="UTC", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        db_column="tenant_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="branches",
                        to="gymos_identity_store.tenant",
                    ),
                ),
            ],
            options={
                "db_table": "gymos_identity_branches",
                "ordering": ["tenant_id", "branch_id"],
                "indexes": [
                    models.Index(fields=["tenant", "branch_id"], name="idx_branch_tenant_branch"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RoleAssignment",
            fields=[
                ("id", models.UUIDField(editable=False, primary_key=True, serialize=False)),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")],
                        default="ACTIVE",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        db_column="branch_id",
                        null=True,
                        on_delete=models.deletion.PROTECT,
                        related_name="role_assignments",
                        to="gymos_identity_store.branch",
                    ),
                ),
                (
                    "role",
                    models.ForeignKey(
                        db_column="role_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="assignments",
                        to="gymos_identity_store.role",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        db_column="tenant_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="role_assignments",
                        to="gymos_identity_store.tenant",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="user_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="role_assignments",
                        to="gymos_identity_store.user",
                    ),
                ),
            ],
            options={
                "db_table": "gymos_identity_role_assignments",
                "ordering": ["tenant_id", "user_id", "branch_id", "role_id", "id"],
                "indexes": [
                    models.Index(
                        fields=["tenant", "user", "status"],
                        name="idx_role_asg_tenant_user",
                    ),
                    models.Index(
                        fields=["tenant", "branch", "status"],
                        name="idx_role_asg_tenant_branch",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("tenant", "branch", "user", "role"),
                        name="uq_identity_role_assignment",
                    ),
                ],
            },
        ),
    ]
