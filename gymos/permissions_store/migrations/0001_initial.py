from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("gymos_identity_store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Permission",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=128, unique=True)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("module", models.CharField(max_length=64)),
                ("action", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "gymos_permissions",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["module"], name="idx_permission_module"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RolePermission",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "permission",
                    models.ForeignKey(
                        db_column="permission_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="role_permissions",
                        to="gymos_permissions_store.permission",
                    ),
                ),
                (
                    "role",
                    models.ForeignKey(
                        db_column="role_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="role_permissions",
                        to="gymos_identity_store.role",
                    ),
                ),
            ],
            options={
                "db_table": "gymos_role_permissions",
                "ordering": ["role_id", "permission_id", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("role", "permission"),
                        name="uq_role_permission",
                    ),
                ],
            },
        ),
    ]
