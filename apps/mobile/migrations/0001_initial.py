import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="MobileApp",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("pkg_name", models.CharField(max_length=255)),
                ("app_secret", models.CharField(max_length=2048)),
                (
                    "qr_code_config",
                    models.JSONField(blank=True, help_text="Platform-tagged QR-code configuration.", null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mobile_apps",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Mobile App",
                "verbose_name_plural": "Mobile Apps",
                "ordering": ["created_at", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("tenant", "pkg_name"),
                        name="unique_mobile_app_pkg_name_per_tenant",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="MobileAppBundle",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "android_app",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="android_bundles",
                        to="mobile.mobileapp",
                    ),
                ),
                (
                    "ios_app",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="ios_bundles",
                        to="mobile.mobileapp",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mobile_app_bundles",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Mobile App Bundle",
                "verbose_name_plural": "Mobile App Bundles",
                "ordering": ["created_at", "id"],
            },
        ),
    ]
