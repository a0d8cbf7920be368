import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
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
                ("principal", models.CharField(max_length=150, unique=True)),
                ("balance", models.PositiveBigIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["principal"],
            },
        ),
        migrations.CreateModel(
            name="Ticket",
            fields=[
                (
                    "key",
                    models.CharField(
                        editable=False,
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("owner", models.CharField(max_length=150)),
                ("price", models.PositiveBigIntegerField()),
                ("resale_allowed", models.BooleanField()),
                ("max_markup_percent", models.PositiveSmallIntegerField()),
                ("original_price", models.PositiveBigIntegerField(editable=False)),
                ("is_listed", models.BooleanField(default=False)),
                ("asset_reference", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["owner"], name="ticket_owner_idx"),
                    models.Index(
                        fields=["is_listed", "-updated_at"], name="ticket_listed_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Sale",
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
                ("seller", models.CharField(max_length=150)),
                ("buyer", models.CharField(max_length=150)),
                ("price", models.PositiveBigIntegerField()),
                ("sequence", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "ticket",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sales",
                        to="marketplace.ticket",
                    ),
                ),
            ],
            options={
                "ordering": ["sequence"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("ticket", "sequence"), name="unique_sale_sequence"
                    )
                ],
            },
        ),
    ]
