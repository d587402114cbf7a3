from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Restaurant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("city", models.CharField(db_index=True, max_length=100)),
                ("state", models.CharField(db_index=True, max_length=100)),
                ("country", models.CharField(default="US", max_length=2)),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("open", "Open"), ("closed", "Closed"), ("unknown", "Unknown")],
                        db_index=True,
                        default="unknown",
                        max_length=10,
                    ),
                ),
                (
                    "price_tier",
                    models.CharField(
                        blank=True,
                        choices=[("$", "$"), ("$$", "$$"), ("$$$", "$$$"), ("$$$$", "$$$$")],
                        default="",
                        max_length=4,
                    ),
                ),
                ("cuisine_tags", models.JSONField(blank=True, default=list)),
                ("description", models.TextField(blank=True, default="")),
                ("photo_url", models.URLField(blank=True, default="", max_length=500)),
                ("photos", models.JSONField(blank=True, default=list)),
                ("google_rating", models.DecimalField(blank=True, decimal_places=1, max_digits=2, null=True)),
                ("is_public", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["state", "city"], name="restaurants_state_c7e5a1_idx"),
                    models.Index(fields=["latitude", "longitude"], name="restaurants_latitud_3f2b9d_idx"),
                ],
            },
        ),
    ]
