import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="RouteCache",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("route_hash", models.CharField(db_index=True, max_length=64, unique=True)),
                ("origin_text", models.CharField(max_length=255)),
                ("destination_text", models.CharField(max_length=255)),
                ("origin_place_id", models.CharField(blank=True, default="", max_length=255)),
                ("destination_place_id", models.CharField(blank=True, default="", max_length=255)),
                ("polyline", models.TextField()),
                ("polyline_points", models.JSONField()),
                ("distance_meters", models.IntegerField()),
                ("duration_seconds", models.IntegerField()),
                ("bounds", models.JSONField(default=dict)),
                ("hit_count", models.IntegerField(default=1)),
                ("view_count", models.IntegerField(default=0)),
                ("is_curated", models.BooleanField(default=False)),
                ("slug", models.SlugField(blank=True, max_length=255, null=True, unique=True)),
                ("title", models.CharField(blank=True, max_length=255, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("last_accessed_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["origin_text", "destination_text"], name="routing_rou_origin__5d1c0e_idx"),
                    models.Index(fields=["created_at"], name="routing_rou_created_9a7f3b_idx"),
                    models.Index(fields=["is_curated"], name="routing_rou_is_cura_2c4e81_idx"),
                    models.Index(fields=["-view_count"], name="routing_rou_view_co_b83d47_idx"),
                ],
            },
        ),
    ]
