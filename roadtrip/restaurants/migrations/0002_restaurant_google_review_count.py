from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("restaurants", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="restaurant",
            name="google_review_count",
            field=models.PositiveIntegerField(blank=True, null=True),
        ),
    ]
