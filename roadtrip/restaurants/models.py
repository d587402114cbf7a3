from django.db import models


class Restaurant(models.Model):
    STATUS_CHOICES = [
        ("open", "Open"),
        ("closed", "Closed"),
        ("unknown", "Unknown"),
    ]
    PRICE_TIER_CHOICES = [
        ("$", "$"),
        ("$$", "$$"),
        ("$$$", "$$$"),
        ("$$$$", "$$$$"),
    ]

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    city = models.CharField(max_length=100, db_index=True)
    state = models.CharField(max_length=100, db_index=True)
    country = models.CharField(max_length=2, default="US")

    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="unknown", db_index=True)
    price_tier = models.CharField(max_length=4, choices=PRICE_TIER_CHOICES, blank=True, default="")
    cuisine_tags = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True, default="")
    photo_url = models.URLField(max_length=500, blank=True, default="")
    photos = models.JSONField(default=list, blank=True)
    google_rating = models.DecimalField(max_digits=2, decimal_places=1, null=True, blank=True)
    google_review_count = models.PositiveIntegerField(null=True, blank=True)
    is_public = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["state", "city"], name="restaurants_state_c7e5a1_idx"),
            models.Index(fields=["latitude", "longitude"], name="restaurants_latitud_3f2b9d_idx"),
        ]

    def __str__(self):
        return f"{self.name} - {self.city}, {self.state}"

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
