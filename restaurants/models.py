from django.db import models
from django.conf import settings


class RestaurantQuerySet(models.QuerySet):
    def with_details(self):
        return self.select_related('owner').prefetch_related('cuisine_rows').annotate(
            dish_count=models.Count('dishes', distinct=True))


class Restaurant(models.Model):
    PRICE_RANGE_CHOICES = [
        ('$', 'Budget'),
        ('$$', 'Moderate'),
        ('$$$', 'Expensive'),
        ('$$$$', 'Fine Dining'),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='restaurants'
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    address = models.TextField()
    lat = models.FloatField()
    lng = models.FloatField()
    phone = models.CharField(max_length=20, blank=True)
    website = models.URLField(blank=True)
    email = models.EmailField(blank=True)
    price_range = models.CharField(
        max_length=4, choices=PRICE_RANGE_CHOICES, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RestaurantQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def cuisines(self):
        return [row.cuisine for row in self.cuisine_rows.all()]


class RestaurantCuisine(models.Model):
    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name='cuisine_rows')
    cuisine = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.cuisine} - {self.restaurant.name}"
