from django.db import models
from django.core.validators import MinValueValidator


class DishQuerySet(models.QuerySet):
    def with_details(self):
        return self.select_related('restaurant').prefetch_related(
            'ingredient_rows', 'dietary_tag_rows')


class Dish(models.Model):
    restaurant = models.ForeignKey(
        'restaurants.Restaurant', on_delete=models.CASCADE, related_name='dishes')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    image = models.TextField(
        blank=True, help_text="Image URL or data URL returned by the upload endpoint")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    cuisine = models.CharField(max_length=100, blank=True)
    allergens = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DishQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name_plural = 'Dishes'

    def __str__(self):
        return f"{self.name} - ${self.price}"

    @property
    def ingredients(self):
        return [row.name for row in self.ingredient_rows.all()]

    @property
    def dietary_tags(self):
        return [row.tag for row in self.dietary_tag_rows.all()]


class DishIngredient(models.Model):
    dish = models.ForeignKey(
        Dish, on_delete=models.CASCADE, related_name='ingredient_rows')
    name = models.CharField(max_length=255)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return self.name


class DishDietaryTag(models.Model):
    dish = models.ForeignKey(
        Dish, on_delete=models.CASCADE, related_name='dietary_tag_rows')
    tag = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return self.tag
