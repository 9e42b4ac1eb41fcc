"""
apps.tenants.models
~~~~~~~~~~~~~~~~~~~
Tenant – the isolation boundary that owns mobile apps and bundles.
"""
import uuid

from django.db import models
from django.utils.text import slugify


class Tenant(models.Model):
    """
    A tenant of the platform.  Every mobile app and bundle belongs to exactly
    one tenant; deleting the tenant cascades to them.

    Fields
    ------
    id
        Opaque, globally-unique UUID assigned on creation.
    name
        Human-readable unique name (e.g. ``"Acme Corp"``).
    slug
        URL-safe version of ``name``, auto-generated on first save.
    created_at / updated_at
        Automatic timestamps.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(
        max_length=255,
        unique=True,
        blank=True,
        help_text="URL-safe identifier auto-generated from the tenant name.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        verbose_name = "Tenant"
        verbose_name_plural = "Tenants"

    def save(self, *args, **kwargs) -> None:
        """Auto-populate ``slug`` on first save."""
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
