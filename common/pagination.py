"""
common.pagination
~~~~~~~~~~~~~~~~~
Page-link style pagination shared by tenant-scoped list endpoints.

A :class:`PageLink` describes *which* page a caller wants (zero-based page
index, page size, optional text search and sort); :func:`paginate` applies it
to a queryset and returns a :class:`PageData`.  Ordering, offset and limit are
all pushed down to the database.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.db.models import QuerySet
from rest_framework import serializers

from common.exceptions import ValidationError

SORT_ASC = "ASC"
SORT_DESC = "DESC"


@dataclass(frozen=True)
class PageLink:
    page_size: int
    page: int = 0
    text_search: str | None = None
    sort_property: str | None = None
    sort_order: str = SORT_ASC

    def __post_init__(self) -> None:
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValidationError(f"pageSize must be at least 1, got {self.page_size!r}.")
        if not isinstance(self.page, int) or self.page < 0:
            raise ValidationError(f"page must not be negative, got {self.page!r}.")
        if self.sort_order not in (SORT_ASC, SORT_DESC):
            raise ValidationError(f"sortOrder must be {SORT_ASC} or {SORT_DESC}.")


@dataclass
class PageData:
    data: list[Any] = field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    has_next: bool = False


def paginate(
    queryset: QuerySet,
    page_link: PageLink,
    *,
    sort_fields: dict[str, str],
    search_field: str | None = None,
    default_ordering: tuple[str, ...] = ("created_at", "id"),
) -> PageData:
    """
    Slice *queryset* according to *page_link*.

    Args:
        queryset: Already tenant-scoped queryset.
        page_link: Requested page.
        sort_fields: Allowed ``sortProperty`` values mapped to model fields.
        search_field: Model field matched case-insensitively by
            ``page_link.text_search``.
        default_ordering: Ordering used when no sort property is given; also
            appended as a tie-breaker so pages are stable.

    Raises:
        common.exceptions.ValidationError: For an unknown sort property.
    """
    if page_link.text_search and search_field:
        queryset = queryset.filter(**{f"{search_field}__icontains": page_link.text_search})

    ordering = list(default_ordering)
    if page_link.sort_property:
        model_field = sort_fields.get(page_link.sort_property)
        if model_field is None:
            raise ValidationError(
                f"Unsupported sortProperty '{page_link.sort_property}'. "
                f"Allowed: {sorted(sort_fields)}."
            )
        prefix = "-" if page_link.sort_order == SORT_DESC else ""
        ordering = [f"{prefix}{model_field}"] + [f for f in ordering if f != model_field]
    queryset = queryset.order_by(*ordering)

    # No empty first page, so an empty result reports zero pages.
    paginator = Paginator(queryset, page_link.page_size, allow_empty_first_page=False)
    try:
        page = paginator.page(page_link.page + 1)
    except EmptyPage:
        return PageData(
            data=[],
            total_pages=paginator.num_pages,
            total_elements=paginator.count,
            has_next=False,
        )
    return PageData(
        data=list(page.object_list),
        total_pages=paginator.num_pages,
        total_elements=paginator.count,
        has_next=page.has_next(),
    )


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------

class PageLinkSerializer(serializers.Serializer):
    """Validates ``?pageSize=&page=&textSearch=&sortProperty=&sortOrder=``."""

    pageSize = serializers.IntegerField(
        source="page_size",
        min_value=1,
        max_value=settings.MOBILE_APP_MAX_PAGE_SIZE,
        default=settings.MOBILE_APP_DEFAULT_PAGE_SIZE,
    )
    page = serializers.IntegerField(min_value=0, default=0)
    textSearch = serializers.CharField(source="text_search", required=False, allow_blank=True)
    sortProperty = serializers.CharField(source="sort_property", required=False)
    sortOrder = serializers.ChoiceField(
        source="sort_order",
        choices=[SORT_ASC, SORT_DESC],
        default=SORT_ASC,
    )

    def to_page_link(self) -> PageLink:
        return PageLink(**self.validated_data)


def page_data_response(page_data: PageData, item_serializer_class) -> dict:
    """Render *page_data* with *item_serializer_class* for each row."""
    return {
        "data": item_serializer_class(page_data.data, many=True).data,
        "totalPages": page_data.total_pages,
        "totalElements": page_data.total_elements,
        "hasNext": page_data.has_next,
    }
