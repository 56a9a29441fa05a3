"""Product limits and defaults."""

from __future__ import annotations

NAME_MAX_LENGTH = 200
SKU_MAX_LENGTH = 50
CATEGORY_MAX_LENGTH = 100
BRAND_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000

MIN_RATING = 0
MAX_RATING = 5

MIN_PAGE = 1
MIN_PAGE_SIZE = 1

DELETED_BY_SYSTEM = "system"
