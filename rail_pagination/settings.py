"""
PaginationSettings implementation.

Settings are caller configuration: the resolver engine never reads a global
default page size, it receives one through ``PaginationSettings`` or an
explicit ``per_page`` option.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

SETTINGS_KEY = "RAIL_PAGINATION"

LIBRARY_DEFAULTS: dict[str, Any] = {
    "default_per_page": 20,
    "max_per_page": 100,
    "over_fetch": True,
    "type_name_suffix": "Pagination",
}


def _merge_settings_dicts(*dicts: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple settings dictionaries with later ones taking precedence."""
    result = {}
    for d in dicts:
        if d:
            result.update(d)
    return result


def _get_django_settings() -> dict[str, Any]:
    """Get the pagination section from Django settings."""
    if not django_settings.configured:
        return {}
    section = getattr(django_settings, SETTINGS_KEY, {}) or {}
    if not isinstance(section, dict):
        raise ImproperlyConfigured(f"{SETTINGS_KEY} must be a dict")
    return section


@dataclass(frozen=True)
class PaginationSettings:
    """Settings for controlling pagination resolvers."""

    default_per_page: int = 20
    max_per_page: Optional[int] = 100
    over_fetch: bool = True
    type_name_suffix: str = "Pagination"

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_django(cls, **overrides: Any) -> "PaginationSettings":
        """Build settings from library defaults, Django settings and overrides."""
        merged = _merge_settings_dicts(
            LIBRARY_DEFAULTS, _get_django_settings(), overrides
        )
        valid_fields = set(cls.__dataclass_fields__.keys())
        unknown = sorted(k for k in merged if k not in valid_fields)
        if unknown:
            logger.warning(
                "Ignoring unknown %s keys: %s", SETTINGS_KEY, ", ".join(unknown)
            )
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})

    def validate(self) -> None:
        errors: List[str] = []
        if not isinstance(self.default_per_page, int) or self.default_per_page <= 0:
            errors.append("default_per_page must be greater than 0")
        if self.max_per_page is not None:
            if not isinstance(self.max_per_page, int) or self.max_per_page <= 0:
                errors.append("max_per_page must be greater than 0")
            elif (
                isinstance(self.default_per_page, int)
                and self.default_per_page > self.max_per_page
            ):
                errors.append("default_per_page cannot be greater than max_per_page")
        if not self.type_name_suffix:
            errors.append("type_name_suffix must not be empty")
        if errors:
            raise ImproperlyConfigured(
                f"Invalid {SETTINGS_KEY} configuration: " + "; ".join(errors)
            )

    def clamp_per_page(self, per_page: int) -> int:
        """Cap ``per_page`` at ``max_per_page`` when a maximum is configured."""
        if self.max_per_page is not None and per_page > self.max_per_page:
            logger.warning(
                "per_page %s exceeds max_per_page, capped at %s.",
                per_page,
                self.max_per_page,
            )
            return self.max_per_page
        return per_page

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}
