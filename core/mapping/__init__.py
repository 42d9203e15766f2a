"""Field specs and value transforms."""

from core.mapping import fields, transforms

__all__ = ["fields", "transforms"]
