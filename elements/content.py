"""
In-memory content elements and ingredients.

The element helpers only rely on a small set of capabilities (``name``,
``dom_id``, ``tag_names`` and the ingredient lookups). These dataclasses
implement that set for use outside of a full CMS data model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.core.exceptions import ImproperlyConfigured

from .components import VIEW_COMPONENTS


def is_present(value: Any) -> bool:
    """
    None, False, blank strings and empty collections are blank.
    Everything else, including 0, is present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return bool(value)
    return True


@dataclass
class Ingredient:
    role: str
    type: str = "Text"
    value: Any = None
    data: Dict[str, Any] = field(default_factory=dict)

    def as_view_component(self, options=None, html_options=None):
        try:
            component_class = VIEW_COMPONENTS[self.type]
        except KeyError:
            raise ImproperlyConfigured(
                f"No view component registered for ingredient type '{self.type}'"
            )
        return component_class(self, options=options, html_options=html_options)


@dataclass
class ContentElement:
    name: str
    id: int
    ingredients: List[Ingredient] = field(default_factory=list)
    tag_names: List[str] = field(default_factory=list)
    parent_element: Optional["ContentElement"] = None
    page: Any = None

    @property
    def dom_id(self) -> str:
        own_id = f"{self.name}-{self.id}"
        if self.parent_element is not None:
            return f"{self.parent_element.dom_id}-{own_id}"
        return own_id

    def ingredient_by_role(self, role) -> Optional[Ingredient]:
        role = str(role)
        for ingredient in self.ingredients:
            if ingredient.role == role:
                return ingredient
        return None

    def value_for(self, role):
        ingredient = self.ingredient_by_role(role)
        if ingredient is None:
            return None
        return ingredient.value

    def has_value_for(self, role) -> bool:
        return is_present(self.value_for(role))
