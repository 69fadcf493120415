"""
View components for element ingredients.

Each component renders a single ingredient to HTML. Components are created
through ``Ingredient.as_view_component()`` and behave like safe strings in
templates (they implement ``__html__``).
"""
from django.forms.utils import flatatt
from django.utils.html import conditional_escape, format_html, strip_tags
from django.utils.safestring import mark_safe


class IngredientView:
    """Base view component holding an ingredient and its render options."""

    def __init__(self, ingredient, options=None, html_options=None):
        self.ingredient = ingredient
        self.options = dict(options or {})
        self.html_options = dict(html_options or {})

    @property
    def value(self):
        return self.ingredient.value

    def should_render(self) -> bool:
        value = self.value
        if value is None:
            return False
        return not (isinstance(value, str) and not value.strip())

    def render(self):
        if not self.should_render():
            return mark_safe("")
        return self.call()

    def call(self):
        return conditional_escape(self.value)

    def __html__(self):
        return self.render()

    def __str__(self):
        return str(self.render())

    def __repr__(self):
        return f"<{self.__class__.__name__} role={self.ingredient.role!r}>"


class TextView(IngredientView):
    """Plain text, linked when the ingredient carries a ``link``."""

    def call(self):
        link = self.ingredient.data.get("link")
        if not link or self.options.get("disable_link"):
            return conditional_escape(self.value)

        attrs = {"href": link}
        if self.ingredient.data.get("link_title"):
            attrs["title"] = self.ingredient.data["link_title"]
        if self.ingredient.data.get("link_target") == "blank":
            attrs["target"] = "_blank"
            attrs["rel"] = "noopener noreferrer"
        attrs.update(self.html_options)
        return format_html("<a{}>{}</a>", flatatt(attrs), self.value)


class RichtextView(IngredientView):
    """Trusted markup; ``plain_text=True`` strips the tags."""

    def call(self):
        if self.options.get("plain_text"):
            return conditional_escape(strip_tags(self.value))
        return mark_safe(self.value)


class HeadlineView(IngredientView):
    def call(self):
        try:
            level = int(self.ingredient.data.get("level", 1))
        except (TypeError, ValueError):
            level = 1
        level = min(max(level, 1), 6)
        return format_html(
            "<h{level}{attrs}>{value}</h{level}>",
            level=level,
            attrs=flatatt(self.html_options),
            value=self.value,
        )


class HtmlView(IngredientView):
    def call(self):
        return mark_safe(self.value)


VIEW_COMPONENTS = {
    "Text": TextView,
    "Richtext": RichtextView,
    "Headline": HeadlineView,
    "Html": HtmlView,
}
