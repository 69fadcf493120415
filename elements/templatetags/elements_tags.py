"""
Template tags for rendering elements.

    {% load elements_tags %}
    {% element_view_for element id="intro" class="article" as el %}
      {% render_ingredient el "title" %}
      {% if el|has_ingredient:"body" %}{% render_ingredient el "body" html_class="lead" %}{% endif %}
    {% endelement_view_for %}
"""
from django import template
from django.template.base import token_kwargs

from elements.helpers import element_view_for

register = template.Library()

RESERVED_OPTIONS = ("tag", "id", "class", "class_", "tags_formatter")


class ElementViewNode(template.Node):
    def __init__(self, element, options, as_name, nodelist):
        self.element = element
        self.options = options
        self.as_name = as_name
        self.nodelist = nodelist

    def render(self, context):
        element = self.element.resolve(context)
        options = {}
        for key, value in self.options.items():
            if key not in RESERVED_OPTIONS:
                key = key.replace("_", "-")
            options[key] = value.resolve(context)

        def block(helper):
            with context.push({self.as_name: helper}):
                return self.nodelist.render(context)

        return element_view_for(
            element,
            block,
            options,
            preview_mode=context.get("preview_mode", False),
            page=context.get("page"),
        )


@register.tag("element_view_for")
def do_element_view_for(parser, token):
    """
    Wrap the block in a DOM element for the given element.
    Usage: {% element_view_for element [tag="div"] [id=...] [class=...] [as el] %}...{% endelement_view_for %}
    """
    bits = token.split_contents()
    tag_name = bits.pop(0)

    as_name = "el"
    if len(bits) >= 2 and bits[-2] == "as":
        as_name = bits[-1]
        bits = bits[:-2]
    if not bits:
        raise template.TemplateSyntaxError(f"'{tag_name}' requires an element argument")

    element = parser.compile_filter(bits.pop(0))
    options = token_kwargs(bits, parser)
    if bits:
        raise template.TemplateSyntaxError(
            f"'{tag_name}' received unexpected arguments: {' '.join(bits)}"
        )

    nodelist = parser.parse((f"end{tag_name}",))
    parser.delete_first_token()
    return ElementViewNode(element, options, as_name, nodelist)


@register.simple_tag
def render_ingredient(helper, role, **kwargs):
    """
    Render an ingredient through the element view helper.
    Keywords prefixed with ``html_`` become html options.
    Usage: {% render_ingredient el "title" disable_link=True html_class="lead" %}
    """
    options = {}
    html_options = {}
    for key, value in kwargs.items():
        if key.startswith("html_"):
            html_options[key[len("html_"):]] = value
        else:
            options[key] = value
    rendered = helper.render(role, options, html_options)
    if rendered is None:
        return ""
    return rendered


@register.filter
def ingredient_value(helper, role):
    """
    Usage: {{ el|ingredient_value:"title" }}
    """
    return helper.value(role)


@register.filter
def has_ingredient(helper, role):
    """
    Usage: {% if el|has_ingredient:"title" %}
    """
    return helper.has(role)


@register.filter
def ingredient_by_role(helper, role):
    return helper.ingredient_by_role(role)
