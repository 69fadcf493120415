"""
Block-level helpers for element views.

``element_view_for`` renders an element by calling a block with an
``ElementViewHelper`` bound to that element and wrapping whatever the block
returns in a DOM container:

    def article(el):
        return [el.render("title"), el.render("body")]

    element_view_for(element, article, id="intro", **{"class": "article"})

The tag, id and class of the wrapper can be overridden. Pass ``tag=False``
to get the block's output without any wrapper.
"""
import logging
from types import GeneratorType

from django.conf import settings
from django.forms.utils import flatatt
from django.utils.html import conditional_escape, format_html
from django.utils.safestring import mark_safe

from .deprecation import get_deprecation

logger = logging.getLogger(__name__)

IMPLICIT_ID_WARNING = (
    "Relying on an implicit DOM id in `element_view_for` is deprecated. "
    "Please provide an explicit `id` if you actually want to render an `id` "
    "attribute on the {name} element wrapper tag."
)
IMPLICIT_CLASS_WARNING = (
    "Relying on an implicit CSS class in `element_view_for` is deprecated. "
    "Please provide an explicit `class` for the {name} element wrapper tag."
)


def join_tags(tags):
    return " ".join(tags)


class BlockHelper:
    """Base class for block-level helpers."""

    def __init__(self, element):
        self._element = element

    @property
    def element(self):
        return self._element


class ElementViewHelper(BlockHelper):
    """Block-level helper for element views."""

    def render(self, role, options=None, html_options=None):
        """
        Render one of the element's ingredients.
        Returns None when the element has no ingredient for ``role``.
        """
        ingredient = self.element.ingredient_by_role(role)
        if ingredient is None:
            return None
        component = ingredient.as_view_component(
            options=options or {},
            html_options=html_options or {},
        )
        return component.render()

    def value(self, role):
        return self.element.value_for(role)

    def has(self, role):
        return self.element.has_value_for(role)

    def ingredient_by_role(self, role):
        return self.element.ingredient_by_role(role)


def element_preview_code_attributes(element, preview_mode=False, page=None):
    """Attributes that let the preview frame locate an element."""
    if element is None or not preview_mode:
        return {}
    if page is not None and getattr(element, "page", None) != page:
        return {}
    return {"data-element": element.id}


def element_tags_attributes(element, formatter=None):
    """
    Data attribute carrying the element's tags.

    ``formatter`` turns the list of tag names into the attribute value;
    tags are space separated by default.
    """
    formatter = formatter or join_tags
    tag_names = getattr(element, "tag_names", None)
    if not tag_names:
        return {}
    return {"data-element-tags": formatter(list(tag_names))}


def capture(block, *args):
    """
    Call ``block`` and return its output as safe markup.
    Lists, tuples and generators are joined fragment by fragment; any other
    value is escaped as a single fragment.
    """
    if block is None:
        return mark_safe("")
    output = block(*args)
    if output is None:
        return mark_safe("")
    if isinstance(output, (list, tuple, GeneratorType)):
        return mark_safe("".join(
            conditional_escape(fragment) for fragment in output if fragment is not None
        ))
    return conditional_escape(output)


def content_tag(tag, body, attrs=None):
    return format_html(
        "<{tag}{attrs}>{body}</{tag}>",
        tag=tag,
        attrs=flatatt(attrs or {}),
        body=body,
    )


def element_view_for(element, block=None, options=None, *, deprecation=None,
                     preview_mode=False, page=None, **kwargs):
    """
    Render ``element`` through ``block`` and wrap the result in a DOM element.

    Args:
        element: The element to display.
        block: Callable receiving an ``ElementViewHelper``; returns a string,
            safe markup, an iterable of fragments or None.
        options: Wrapper options. ``kwargs`` are merged over them and
            ``class_`` is accepted for ``class``.
            tag: wrapper tag name (``ELEMENTS_DEFAULT_TAG``, "div"), False for none.
            id: wrapper DOM id (the element's ``dom_id``).
            class: wrapper CSS class (the element's ``name``).
            tags_formatter: callable formatting the element's tags, False to
                leave the tags out.
            Any other option is rendered as a wrapper attribute.
        deprecation: Sink for deprecation notices (configured from settings
            by default).
        preview_mode, page: Passed to ``element_preview_code_attributes``.
    """
    options = dict(options or {})
    options.update(kwargs)
    if "class_" in options:
        options["class"] = options.pop("class_")

    deprecation = deprecation or get_deprecation()
    if options.get("id") is None:
        deprecation.warn(IMPLICIT_ID_WARNING.format(name=element.name))
    if options.get("class") is None:
        deprecation.warn(IMPLICIT_CLASS_WARNING.format(name=element.name))

    defaults = {
        "tag": getattr(settings, "ELEMENTS_DEFAULT_TAG", "div"),
        "id": element.dom_id,
        "class": element.name,
        "tags_formatter": join_tags,
    }
    options = {
        **defaults,
        **{key: value for key, value in options.items()
           if not (key in ("id", "class") and value is None)},
    }

    output = capture(block, ElementViewHelper(element))

    tag = options.pop("tag")
    tags_formatter = options.pop("tags_formatter")
    if not tag:
        return output

    options.update(element_preview_code_attributes(element, preview_mode=preview_mode, page=page))
    if tags_formatter:
        options.update(element_tags_attributes(element, formatter=tags_formatter))

    logger.debug(f"Wrapping element '{element.name}' in <{tag}> with {sorted(options)}")
    return content_tag(tag, output, options)
