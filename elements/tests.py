from unittest.mock import MagicMock, patch

from django.core.exceptions import ImproperlyConfigured
from django.template import Context, Template, TemplateSyntaxError
from django.template.loader import render_to_string
from django.test import SimpleTestCase, override_settings
from django.utils.safestring import mark_safe

from elements.content import ContentElement, Ingredient
from elements.deprecation import Deprecation, ElementsDeprecationWarning, get_deprecation
from elements.helpers import (
    ElementViewHelper,
    capture,
    content_tag,
    element_preview_code_attributes,
    element_tags_attributes,
    element_view_for,
)
from elements.version import VERSION, version, version_info


def build_element(**kwargs):
    defaults = {
        "name": "article",
        "id": 42,
        "ingredients": [
            Ingredient(role="headline", type="Headline", value="Hello", data={"level": 2}),
            Ingredient(role="title", type="Text", value="Hello"),
            Ingredient(role="text", type="Richtext", value="<em>World</em>"),
            Ingredient(role="empty", type="Text", value="   "),
        ],
        "tag_names": ["news", "featured"],
    }
    defaults.update(kwargs)
    return ContentElement(**defaults)


class VersionTest(SimpleTestCase):
    """Test cases for the package version helpers"""

    def test_version(self):
        self.assertEqual(VERSION, "7.0.8")
        self.assertEqual(version(), "7.0.8")

    def test_version_info_is_comparable(self):
        self.assertEqual(version_info(), (7, 0, 8))
        self.assertGreater(version_info(), (7, 0, 7))
        self.assertLess(version_info(), (7, 1))


class ContentElementTest(SimpleTestCase):
    """Test cases for the in-memory element and its ingredient lookups"""

    def setUp(self):
        """Set up test data"""
        self.element = build_element()

    def test_dom_id(self):
        self.assertEqual(self.element.dom_id, "article-42")

    def test_nested_dom_id_is_prefixed_with_parent(self):
        child = ContentElement(name="slide", id=7, parent_element=self.element)
        self.assertEqual(child.dom_id, "article-42-slide-7")

    def test_ingredient_by_role(self):
        self.assertEqual(self.element.ingredient_by_role("title").value, "Hello")
        self.assertIsNone(self.element.ingredient_by_role("missing"))

    def test_has_value_for_matches_value_for(self):
        for role in ("title", "text", "empty", "missing"):
            value = self.element.value_for(role)
            present = value is not None and bool(str(value).strip())
            self.assertEqual(self.element.has_value_for(role), present, role)

    def test_false_and_empty_collections_are_blank(self):
        element = ContentElement(name="teaser", id=1, ingredients=[
            Ingredient(role="flag", value=False),
            Ingredient(role="items", value=[]),
            Ingredient(role="settings", value={}),
            Ingredient(role="count", value=0),
        ])
        self.assertFalse(element.has_value_for("flag"))
        self.assertFalse(element.has_value_for("items"))
        self.assertFalse(element.has_value_for("settings"))
        self.assertTrue(element.has_value_for("count"))

    def test_unknown_ingredient_type(self):
        ingredient = Ingredient(role="video", type="Video", value="x")
        with self.assertRaisesMessage(ImproperlyConfigured, "Video"):
            ingredient.as_view_component()


class IngredientViewTest(SimpleTestCase):
    """Test cases for the ingredient view components"""

    def test_text_is_escaped(self):
        ingredient = Ingredient(role="title", value="<b>Hi</b>")
        self.assertEqual(ingredient.as_view_component().render(), "&lt;b&gt;Hi&lt;/b&gt;")

    def test_text_with_link(self):
        ingredient = Ingredient(
            role="title",
            value="Read more",
            data={"link": "/news", "link_target": "blank"},
        )
        html = ingredient.as_view_component(html_options={"class": "more"}).render()
        self.assertHTMLEqual(
            html,
            '<a href="/news" target="_blank" rel="noopener noreferrer" class="more">Read more</a>',
        )

    def test_text_link_can_be_disabled(self):
        ingredient = Ingredient(role="title", value="Read more", data={"link": "/news"})
        html = ingredient.as_view_component(options={"disable_link": True}).render()
        self.assertEqual(html, "Read more")

    def test_richtext(self):
        ingredient = Ingredient(role="text", type="Richtext", value="<p>Hi <em>there</em></p>")
        self.assertEqual(ingredient.as_view_component().render(), "<p>Hi <em>there</em></p>")
        plain = ingredient.as_view_component(options={"plain_text": True}).render()
        self.assertEqual(plain, "Hi there")

    def test_headline_level_is_clamped(self):
        ingredient = Ingredient(role="headline", type="Headline", value="Hi", data={"level": 9})
        self.assertHTMLEqual(ingredient.as_view_component().render(), "<h6>Hi</h6>")

    def test_blank_value_renders_nothing(self):
        ingredient = Ingredient(role="title", value="  ")
        self.assertEqual(ingredient.as_view_component().render(), "")

    def test_component_behaves_like_markup(self):
        ingredient = Ingredient(role="html", type="Html", value="<hr>")
        component = ingredient.as_view_component()
        self.assertEqual(str(component), "<hr>")
        self.assertEqual(component.__html__(), "<hr>")


class ElementViewHelperTest(SimpleTestCase):
    """Test cases for the helper passed into element blocks"""

    def setUp(self):
        """Set up test data"""
        self.element = build_element()
        self.helper = ElementViewHelper(self.element)

    def test_render_existing_ingredient(self):
        self.assertHTMLEqual(self.helper.render("headline"), "<h2>Hello</h2>")

    def test_render_missing_ingredient_returns_none(self):
        self.assertIsNone(self.helper.render("missing"))

    def test_render_passes_options(self):
        element = build_element(ingredients=[
            Ingredient(role="headline", type="Headline", value="Hi"),
        ])
        html = ElementViewHelper(element).render("headline", html_options={"class": "big"})
        self.assertHTMLEqual(html, '<h1 class="big">Hi</h1>')

    def test_value_and_has(self):
        self.assertEqual(self.helper.value("title"), "Hello")
        self.assertTrue(self.helper.has("title"))
        self.assertIsNone(self.helper.value("missing"))
        self.assertFalse(self.helper.has("missing"))

    def test_ingredient_by_role(self):
        self.assertIs(self.helper.ingredient_by_role("title"), self.element.ingredients[1])

    def test_element_errors_propagate(self):
        helper = ElementViewHelper(object())
        with self.assertRaises(AttributeError):
            helper.value("title")


class AttributeProvidersTest(SimpleTestCase):
    """Test cases for preview and tag wrapper attributes"""

    def setUp(self):
        """Set up test data"""
        self.page = object()
        self.element = build_element(page=self.page)

    def test_preview_attributes(self):
        self.assertEqual(element_preview_code_attributes(self.element), {})
        self.assertEqual(
            element_preview_code_attributes(self.element, preview_mode=True),
            {"data-element": 42},
        )
        self.assertEqual(
            element_preview_code_attributes(self.element, preview_mode=True, page=self.page),
            {"data-element": 42},
        )
        self.assertEqual(
            element_preview_code_attributes(self.element, preview_mode=True, page=object()),
            {},
        )

    def test_default_tags_formatter(self):
        self.assertEqual(
            element_tags_attributes(self.element),
            {"data-element-tags": "news featured"},
        )

    def test_custom_tags_formatter(self):
        attrs = element_tags_attributes(self.element, formatter=lambda tags: ",".join(tags))
        self.assertEqual(attrs, {"data-element-tags": "news,featured"})

    def test_no_tags(self):
        self.assertEqual(element_tags_attributes(build_element(tag_names=[])), {})


class CaptureTest(SimpleTestCase):
    """Test cases for block capture and tag building"""

    def test_no_block(self):
        self.assertEqual(capture(None), "")

    def test_none_output(self):
        self.assertEqual(capture(lambda: None), "")

    def test_strings_are_escaped(self):
        self.assertEqual(capture(lambda: "<b>"), "&lt;b&gt;")
        self.assertEqual(capture(lambda: mark_safe("<b>")), "<b>")

    def test_fragments_are_joined(self):
        output = capture(lambda x: [x, None, mark_safe("<br>"), "&"], "a")
        self.assertEqual(output, "a<br>&amp;")

    def test_scalar_output_is_a_single_fragment(self):
        self.assertEqual(capture(lambda: 5), "5")
        html = element_view_for(
            build_element(), lambda el: 5, deprecation=MagicMock(),
            id="a", class_="b", tag=False,
        )
        self.assertEqual(html, "5")

    def test_generator_output_is_joined(self):
        self.assertEqual(capture(lambda: (part for part in ["a", "<"])), "a&lt;")

    def test_content_tag(self):
        html = content_tag("section", mark_safe("<p>x</p>"), {"id": "a", "hidden": True, "title": None})
        self.assertHTMLEqual(html, '<section id="a" hidden><p>x</p></section>')


class ElementViewForTest(SimpleTestCase):
    """Test cases for element_view_for"""

    def setUp(self):
        """Set up test data"""
        self.element = build_element()
        self.sink = MagicMock()

    def render(self, block=None, **options):
        return element_view_for(self.element, block, deprecation=self.sink, **options)

    def test_explicit_id_and_class(self):
        html = self.render(lambda el: el.render("title"), id="intro", class_="teaser")
        self.sink.warn.assert_not_called()
        self.assertHTMLEqual(
            html,
            '<div id="intro" class="teaser" data-element-tags="news featured">Hello</div>',
        )

    def test_class_as_plain_option(self):
        html = self.render(options={"id": "intro", "class": "teaser"})
        self.sink.warn.assert_not_called()
        self.assertHTMLEqual(
            html,
            '<div id="intro" class="teaser" data-element-tags="news featured"></div>',
        )

    def test_implicit_id_warns_once(self):
        html = self.render(class_="teaser")
        self.assertEqual(self.sink.warn.call_count, 1)
        message = self.sink.warn.call_args[0][0]
        self.assertIn("implicit DOM id", message)
        self.assertIn("article", message)
        self.assertHTMLEqual(
            html,
            '<div id="article-42" class="teaser" data-element-tags="news featured"></div>',
        )

    def test_implicit_class_warns_once(self):
        html = self.render(id="intro")
        self.assertEqual(self.sink.warn.call_count, 1)
        message = self.sink.warn.call_args[0][0]
        self.assertIn("implicit CSS class", message)
        self.assertIn("article", message)
        self.assertHTMLEqual(
            html,
            '<div id="intro" class="article" data-element-tags="news featured"></div>',
        )

    def test_none_counts_as_missing(self):
        html = self.render(id=None, class_=None)
        self.assertEqual(self.sink.warn.call_count, 2)
        self.assertHTMLEqual(
            html,
            '<div id="article-42" class="article" data-element-tags="news featured"></div>',
        )

    def test_false_id_omits_attribute_without_warning(self):
        html = self.render(id=False, class_="teaser")
        self.sink.warn.assert_not_called()
        self.assertHTMLEqual(
            html,
            '<div class="teaser" data-element-tags="news featured"></div>',
        )

    def test_custom_tag_and_extra_attributes(self):
        html = self.render(tag="section", id="intro", class_="teaser", **{"data-kind": "promo"})
        self.assertHTMLEqual(
            html,
            '<section id="intro" class="teaser" data-kind="promo" '
            'data-element-tags="news featured"></section>',
        )

    @patch("elements.helpers.element_tags_attributes")
    @patch("elements.helpers.element_preview_code_attributes")
    def test_tag_false_returns_content_only(self, mock_preview, mock_tags):
        html = self.render(lambda el: [el.render("headline"), el.render("missing")], tag=False)
        self.assertHTMLEqual(html, "<h2>Hello</h2>")
        mock_preview.assert_not_called()
        mock_tags.assert_not_called()

    def test_tags_formatter_false_keeps_preview_attributes(self):
        html = self.render(id="intro", class_="teaser", tags_formatter=False)
        self.assertHTMLEqual(html, '<div id="intro" class="teaser"></div>')

        html = element_view_for(
            self.element, None, deprecation=self.sink, preview_mode=True,
            id="intro", class_="teaser", tags_formatter=False,
        )
        self.assertHTMLEqual(html, '<div id="intro" class="teaser" data-element="42"></div>')

    def test_custom_tags_formatter(self):
        html = self.render(id="intro", class_="teaser", tags_formatter=lambda tags: "|".join(tags))
        self.assertHTMLEqual(
            html,
            '<div id="intro" class="teaser" data-element-tags="news|featured"></div>',
        )

    def test_block_receives_helper_for_element(self):
        received = []
        self.render(lambda el: received.append(el), id="intro", class_="teaser")
        self.assertIsInstance(received[0], ElementViewHelper)
        self.assertIs(received[0].element, self.element)

    def test_block_output_is_escaped(self):
        html = self.render(lambda el: "<script>", id="intro", class_="teaser", tag=False)
        self.assertEqual(html, "&lt;script&gt;")

    def test_caller_options_are_not_mutated(self):
        options = {"id": "intro", "class": "teaser", "tag": "span"}
        self.render(options=options)
        self.assertEqual(options, {"id": "intro", "class": "teaser", "tag": "span"})

    @override_settings(ELEMENTS_DEFAULT_TAG="article")
    def test_default_tag_from_settings(self):
        html = self.render(id="intro", class_="teaser", tags_formatter=False)
        self.assertHTMLEqual(html, '<article id="intro" class="teaser"></article>')

    def test_deterministic(self):
        block = lambda el: [el.render("headline"), el.render("text")]  # noqa: E731
        first = self.render(block, id="intro", class_="teaser")
        second = self.render(block, id="intro", class_="teaser")
        self.assertEqual(first, second)


class DeprecationTest(SimpleTestCase):
    """Test cases for the deprecation sink behaviours"""

    def setUp(self):
        """Set up test data"""
        self.element = build_element()

    def test_log_behavior(self):
        with self.assertLogs("elements.deprecation", level="WARNING") as logs:
            element_view_for(self.element, deprecation=Deprecation("log"), id="intro")
        self.assertEqual(len(logs.records), 1)
        self.assertIn("article", logs.output[0])

    def test_warn_behavior(self):
        with self.assertWarns(ElementsDeprecationWarning):
            element_view_for(self.element, deprecation=Deprecation("warn"), id="intro")

    def test_raise_behavior(self):
        with self.assertRaises(ElementsDeprecationWarning):
            element_view_for(self.element, deprecation=Deprecation("raise"), class_="teaser")

    def test_silence_behavior(self):
        with self.assertNoLogs("elements.deprecation", level="WARNING"):
            element_view_for(self.element, deprecation=Deprecation("silence"))

    def test_unknown_behavior(self):
        with self.assertRaises(ImproperlyConfigured):
            Deprecation("shout")

    @override_settings(ELEMENTS_DEPRECATION_BEHAVIOR="raise")
    def test_default_sink_follows_settings(self):
        self.assertEqual(get_deprecation().behavior, "raise")
        with self.assertRaises(ElementsDeprecationWarning):
            element_view_for(self.element, class_="teaser")


class ElementsTagsTest(SimpleTestCase):
    """Test cases for the elements template tags and filters"""

    def setUp(self):
        """Set up test data"""
        self.element = build_element()

    def render_template(self, source, **context):
        template = Template("{% load elements_tags %}" + source)
        return template.render(Context({"element": self.element, **context}))

    def test_template_file(self):
        html = render_to_string("elements/_article_view.html", {"element": self.element})
        self.assertHTMLEqual(
            html.strip(),
            '<article id="article-42" class="article" data-element-tags="news featured">'
            "<h2>Hello</h2><p><em>World</em></p></article>",
        )

    def test_block_tag_matches_helper(self):
        html = self.render_template(
            '{% element_view_for element id="intro" class="teaser" as el %}'
            '{% render_ingredient el "title" %}'
            "{% endelement_view_for %}"
        )
        expected = element_view_for(
            self.element, lambda el: el.render("title"), deprecation=MagicMock(),
            id="intro", class_="teaser",
        )
        self.assertHTMLEqual(html, expected)

    def test_default_helper_name(self):
        html = self.render_template(
            '{% element_view_for element id="intro" class="teaser" tag=False %}'
            '{{ el|ingredient_value:"title" }}'
            "{% endelement_view_for %}"
        )
        self.assertEqual(html, "Hello")

    def test_preview_mode_from_context(self):
        html = self.render_template(
            '{% element_view_for element id="intro" class="teaser" tags_formatter=False %}'
            "{% endelement_view_for %}",
            preview_mode=True,
        )
        self.assertHTMLEqual(html, '<div id="intro" class="teaser" data-element="42"></div>')

    def test_extra_keywords_become_hyphenated_attributes(self):
        html = self.render_template(
            '{% element_view_for element id="intro" class="teaser" tags_formatter=False data_kind="promo" %}'
            "{% endelement_view_for %}"
        )
        self.assertHTMLEqual(html, '<div id="intro" class="teaser" data-kind="promo"></div>')

    @override_settings(ELEMENTS_DEPRECATION_BEHAVIOR="silence")
    def test_implicit_id_and_class(self):
        html = self.render_template(
            "{% element_view_for element tags_formatter=False %}{% endelement_view_for %}"
        )
        self.assertHTMLEqual(html, '<div id="article-42" class="article"></div>')

    def test_render_ingredient_options(self):
        element = build_element(ingredients=[
            Ingredient(role="title", value="Read", data={"link": "/news"}),
        ])
        html = self.render_template(
            '{% element_view_for element id="a" class="b" tag=False as el %}'
            '{% render_ingredient el "title" html_class="more" %}|'
            '{% render_ingredient el "title" disable_link=True %}|'
            '{% render_ingredient el "missing" %}'
            "{% endelement_view_for %}",
            element=element,
        )
        self.assertHTMLEqual(html, '<a href="/news" class="more">Read</a>|Read|')

    def test_has_ingredient_filter(self):
        html = self.render_template(
            '{% element_view_for element id="a" class="b" tag=False as el %}'
            '{% if el|has_ingredient:"title" %}yes{% endif %}'
            '{% if el|has_ingredient:"empty" %}no{% endif %}'
            '{% with ingredient=el|ingredient_by_role:"title" %}{{ ingredient.type }}{% endwith %}'
            "{% endelement_view_for %}"
        )
        self.assertEqual(html, "yesText")

    def test_helper_scope_ends_with_block(self):
        html = self.render_template(
            '{% element_view_for element id="a" class="b" tag=False as el %}'
            "{% endelement_view_for %}[{{ el }}]"
        )
        self.assertEqual(html, "[]")

    def test_missing_element_argument(self):
        with self.assertRaises(TemplateSyntaxError):
            Template("{% load elements_tags %}{% element_view_for %}{% endelement_view_for %}")

    def test_only_as_clause_without_element(self):
        with self.assertRaises(TemplateSyntaxError):
            Template(
                "{% load elements_tags %}{% element_view_for as el %}"
                "{% endelement_view_for %}"
            )

    def test_unexpected_argument(self):
        with self.assertRaises(TemplateSyntaxError):
            Template(
                '{% load elements_tags %}{% element_view_for element "oops" %}'
                "{% endelement_view_for %}"
            )
