import json
import logging

import pytest

from csb import *


builder = css_selector_builder


@pytest.mark.parametrize(
    "selector,expected",
    [
        (builder.element("div"), "div"),
        (builder.id("main"), "#main"),
        (builder.class_("container"), ".container"),
        (builder.attr("href"), "[href]"),
        (builder.pseudo_class("focus"), ":focus"),
        (builder.pseudo_element("before"), "::before"),
        (
            builder.element("div").id("main").class_("container").class_("draggable"),
            "div#main.container.draggable",
        ),
        (builder.id("main").class_("container").class_("editable"), "#main.container.editable"),
        (
            builder.element("a").attr('href$=".png"').pseudo_class("focus"),
            'a[href$=".png"]:focus',
        ),
        (builder.class_("a").class_("b"), ".a.b"),
        (builder.class_("b").class_("a").class_("b"), ".b.a.b"),
        (builder.element("input").attr("type=text").attr("required"), "input[type=text][required]"),
        (
            builder.element("li").pseudo_class("first-child").pseudo_class("hover"),
            "li:first-child:hover",
        ),
        (builder.element("p").pseudo_element("first-line"), "p::first-line"),
        (
            builder.element("a")
            .id("home")
            .class_("nav")
            .attr("href")
            .pseudo_class("hover")
            .pseudo_element("after"),
            "a#home.nav[href]:hover::after",
        ),
        (builder.attr("data-x").pseudo_class("not(.y)"), "[data-x]:not(.y)"),
    ],
)
def test_simple_selector(selector, expected):
    assert selector.stringify() == expected
    assert str(selector) == expected
    repr(selector)


def test_chaining_returns_same_instance():
    selector = builder.element("div")
    assert selector.id("main") is selector
    assert selector.class_("a") is selector
    assert selector.attr("href") is selector
    assert selector.pseudo_class("hover") is selector
    assert selector.pseudo_element("after") is selector


def test_builder_returns_new_instances():
    first = builder.element("div")
    second = builder.element("div")
    assert first is not second
    first.class_("a")
    assert second.stringify() == "div"


def test_stringify_is_repeatable():
    selector = builder.element("div").class_("a")
    assert selector.stringify() == selector.stringify() == "div.a"


def test_parts():
    selector = builder.element("a").attr('href$=".png"').pseudo_class("focus")
    assert selector.parts == [
        SelectorPart(SelectorPartType.ELEMENT, "a"),
        SelectorPart(SelectorPartType.ATTRIBUTE, 'href$=".png"'),
        SelectorPart(SelectorPartType.PSEUDO_CLASS, "focus"),
    ]
    selector.parts.clear()
    assert len(selector.parts) == 3


@pytest.mark.parametrize(
    "type,text,expected",
    [
        (SelectorPartType.ELEMENT, "div", "div"),
        (SelectorPartType.ID, "main", "#main"),
        (SelectorPartType.CLASS, "container", ".container"),
        (SelectorPartType.ATTRIBUTE, 'href$=".png"', '[href$=".png"]'),
        (SelectorPartType.PSEUDO_CLASS, "nth-of-type(even)", ":nth-of-type(even)"),
        (SelectorPartType.PSEUDO_ELEMENT, "after", "::after"),
    ],
)
def test_selector_part(type, text, expected):
    assert str(SelectorPart(type, text)) == expected
    repr(SelectorPart(type, text))


def test_selector_part_type_rank():
    ranks = [type.rank for type in SelectorPartType]
    assert ranks == sorted(ranks)
    assert [type for type in SelectorPartType if type.unique] == [
        SelectorPartType.ELEMENT,
        SelectorPartType.ID,
        SelectorPartType.PSEUDO_ELEMENT,
    ]


@pytest.mark.parametrize(
    "build",
    [
        lambda: builder.element("div").element("span"),
        lambda: builder.id("a").id("b"),
        lambda: builder.element("div").id("a").id("b"),
        lambda: builder.pseudo_element("before").pseudo_element("after"),
        lambda: builder.element("p").pseudo_element("before").pseudo_element("after"),
    ],
)
def test_duplicate_part(build):
    with pytest.raises(DuplicateSelectorPartException) as excinfo:
        build()
    assert str(excinfo.value) == (
        "Element, id and pseudo-element should not occur more then one time "
        "inside the selector"
    )


@pytest.mark.parametrize(
    "build",
    [
        lambda: builder.class_("y").id("x"),
        lambda: builder.id("main").element("div"),
        lambda: builder.attr("href").class_("a"),
        lambda: builder.pseudo_class("hover").attr("href"),
        lambda: builder.pseudo_element("after").pseudo_class("hover"),
        lambda: builder.element("div").pseudo_element("after").class_("a"),
    ],
)
def test_out_of_order_part(build):
    with pytest.raises(OutOfOrderSelectorPartException) as excinfo:
        build()
    assert str(excinfo.value) == (
        "Selector parts should be arranged in the following order: element, "
        "id, class, attribute, pseudo-class, pseudo-element"
    )


def test_duplicate_checked_before_order():
    # A second id after a class is both; uniqueness is reported.
    with pytest.raises(DuplicateSelectorPartException):
        builder.id("a").class_("b").id("c")


def test_failed_append_leaves_selector_untouched():
    selector = builder.element("div").id("main").class_("a")
    with pytest.raises(SelectorBuilderException):
        selector.id("other")
    with pytest.raises(SelectorBuilderException):
        selector.element("span")
    assert selector.stringify() == "div#main.a"
    assert selector.class_("b").stringify() == "div#main.a.b"


def test_exception_attributes():
    with pytest.raises(SelectorBuilderException) as excinfo:
        builder.class_("a").element("div")
    assert isinstance(excinfo.value, OutOfOrderSelectorPartException)
    assert excinfo.value.type == SelectorPartType.ELEMENT
    assert excinfo.value.why == str(excinfo.value)


def test_check():
    selector = builder.element("div").class_("a")
    selector.check(SelectorPartType.CLASS)
    selector.check(SelectorPartType.PSEUDO_ELEMENT)
    with pytest.raises(OutOfOrderSelectorPartException):
        selector.check(SelectorPartType.ID)
    with pytest.raises(DuplicateSelectorPartException):
        selector.check(SelectorPartType.ELEMENT)
    assert selector.stringify() == "div.a"


def test_rejection_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="csb"):
        with pytest.raises(DuplicateSelectorPartException):
            builder.id("a").id("b")
        with pytest.raises(OutOfOrderSelectorPartException):
            builder.class_("a").id("b")
    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 2
    assert "duplicate ID part" in messages[0]
    assert "ID part rejected after CLASS" in messages[1]


@pytest.mark.parametrize(
    "combinator,expected",
    [
        ("+", "div + span"),
        ("~", "div ~ span"),
        (">", "div > span"),
        (" ", "div   span"),
        (Combinator.NEXT_SIBLING, "div + span"),
        (Combinator.SUBSEQUENT_SIBLING, "div ~ span"),
        (Combinator.CHILD, "div > span"),
        (Combinator.DESCENDANT, "div   span"),
    ],
)
def test_combine(combinator, expected):
    selector = builder.combine(builder.element("div"), combinator, builder.element("span"))
    assert isinstance(selector, CombinedSelector)
    assert selector.stringify() == expected
    assert str(selector) == expected
    assert isinstance(selector.combinator, str)
    repr(selector)


def test_combine_nested_right():
    selector = builder.combine(
        builder.element("div").id("main").class_("container").class_("draggable"),
        "+",
        builder.combine(
            builder.element("table").id("data"),
            "~",
            builder.combine(
                builder.element("tr").pseudo_class("nth-of-type(even)"),
                " ",
                builder.element("td").pseudo_class("nth-of-type(even)"),
            ),
        ),
    )
    assert selector.stringify() == (
        "div#main.container.draggable + table#data ~ "
        "tr:nth-of-type(even)   td:nth-of-type(even)"
    )


def test_combine_nested_left():
    selector = builder.combine(
        builder.combine(builder.element("ul"), ">", builder.element("li")),
        "+",
        builder.element("li").class_("active"),
    )
    assert selector.stringify() == "ul > li + li.active"


def test_combine_keeps_operands():
    left = builder.element("div")
    right = builder.element("p").pseudo_element("first-line")
    selector = builder.combine(left, ">", right)
    assert selector.left is left
    assert selector.right is right
    assert selector.combinator == ">"


def test_rectangle():
    r = Rectangle(10, 20)
    assert r.width == 10
    assert r.height == 20
    assert r.get_area() == 200
    r.width = 5
    assert r.get_area() == 100


@pytest.mark.parametrize(
    "obj,expected",
    [
        ([1, 2, 3], "[1,2,3]"),
        ({"height": 10, "width": 20}, '{"height":10,"width":20}'),
        ("text", '"text"'),
        (None, "null"),
        (Rectangle(10, 20), '{"width":10,"height":20}'),
        ([Rectangle(1, 2)], '[{"width":1,"height":2}]'),
    ],
)
def test_get_json(obj, expected):
    assert get_json(obj) == expected


def test_get_json_unserializable():
    with pytest.raises(TypeError):
        get_json({1, 2})


def test_from_json():
    r = from_json(Rectangle, '{"width":10,"height":20}')
    assert isinstance(r, Rectangle)
    assert r.get_area() == 200

    r = from_json(Rectangle, get_json(Rectangle(3, 4)))
    assert (r.width, r.height) == (3, 4)


def test_from_json_skips_init():
    class Circle:
        def __init__(self, radius):
            raise AssertionError("__init__ called")

        def get_circumference(self):
            return 2 * 3 * self.radius

    c = from_json(Circle, '{"radius":10}')
    assert c.radius == 10
    assert c.get_circumference() == 60


@pytest.mark.parametrize("s", ["[1,2,3]", '"text"', "null"])
def test_from_json_not_an_object(s):
    with pytest.raises(TypeError):
        from_json(Rectangle, s)


def test_from_json_malformed():
    with pytest.raises(json.JSONDecodeError):
        from_json(Rectangle, '{"width":')
