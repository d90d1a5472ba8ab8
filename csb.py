"""
:mod:`csb` is a CSS selector builder.

:mod:`csb`

- is a single module;
- has no dependency outside `PSL <https://docs.python.org/3/library/>`_;
- composes selector strings programmatically, refusing sequences of
  simple selectors that violate the ordering and uniqueness rules of
  `Selectors Level 3 <https://www.w3.org/TR/selectors-3/>`_.

Simple example:

.. doctest::

   >>> from csb import css_selector_builder as builder
   >>> builder.id('main').class_('container').class_('editable').stringify()
   '#main.container.editable'
   >>> builder.element('a').attr('href$=".png"').pseudo_class('focus').stringify()
   'a[href$=".png"]:focus'
   >>> builder.combine(
   ...     builder.element('div').id('main').class_('container').class_('draggable'),
   ...     '+',
   ...     builder.combine(
   ...         builder.element('table').id('data'),
   ...         '~',
   ...         builder.combine(
   ...             builder.element('tr').pseudo_class('nth-of-type(even)'),
   ...             ' ',
   ...             builder.element('td').pseudo_class('nth-of-type(even)'),
   ...         ),
   ...     ),
   ... ).stringify()
   'div#main.container.draggable + table#data ~ tr:nth-of-type(even)   td:nth-of-type(even)'

The module also ships a few object helpers: :class:`Rectangle`,
:func:`get_json` and :func:`from_json`.
"""

import json
import logging
from enum import Enum
from typing import Any, List, Union

logger = logging.getLogger("csb")

SelectorLike = Union["SimpleSelector", "CombinedSelector"]


class SelectorBuilderException(Exception):
    """
    Exception raised when a selector part cannot be appended.

    Attributes:
        type (:class:`SelectorPartType`):
            Type of the rejected part.
        why (:class:`str`):
            Reason of the exception.
    """

    def __init__(self, type: "SelectorPartType", why: str) -> None:
        super().__init__(why)
        self.type = type
        self.why = why

    def __str__(self) -> str:
        return self.why


class DuplicateSelectorPartException(SelectorBuilderException):
    """Raised on a second element, id or pseudo-element part."""

    def __init__(self, type: "SelectorPartType") -> None:
        super().__init__(
            type,
            "Element, id and pseudo-element should not occur more then one "
            "time inside the selector",
        )


class OutOfOrderSelectorPartException(SelectorBuilderException):
    """Raised when a part ranks lower than the part preceding it."""

    def __init__(self, type: "SelectorPartType") -> None:
        super().__init__(
            type,
            "Selector parts should be arranged in the following order: "
            "element, id, class, attribute, pseudo-class, pseudo-element",
        )


# Enum: basis for poor man's algebraic data type. Values double as rank.
class SelectorPartType(Enum):
    """
    Simple selector types, in the order they must appear in a sequence.

    Members correspond to the following forms:

    - :attr:`ELEMENT`: ``tag``;
    - :attr:`ID`: ``#id``;
    - :attr:`CLASS`: ``.class``;
    - :attr:`ATTRIBUTE`: ``[attr]``;
    - :attr:`PSEUDO_CLASS`: ``:pseudo-class``;
    - :attr:`PSEUDO_ELEMENT`: ``::pseudo-element``.
    """

    ELEMENT = 0
    ID = 1
    CLASS = 2
    ATTRIBUTE = 3
    PSEUDO_CLASS = 4
    PSEUDO_ELEMENT = 5

    @property
    def rank(self) -> int:
        return self.value

    @property
    def unique(self) -> bool:
        """Whether the type may occur at most once in a sequence."""
        return self in (
            SelectorPartType.ELEMENT,
            SelectorPartType.ID,
            SelectorPartType.PSEUDO_ELEMENT,
        )

    def format(self, text: str) -> str:
        if self == SelectorPartType.ELEMENT:
            fmt = "{text}"
        elif self == SelectorPartType.ID:
            fmt = "#{text}"
        elif self == SelectorPartType.CLASS:
            fmt = ".{text}"
        elif self == SelectorPartType.ATTRIBUTE:
            fmt = "[{text}]"
        elif self == SelectorPartType.PSEUDO_CLASS:
            fmt = ":{text}"
        elif self == SelectorPartType.PSEUDO_ELEMENT:
            fmt = "::{text}"
        else:  # pragma: no cover
            raise RuntimeError("unimplemented selector part type: %s" % repr(self))
        return fmt.format(text=text)


class SelectorPart:
    """
    Represents one simple selector inside a sequence.

    The text is kept verbatim; e.g. the attribute part of
    ``a[href$=".png"]`` has text ``href$=".png"``.

    Attributes:
        type (:class:`SelectorPartType`)
        text (:class:`str`)
    """

    def __init__(self, type: SelectorPartType, text: str) -> None:
        self.type = type
        self.text = text

    def __repr__(self) -> str:
        return "<SelectorPart %s %s>" % (self.type.name, repr(self.text))

    def __str__(self) -> str:
        return self.type.format(self.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectorPart):
            return NotImplemented
        return self.type == other.type and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.type, self.text))


class SimpleSelector:
    """
    Represents a sequence of simple selectors, e.g. ``div#main.container``.

    Instances are normally obtained from :class:`SelectorBuilder` and
    extended in place with the chainable appenders :meth:`element`,
    :meth:`id`, :meth:`class_`, :meth:`attr`, :meth:`pseudo_class` and
    :meth:`pseudo_element`, each of which returns the instance itself.

    Parts must be appended in the order element, id, class, attribute,
    pseudo-class, pseudo-element; element, id and pseudo-element may
    occur at most once. A violating append raises a
    :class:`SelectorBuilderException` subclass and leaves the selector
    untouched.

    Once handed to :meth:`SelectorBuilder.combine` the selector should
    no longer be extended, as the combined selector reads it lazily.
    """

    # The seed part is not checked: nothing precedes it.
    def __init__(self, part: SelectorPart) -> None:
        self._parts = [part]  # type: List[SelectorPart]

    def __repr__(self) -> str:
        return "<SimpleSelector %s>" % repr(str(self))

    def __str__(self) -> str:
        return self.stringify()

    @property
    def parts(self) -> List[SelectorPart]:
        return list(self._parts)

    def element(self, text: str) -> "SimpleSelector":
        return self._append(SelectorPartType.ELEMENT, text)

    def id(self, text: str) -> "SimpleSelector":
        return self._append(SelectorPartType.ID, text)

    def class_(self, text: str) -> "SimpleSelector":
        return self._append(SelectorPartType.CLASS, text)

    def attr(self, text: str) -> "SimpleSelector":
        return self._append(SelectorPartType.ATTRIBUTE, text)

    def pseudo_class(self, text: str) -> "SimpleSelector":
        return self._append(SelectorPartType.PSEUDO_CLASS, text)

    def pseudo_element(self, text: str) -> "SimpleSelector":
        return self._append(SelectorPartType.PSEUDO_ELEMENT, text)

    def check(self, type: SelectorPartType) -> None:
        """
        Checks whether a part of `type` may be appended.

        Raises :class:`DuplicateSelectorPartException` if `type` is
        unique and already present, or
        :class:`OutOfOrderSelectorPartException` if `type` ranks lower
        than the last part.
        """
        if type.unique and any(part.type == type for part in self._parts):
            logger.debug("duplicate %s part rejected in %r", type.name, self)
            raise DuplicateSelectorPartException(type)
        last = self._parts[-1].type
        if type.rank < last.rank:
            logger.debug(
                "%s part rejected after %s in %r", type.name, last.name, self
            )
            raise OutOfOrderSelectorPartException(type)

    def _append(self, type: SelectorPartType, text: str) -> "SimpleSelector":
        self.check(type)
        self._parts.append(SelectorPart(type, text))
        return self

    def stringify(self) -> str:
        return "".join(str(part) for part in self._parts)


class CombinedSelector:
    """
    Represents two selectors joined by a combinator.

    Either side may itself be a :class:`CombinedSelector`, so combined
    selectors form a binary tree flattened left to right by
    :meth:`stringify`.

    Attributes:
        left       (:class:`SelectorLike`)
        combinator (:class:`str`)
        right      (:class:`SelectorLike`)
    """

    def __init__(self, left: SelectorLike, combinator: str, right: SelectorLike) -> None:
        self.left = left
        self.combinator = combinator
        self.right = right

    def __repr__(self) -> str:
        return "<CombinedSelector %s>" % repr(str(self))

    def __str__(self) -> str:
        return self.stringify()

    def stringify(self) -> str:
        """
        The combinator is padded with one space on each side, whatever
        it is. The descendant combinator ``' '`` thus yields three
        spaces between both sides.
        """
        return "%s %s %s" % (
            self.left.stringify(),
            self.combinator,
            self.right.stringify(),
        )


class Combinator(Enum):
    """
    Combinator symbols.

    Members correspond to the following combinators:

    - :attr:`DESCENDANT`: ``A B``;
    - :attr:`CHILD`: ``A > B``;
    - :attr:`NEXT_SIBLING`: ``A + B``;
    - :attr:`SUBSEQUENT_SIBLING`: ``A ~ B``.
    """

    DESCENDANT = " "
    CHILD = ">"
    NEXT_SIBLING = "+"
    SUBSEQUENT_SIBLING = "~"


class SelectorBuilder:
    """
    Facade creating selectors.

    Every method but :meth:`combine` returns a new
    :class:`SimpleSelector` seeded with one part of the named type. Use
    the shared instance :data:`css_selector_builder`.
    """

    def element(self, text: str) -> SimpleSelector:
        return SimpleSelector(SelectorPart(SelectorPartType.ELEMENT, text))

    def id(self, text: str) -> SimpleSelector:
        return SimpleSelector(SelectorPart(SelectorPartType.ID, text))

    def class_(self, text: str) -> SimpleSelector:
        return SimpleSelector(SelectorPart(SelectorPartType.CLASS, text))

    def attr(self, text: str) -> SimpleSelector:
        return SimpleSelector(SelectorPart(SelectorPartType.ATTRIBUTE, text))

    def pseudo_class(self, text: str) -> SimpleSelector:
        return SimpleSelector(SelectorPart(SelectorPartType.PSEUDO_CLASS, text))

    def pseudo_element(self, text: str) -> SimpleSelector:
        return SimpleSelector(SelectorPart(SelectorPartType.PSEUDO_ELEMENT, text))

    def combine(
        self,
        left: SelectorLike,
        combinator: Union[str, Combinator],
        right: SelectorLike,
    ) -> CombinedSelector:
        """
        Joins `left` and `right` with `combinator`.

        `combinator` is stored verbatim; a :class:`Combinator` member is
        replaced by its symbol.
        """
        if isinstance(combinator, Combinator):
            combinator = combinator.value
        return CombinedSelector(left, combinator, right)


css_selector_builder = SelectorBuilder()


class Rectangle:
    """
    A rectangle with a computed area.

    Attributes:
        width  (:class:`float`)
        height (:class:`float`)
    """

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return "<Rectangle %sx%s>" % (self.width, self.height)

    def get_area(self) -> float:
        return self.width * self.height


def get_json(obj: Any) -> str:
    """
    Returns the compact JSON representation of `obj`.

    Objects that are not natively serializable are serialized through
    their instance attributes; :class:`TypeError` is raised for values
    without any.

    Example: ``get_json(Rectangle(10, 20)) == '{"width":10,"height":20}'``.
    """
    return json.dumps(obj, separators=(",", ":"), default=_json_default)


def from_json(cls: type, s: str) -> Any:
    """
    Creates an instance of `cls` from its JSON representation.

    ``cls.__init__`` is not called; the decoded members are assigned as
    instance attributes. :class:`json.JSONDecodeError` is propagated on
    malformed input and :class:`TypeError` is raised if the document is
    not a JSON object.
    """
    members = json.loads(s)
    if not isinstance(members, dict):
        raise TypeError("expecting a JSON object, got %s" % type(members).__name__)
    obj = cls.__new__(cls)
    obj.__dict__.update(members)
    return obj


def _json_default(obj: Any) -> Any:
    try:
        return vars(obj)
    except TypeError:
        raise TypeError(
            "object of type %s is not JSON serializable" % type(obj).__name__
        ) from None
