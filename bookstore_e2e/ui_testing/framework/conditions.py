"""
================================================================================
Page Conditions
================================================================================

Condition factories over a Playwright page.

Each query takes a read-only snapshot (ElementState) of the matching elements,
so the predicate is a plain function of the snapshot and a timeout reports
what was actually on screen at the last attempt.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Pattern, Union

from playwright.async_api import Locator, Page

from .polling import Condition


TextMatcher = Union[str, Pattern[str]]

# Reads the first match without auto-waiting; null once it has detached
_FIRST_ATTRIBUTE_JS = "(elements, name) => elements.length ? elements[0].getAttribute(name) : null"


@dataclass
class ElementState:
    """
    Snapshot of the elements matched by a locator at one point in time.

    Attributes:
        target: Human-readable description of what was queried
        count: Number of matching elements
        visible: Whether the first match is visible
        text: Inner text of the first match (only when requested)
        attribute: Attribute value of the first match (only when requested)
        locator: Live locator for acting on the match
    """
    target: str
    count: int
    visible: bool = False
    text: Optional[str] = None
    attribute: Optional[str] = None
    locator: Optional[Locator] = field(default=None, repr=False, compare=False)

    @property
    def exists(self) -> bool:
        return self.count > 0


def describe_text(text: TextMatcher) -> str:
    """Readable label for a text or regex matcher."""
    if isinstance(text, re.Pattern):
        return f"text=/{text.pattern}/"
    return f"text={text!r}"


async def snapshot(
    locator: Locator,
    target: str,
    with_text: bool = False,
    attribute: Optional[str] = None,
) -> ElementState:
    """
    Read count, visibility and optional text/attribute of a locator.

    None of the reads auto-wait for the element to appear.
    """
    count = await locator.count()
    state = ElementState(target=target, count=count, locator=locator)
    if count == 0:
        return state

    first = locator.first
    state.visible = await first.is_visible()
    if with_text:
        texts = await first.all_inner_texts()
        state.text = texts[0] if texts else None
    if attribute:
        state.attribute = await first.evaluate_all(_FIRST_ATTRIBUTE_JS, attribute)
    return state


def text_visible(
    page: Page,
    text: TextMatcher,
    timeout: Optional[int] = None,
) -> Condition:
    """The first element containing ``text`` is visible."""
    target = describe_text(text)
    return Condition(
        description=f"{target} is visible",
        query=lambda: snapshot(page.get_by_text(text), target),
        predicate=lambda state: state.visible,
        timeout=timeout,
    )


def selector_visible(
    page: Page,
    selector: str,
    timeout: Optional[int] = None,
) -> Condition:
    """The first element matching ``selector`` is visible."""
    return Condition(
        description=f"{selector} is visible",
        query=lambda: snapshot(page.locator(selector), selector),
        predicate=lambda state: state.visible,
        timeout=timeout,
    )


def selector_exists(
    page: Page,
    selector: str,
    timeout: Optional[int] = None,
) -> Condition:
    """At least one element matches ``selector``, visible or not."""
    return Condition(
        description=f"{selector} exists",
        query=lambda: snapshot(page.locator(selector), selector),
        predicate=lambda state: state.exists,
        timeout=timeout,
    )


def count_equals(
    page: Page,
    selector: str,
    expected: int,
    timeout: Optional[int] = None,
) -> Condition:
    """Exactly ``expected`` elements match ``selector``."""
    return Condition(
        description=f"{selector} has {expected} elements",
        query=lambda: snapshot(page.locator(selector), selector),
        predicate=lambda state: state.count == expected,
        timeout=timeout,
    )


def contains_text(
    page: Page,
    selector: str,
    text: str,
    timeout: Optional[int] = None,
) -> Condition:
    """The first element matching ``selector`` contains ``text``."""
    return Condition(
        description=f"{selector} contains {text!r}",
        query=lambda: snapshot(page.locator(selector), selector, with_text=True),
        predicate=lambda state: state.text is not None and text in state.text,
        timeout=timeout,
    )


def has_attribute(
    page: Page,
    selector: str,
    name: str,
    value: Optional[str] = None,
    timeout: Optional[int] = None,
) -> Condition:
    """
    The first element matching ``selector`` carries attribute ``name``.

    When ``value`` is given the attribute must also equal it.
    """
    expectation = f"[{name}={value!r}]" if value is not None else f"[{name}]"

    def predicate(state: ElementState) -> Any:
        if state.attribute is None:
            return False
        return value is None or state.attribute == value

    return Condition(
        description=f"{selector} has attribute {expectation}",
        query=lambda: snapshot(page.locator(selector), selector, attribute=name),
        predicate=predicate,
        timeout=timeout,
    )


__all__ = [
    "ElementState",
    "TextMatcher",
    "contains_text",
    "count_equals",
    "describe_text",
    "has_attribute",
    "selector_exists",
    "selector_visible",
    "snapshot",
    "text_visible",
]
