from __future__ import annotations

from functools import lru_cache

from .base import Rule, RuleRegistry, Walker
from .block import BlockquoteRule, DetailsRule, HorizontalRule, NonContentRule, ParagraphRule
from .code import InlineCodeRule, PreRule
from .heading import HeadingRule
from .inline import (
    EmphasisRule,
    HtmlPassthroughRule,
    LineBreakRule,
    StrikethroughRule,
    StrongRule,
)
from .link import LinkRule
from .lists import (
    DefinitionDescriptionRule,
    DefinitionListRule,
    DefinitionTermRule,
    ListItemRule,
    ListRule,
)
from .media import FigureRule, ImageRule
from .table import TableRule

_DEFAULT_RULES: tuple[type[Rule], ...] = (
    HeadingRule,
    ParagraphRule,
    PreRule,
    BlockquoteRule,
    ListRule,
    ListItemRule,
    DefinitionListRule,
    DefinitionTermRule,
    DefinitionDescriptionRule,
    TableRule,
    HorizontalRule,
    DetailsRule,
    FigureRule,
    LinkRule,
    ImageRule,
    StrongRule,
    EmphasisRule,
    StrikethroughRule,
    InlineCodeRule,
    LineBreakRule,
    HtmlPassthroughRule,
    NonContentRule,
)


@lru_cache(maxsize=1)
def default_registry() -> RuleRegistry:
    return RuleRegistry(rule_cls() for rule_cls in _DEFAULT_RULES)


__all__ = [
    "Rule",
    "RuleRegistry",
    "Walker",
    "default_registry",
]
