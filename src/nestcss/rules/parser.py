"""Single-pass parser for nested rule text.

Syntax example::

    body > div {
        img { width: 50%; }
        @media (min-width: 720px) {
            img { width: 20rem; }
        }
        margin: auto {
            right: 1rem;
        }
    }

parses to::

    {
        "body > div": {"margin": "auto", "margin-right": "1rem"},
        "body > div img": {"width": "50%"},
        "@media (min-width: 720px)": {"body > div img": {"width": "20rem"}},
    }

Selectors are flattened into one key per scope. At-rule bodies are always
attached to the root tree, whatever their nesting depth.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from nestcss.errors import StyleSyntaxError
from nestcss.rules.model import BlockKind, RuleTree, Token
from nestcss.rules.selectors import combine_selectors, is_valid_selector

__all__ = ["ParserState", "normalize", "parse_rules", "tokenize"]

logger = logging.getLogger(__name__)

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_WHITESPACE_RE = re.compile(r"\s+")

# key: value  (value runs up to the next colon)
_PROPERTY_RE = re.compile(r"(?P<key>[\w-]+)\s*:\s*(?P<value>[^:]*)")

# margin: auto { ... }  -- the space after ':' is mandatory
_PROPERTY_SEGMENT_RE = re.compile(r"\w:(\s|$)")

_DELIMITERS = "{};"


def normalize(text: str) -> str:
    """Strip comments, then collapse whitespace runs to a single space."""
    text = _BLOCK_COMMENT_RE.sub("", text)
    text = _LINE_COMMENT_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).replace(" ,", ",")


def tokenize(text: str) -> Iterator[Token]:
    """Split *text* at every unescaped ``{``, ``}`` and ``;``.

    Always ends with one end-of-text token (empty delimiter).
    """
    start = 0
    index = 0
    length = len(text)
    while index < length:
        ch = text[index]
        if ch == "\\":
            index += 2
            continue
        if ch in _DELIMITERS:
            yield Token(text[start:index].strip(), ch, index)
            start = index + 1
        index += 1
    yield Token(text[start:].strip(), "", length)


def _parse_property(text: str) -> tuple[str, str | None]:
    match = _PROPERTY_RE.search(text)
    if match is None:
        return text, None
    return match.group("key"), match.group("value")


@dataclass
class ParserState:
    """All of the scanning state for one parse call.

    ``block_kinds`` has one entry per open brace. ``active_kinds`` only
    tracks selector and at-rule blocks, and decides where properties land.
    """

    source: str = ""
    tree: RuleTree = field(default_factory=dict)
    block_kinds: list[BlockKind] = field(default_factory=list)
    active_kinds: list[BlockKind] = field(default_factory=list)
    selector_segments: list[str] = field(default_factory=list)
    property_keys: list[str] = field(default_factory=list)
    selector_scopes: list[RuleTree] = field(default_factory=list)
    grouping_scopes: list[RuleTree] = field(default_factory=list)
    current_selector: str | None = None

    def __post_init__(self) -> None:
        self.selector_scopes.append(self.tree)
        self.grouping_scopes.append(self.tree)

    @property
    def depth(self) -> int:
        return len(self.block_kinds)

    def full_key(self, key: str = "") -> str:
        """Join the open property segments and *key* with dashes."""
        if not self.property_keys:
            return key
        prefix = "-".join(self.property_keys)
        return f"{prefix}-{key}" if key else prefix

    def target(self) -> RuleTree:
        """The tree that properties are currently written into."""
        if self.active_kinds and self.active_kinds[-1] is BlockKind.AT_RULE:
            return self.grouping_scopes[-1]
        return self.selector_scopes[-1]

    # --- delimiter actions ----------------------------------------------------

    def open_block(self, token: Token) -> None:
        text = token.text
        if text.startswith("@"):
            kind = BlockKind.AT_RULE
            # A repeated at-rule replaces the earlier block.
            at_rule: RuleTree = {}
            self.tree[text] = at_rule
            self.grouping_scopes.append(at_rule)
        elif is_valid_selector(text):
            kind = BlockKind.SELECTOR
            self.selector_segments.append(text)
            self.current_selector = combine_selectors(self.selector_segments)
            self.selector_scopes.append(
                self._child(self.grouping_scopes[-1], self.current_selector)
            )
        elif _PROPERTY_SEGMENT_RE.search(text):
            kind = BlockKind.PROPERTY_SEGMENT
            key, value = _parse_property(text)
            self.property_keys.append(key)
            if value:
                self.target()[self.full_key()] = value
        else:
            raise StyleSyntaxError(f"Illegal selector {text!r}", token.position)

        self.block_kinds.append(kind)
        if kind is not BlockKind.PROPERTY_SEGMENT:
            self.active_kinds.append(kind)

    def close_block(self, token: Token) -> None:
        # Text right before '}' is never a property: it needs its own ';'.
        if not self.block_kinds:
            start = max(token.position - 100, 0)
            snippet = self.source[start : token.position + 1]
            raise StyleSyntaxError(
                f"Unmatched '}}' at #{token.position}: \"...{snippet}\" // <-",
                token.position,
            )

        kind = self.block_kinds.pop()
        if kind is BlockKind.PROPERTY_SEGMENT:
            self.property_keys.pop()
        elif kind is BlockKind.SELECTOR:
            self.selector_segments.pop()
            self.current_selector = combine_selectors(self.selector_segments)
            self.selector_scopes.pop()
        elif kind is BlockKind.AT_RULE:
            self.grouping_scopes.pop()

        if self.active_kinds and self.active_kinds[-1] is kind:
            self.active_kinds.pop()

    def statement(self, token: Token) -> None:
        text = token.text
        if text.startswith("@"):
            self.tree[text] = None
            return

        key, value = _parse_property(text)
        if key and value:
            self.target()[self.full_key(key)] = value

    def finish(self) -> RuleTree | None:
        if self.depth > 0:
            raise StyleSyntaxError("Unmatched '{'", len(self.source))

        # Only one level is pruned; nested empty bodies are kept as-is.
        for key in [k for k, v in self.tree.items() if isinstance(v, dict) and not v]:
            del self.tree[key]
        return self.tree or None

    @staticmethod
    def _child(parent: RuleTree, key: str) -> RuleTree:
        child = parent.get(key)
        if not isinstance(child, dict):
            child = parent[key] = {}
        return child


def parse_rules(text: str) -> RuleTree | None:
    """Parse nested rule text into a RuleTree.

    Returns None for non-string or empty input, and when no rule or property
    survives. Raises StyleSyntaxError on illegal selectors and unbalanced
    braces.
    """
    if not isinstance(text, str) or not text:
        return None

    source = normalize(text)
    state = ParserState(source=source)
    for token in tokenize(source):
        if token.delimiter == "{":
            state.open_block(token)
        elif token.delimiter == "}":
            state.close_block(token)
        else:
            state.statement(token)

    tree = state.finish()
    logger.debug("Parsed %d top-level entries", len(tree) if tree else 0)
    return tree
