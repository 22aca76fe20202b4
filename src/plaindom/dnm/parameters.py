"""Tag policies and normalization switches for DOM-to-plaintext extraction.

The extraction engine walks a document tree and, for every element, asks
:meth:`DNMParameters.resolve` whether to enter it, replace it with a token or
drop it.  The boolean switches on :class:`DNMParameters` control what happens
to the extracted text itself.  Nothing here walks trees or touches documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Enter:
    """Recurse into the element (default behaviour)."""

    def to_dict(self) -> dict[str, Any]:
        return {"action": "enter"}


@dataclass(frozen=True, slots=True)
class Normalize:
    """Replace the whole subtree by a fixed token."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Normalize text must be str, got {type(self.text).__name__}")

    def to_dict(self) -> dict[str, Any]:
        return {"action": "normalize", "text": self.text}


@dataclass(frozen=True, slots=True)
class FunctionNormalize:
    """Replace the subtree by a token computed from the element at traversal time.

    The callback must not depend on shared mutable state: one parameter set is
    shared by every concurrent traversal.
    """

    callback: Callable[[Any], str] = field(repr=False)

    def __post_init__(self) -> None:
        if not callable(self.callback):
            raise TypeError("FunctionNormalize callback must be callable")

    def replacement(self, node: Any) -> str:
        return self.callback(node)

    def to_dict(self) -> dict[str, Any]:
        return {"action": "function_normalize"}


@dataclass(frozen=True, slots=True)
class Skip:
    """Drop the element and everything below it."""

    def to_dict(self) -> dict[str, Any]:
        return {"action": "skip"}


SpecialTagsOption = Union[Enter, Normalize, FunctionNormalize, Skip]

ENTER = Enter()
SKIP = Skip()


def _freeze_options(options: Mapping[str, SpecialTagsOption] | None) -> Mapping[str, SpecialTagsOption]:
    return MappingProxyType(dict(options or {}))


@dataclass(frozen=True, slots=True)
class DNMParameters:
    """Immutable extraction parameters, safe to share across traversals.

    ``special_tag_name_options`` always wins over ``special_tag_class_options``
    when both match an element.
    """

    special_tag_name_options: Mapping[str, SpecialTagsOption] = field(default_factory=dict)
    special_tag_class_options: Mapping[str, SpecialTagsOption] = field(default_factory=dict)
    # Merge whitespace runs into a single space. Tokens are not affected.
    normalize_white_spaces: bool = True
    wrap_tokens: bool = False
    normalize_unicode: bool = False
    stem_words_once: bool = False
    # Re-apply the stemmer until it stops changing the word.
    stem_words_full: bool = False
    # Stemming already lowercases.
    convert_to_lowercase: bool = False
    support_back_mapping: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "special_tag_name_options", _freeze_options(self.special_tag_name_options))
        object.__setattr__(self, "special_tag_class_options", _freeze_options(self.special_tag_class_options))

    @classmethod
    def default(cls) -> "DNMParameters":
        """Whitespace normalization and back mapping, nothing domain specific."""

        return cls()

    @classmethod
    def llamapun_normalization(cls) -> "DNMParameters":
        """Normalization tuned for LaTeXML-generated math documents."""

        name_options: dict[str, SpecialTagsOption] = {
            "math": Normalize("mathformula"),
            "cite": Normalize("CitationElement"),
            "img": SKIP,
            "table": SKIP,
            "head": SKIP,
            "footer": SKIP,
        }
        class_options: dict[str, SpecialTagsOption] = {
            "ltx_equation": Normalize("\nmathformula\n"),
            "ltx_equationgroup": Normalize("\nmathformula\n"),
            "ltx_ref": Normalize("REF"),
            "ltx_authors": SKIP,
            "ltx_TOC": SKIP,
            "ltx_note_mark": SKIP,
            "ltx_note_outer": SKIP,
            "ltx_bibliography": SKIP,
            # Caption numbering would otherwise leak into the language target.
            "ltx_tag_figure": SKIP,
            "ltx_tag_table": SKIP,
        }
        return cls.default().with_overrides(
            special_tag_name_options=name_options,
            special_tag_class_options=class_options,
            # Newlines are meaningful to the tokenizer downstream.
            normalize_white_spaces=False,
            # Keeps x$\prime$ from becoming the single word "xmathformula".
            wrap_tokens=True,
            normalize_unicode=True,
        )

    def __hash__(self) -> int:
        flags = tuple(getattr(self, flag) for flag in FLAG_NAMES)
        return hash(
            (
                frozenset(self.special_tag_name_options.items()),
                frozenset(self.special_tag_class_options.items()),
                flags,
            )
        )

    def with_overrides(self, **changes: Any) -> "DNMParameters":
        """Return a copy with the named fields replaced."""

        return replace(self, **changes)

    def resolve(self, tag_name: str, class_names: Iterable[str] = ()) -> SpecialTagsOption:
        """Decide how an element with this tag name and classes is handled.

        An exact tag-name rule is returned without looking at classes.  Classes
        are probed in the order given and the first rule found wins.  With no
        match the element is entered.  A single string is treated as a raw
        ``class`` attribute and split on whitespace.
        """

        option = self.special_tag_name_options.get(tag_name)
        if option is not None:
            return option

        if isinstance(class_names, str):
            class_names = class_names.split()

        for class_name in class_names:
            option = self.special_tag_class_options.get(class_name)
            if option is not None:
                return option

        return ENTER

    def resolve_node(self, node: Any) -> SpecialTagsOption:
        """Resolve an lxml element or BeautifulSoup tag directly."""

        from plaindom.dnm.nodes import class_names_of, tag_name_of

        tag_name = tag_name_of(node)
        if tag_name is None:
            return ENTER
        return self.resolve(tag_name, class_names_of(node))

    def check(self) -> list["Diagnostic"]:
        return check(self)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "special_tag_name_options": {
                name: option.to_dict() for name, option in sorted(self.special_tag_name_options.items())
            },
            "special_tag_class_options": {
                name: option.to_dict() for name, option in sorted(self.special_tag_class_options.items())
            },
        }
        for flag in FLAG_NAMES:
            payload[flag] = getattr(self, flag)
        return payload


FLAG_NAMES: tuple[str, ...] = tuple(
    item.name for item in fields(DNMParameters) if not item.name.startswith("special_tag_")
)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One known-inconsistent parameter combination."""

    code: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


def check(params: DNMParameters) -> list[Diagnostic]:
    """Report parameter combinations that don't make sense.

    This does not catch every mistake, and it never changes ``params``.
    """

    diagnostics: list[Diagnostic] = []
    stemming = params.stem_words_once or params.stem_words_full

    if params.stem_words_once and params.stem_words_full:
        diagnostics.append(
            Diagnostic(
                code="redundant-stemming",
                message="Parameter options stem_words_once and stem_words_full are both set",
            )
        )
    if stemming and params.convert_to_lowercase:
        diagnostics.append(
            Diagnostic(
                code="redundant-lowercase",
                message=(
                    "Parameter option convert_to_lowercase is redundant, "
                    "because stemming converts to lowercase already"
                ),
            )
        )
    if stemming and params.support_back_mapping:
        diagnostics.append(
            Diagnostic(
                code="unsupported-back-mapping",
                message="Parameter option support_back_mapping does not work in combination with word stemming yet",
            )
        )

    return diagnostics


def log_diagnostics(diagnostics: Iterable[Diagnostic], log: logging.Logger | None = None) -> int:
    """Emit diagnostics as warnings and return how many were logged."""

    target = log or logger
    count = 0
    for diagnostic in diagnostics:
        target.warning("dnm parameters [%s]: %s", diagnostic.code, diagnostic.message)
        count += 1
    return count


@dataclass(slots=True)
class RuntimeParseData:
    """Scratch state owned by a single traversal.

    ``had_whitespace`` starts out true so leading whitespace is skipped.
    ``chars`` holds one code point per entry; back-mapping offsets count code
    points, never encoded bytes.
    """

    had_whitespace: bool = True
    chars: list[str] = field(default_factory=list)

    @property
    def plaintext(self) -> str:
        return "".join(self.chars)
