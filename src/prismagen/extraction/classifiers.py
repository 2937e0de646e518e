"""Strategies deciding which declarations become schema models."""

import re
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

DEFAULT_PINNED_MODELS = ("Member", "Visit", "Reward")
NON_MODEL_SUFFIXES = ("Props", "State", "Config", "Options")
DEFAULT_MODEL_MARKER = "@model"

_INTERFACE_PREFIX = re.compile(r"^I[A-Z]")
_STRICT_INTERFACE_PREFIX = re.compile(r"^I")


@runtime_checkable
class ModelClassifier(Protocol):
    """Decides whether a named declaration should be emitted as a model."""

    def is_model(self, name: str, doc_comment: str) -> bool:
        """Return True when the declaration should be treated as a model.

        Args:
            name: Declared type name
            doc_comment: Cleaned leading documentation comment (may be empty)

        """
        ...


def has_non_model_suffix(name: str) -> bool:
    """Check whether a type name ends in a props/state/config style suffix."""
    return name.endswith(NON_MODEL_SUFFIXES)


class NamingConventionClassifier:
    """Classifies declarations by naming convention.

    Pinned names are always accepted. Any other name must start with an
    uppercase letter, must not follow the ``IName`` interface convention and
    must not end in a non-model suffix such as ``Props``.

    By default only ``I`` followed by another capital counts as the interface
    prefix, so ``Item`` and ``Invoice`` are models. With
    ``strict_interface_prefix`` every name starting with ``I`` is rejected.
    """

    def __init__(
        self,
        pinned_models: Iterable[str] = DEFAULT_PINNED_MODELS,
        strict_interface_prefix: bool = False,
    ) -> None:
        self._pinned = frozenset(pinned_models)
        self._interface_prefix = (
            _STRICT_INTERFACE_PREFIX if strict_interface_prefix else _INTERFACE_PREFIX
        )

    def is_model(self, name: str, doc_comment: str) -> bool:
        """Return True for pinned names and capitalised non-utility names."""
        if name in self._pinned:
            return True

        if not name[:1].isupper():
            return False

        return not (self._interface_prefix.match(name) or has_non_model_suffix(name))


class MarkerCommentClassifier:
    """Accepts only declarations whose doc comment carries an opt-in marker."""

    def __init__(self, marker: str = DEFAULT_MODEL_MARKER) -> None:
        self._marker = marker

    def is_model(self, name: str, doc_comment: str) -> bool:
        """Return True when the marker appears in the doc comment."""
        return self._marker in doc_comment
