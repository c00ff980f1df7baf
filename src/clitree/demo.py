"""Sample hierarchy: namespaces holding secrets holding selectable values."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from clitree.theme import fg_hex

INDIGO_BLUE = "#89CFF0"
RED = "#FF0000"
WHITE = "#FFFFFF"


@dataclass
class Value:
    name: str
    selected: bool = False

    def display_name(self) -> str:
        if self.selected:
            return self.name + " (x)"
        return self.name + " ( )"

    def render_label(self) -> str:
        return fg_hex(WHITE, self.display_name())

    def mutate(self) -> None:
        self.selected = not self.selected

    def children(self) -> Sequence[Value]:
        return ()


@dataclass
class Secrets:
    name: str
    values: list[Value] = field(default_factory=list)

    def display_name(self) -> str:
        return self.name

    def render_label(self) -> str:
        return fg_hex(RED, self.name, strong=True)

    def mutate(self) -> None:
        pass

    def children(self) -> Sequence[Value]:
        return self.values


@dataclass
class Namespace:
    name: str
    secrets: list[Secrets] = field(default_factory=list)

    def display_name(self) -> str:
        return self.name

    def render_label(self) -> str:
        return fg_hex(INDIGO_BLUE, self.name, strong=True)

    def mutate(self) -> None:
        pass

    def children(self) -> Sequence[Secrets]:
        return self.secrets


def sample_namespaces() -> list[Namespace]:
    return [
        Namespace(
            "namespace 1",
            [Secrets("secrets", [Value("value1"), Value("value2")])],
        ),
        Namespace(
            "namespace 2",
            [Secrets("secrets", [Value("value3"), Value("value4")])],
        ),
    ]


def selected_values(namespaces: Sequence[Namespace]) -> list[str]:
    """Names of selected values, in tree order."""
    return [
        value.name
        for namespace in namespaces
        for secrets in namespace.secrets
        for value in secrets.values
        if value.selected
    ]
