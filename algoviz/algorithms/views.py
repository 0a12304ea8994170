"""
views.py — Auxiliary Data-Structure Views
==========================================
Each Step carries a tuple of named views describing the algorithm's
helper structures at that instant (queue, stack, distance table, colours,
components, …).  Four variants cover every executor:

    ListView   – ordered labels            "queue": ["A", "C"]
    TableView  – key → display value       "distances": {"A": "0", "B": "∞"}
    ValueView  – one scalar                "totalWeight": 7
    GroupView  – named groups of labels    "components": {"Component 1": ["A", "B"]}

All values are already formatted for display.  A renderer dispatches on
`kind` or uses the capability methods:
    as_list()   – ListView
    as_table()  – TableView, GroupView
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union


@dataclass(frozen=True)
class ListView:
    name:  str
    items: Tuple[str, ...] = ()
    kind = "list"

    def as_list(self) -> List[str]:
        return list(self.items)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "name": self.name, "items": list(self.items)}


@dataclass(frozen=True)
class TableView:
    name: str
    rows: Tuple[Tuple[str, Any], ...] = ()
    kind = "table"

    def as_table(self) -> Dict[str, Any]:
        return dict(self.rows)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "name": self.name, "rows": self.as_table()}


@dataclass(frozen=True)
class ValueView:
    name:  str
    value: Any = None
    kind = "value"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "name": self.name, "value": self.value}


@dataclass(frozen=True)
class GroupView:
    name:   str
    groups: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()
    kind = "groups"

    def as_table(self) -> Dict[str, List[str]]:
        return {key: list(members) for key, members in self.groups}

    def to_dict(self) -> dict:
        return {"kind": self.kind, "name": self.name, "groups": self.as_table()}


DataView = Union[ListView, TableView, ValueView, GroupView]


# ---------------------------------------------------------------------------
# Constructors that freeze mutable inputs
# ---------------------------------------------------------------------------
def list_view(name: str, items: Iterable[str]) -> ListView:
    return ListView(name, tuple(items))


def table_view(name: str, rows: Mapping[str, Any]) -> TableView:
    return TableView(name, tuple(rows.items()))


def value_view(name: str, value: Any) -> ValueView:
    return ValueView(name, value)


def group_view(name: str, groups: Mapping[str, Iterable[str]]) -> GroupView:
    return GroupView(name, tuple((key, tuple(members)) for key, members in groups.items()))
