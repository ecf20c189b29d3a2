"""
Hierarchical Key/Value Store.

Holds the values supplied at run time (parameter files, command line) as
text. Keys are dotted paths: "Newton.MaxIterations" is the value key
"MaxIterations" of the sub-tree "Newton". Typed conversion is left to the
caller (see ParamKind.parse).
"""

from typing import Dict, List, Optional


class ParameterTree:
    """
    A tree of string values addressed by dotted paths.

    Attributes:
        _values: Value keys of this level mapped to their text, in insertion order.
        _subs: Sub-tree names of this level mapped to the sub-trees.
    """

    def __init__(self):
        self._values: Dict[str, str] = {}
        self._subs: Dict[str, "ParameterTree"] = {}

    def __setitem__(self, key: str, value: str) -> None:
        head, _, rest = key.partition('.')
        if rest:
            self._subs.setdefault(head, ParameterTree())[rest] = value
        else:
            self._values[key] = str(value)

    def __getitem__(self, key: str) -> str:
        head, _, rest = key.partition('.')
        if rest:
            if head not in self._subs:
                raise KeyError(key)
            return self._subs[head][rest]
        return self._values[key]

    def __contains__(self, key: str) -> bool:
        return self.has_key(key)

    def has_key(self, key: str) -> bool:
        head, _, rest = key.partition('.')
        if rest:
            return head in self._subs and self._subs[head].has_key(rest)
        return key in self._values

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        if self.has_key(key):
            return self[key]
        return default

    def value_keys(self) -> List[str]:
        return list(self._values.keys())

    def sub_keys(self) -> List[str]:
        return list(self._subs.keys())

    def sub(self, name: str) -> "ParameterTree":
        return self._subs[name]

    def __len__(self) -> int:
        return len(self._values) + sum(len(sub) for sub in self._subs.values())


def get_flattened_key_list(tree: ParameterTree, prefix: str = "") -> List[str]:
    """
    List the dotted paths of all values in a tree.

    Value keys of a level come before the keys of its sub-trees.
    """
    keys = [prefix + key for key in tree.value_keys()]

    for sub_key in tree.sub_keys():
        keys.extend(get_flattened_key_list(tree.sub(sub_key), prefix + sub_key + '.'))

    return keys
