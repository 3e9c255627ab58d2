"""Feature dictionary - canonical feature names and their checkbox label aliases"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from sticker_sync.core.exceptions import FeatureDictionaryException
from sticker_sync.core.logging import logger
from sticker_sync.utils.text.cleaning import normalize_label


class FeatureDictionary:
    """Immutable canonical -> aliases table with a reverse index.

    Keys are compared through normalize_label(), so lookups ignore case and
    surrounding punctuation. Alias order is preserved; it is the preference
    order used when several aliases exist on the same form.

    Both indexes are built once in the constructor and never mutated, so one
    instance can be shared by any number of planning passes.

    Usage:
        dictionary = FeatureDictionary({"Backup Camera": ["Rear View Camera"]})
        dictionary.aliases_of("backup camera")      # ["Rear View Camera"]
        dictionary.canonicals_of("REAR VIEW CAMERA")  # ["Backup Camera"]
    """

    def __init__(self, mapping: Mapping[str, Iterable[str]]):
        forward: dict[str, tuple[str, ...]] = {}
        names: dict[str, str] = {}
        reverse: dict[str, list[str]] = {}

        for raw_canonical, raw_aliases in mapping.items():
            canonical = str(raw_canonical).strip()
            key = normalize_label(canonical)
            if not key:
                raise FeatureDictionaryException(str(raw_canonical), "empty canonical name")
            if key in forward:
                raise FeatureDictionaryException(canonical, "duplicate canonical name")

            if isinstance(raw_aliases, str):
                raw_aliases = [raw_aliases]
            aliases: list[str] = []
            seen: set[str] = set()
            for alias in raw_aliases or []:
                alias = str(alias).strip()
                alias_key = normalize_label(alias)
                if not alias_key or alias_key in seen:
                    continue
                seen.add(alias_key)
                aliases.append(alias)
            if not aliases:
                raise FeatureDictionaryException(canonical, "alias list is empty")

            forward[key] = tuple(aliases)
            names[key] = canonical
            for alias in aliases:
                reverse.setdefault(normalize_label(alias), []).append(canonical)

        self._forward = MappingProxyType(forward)
        self._names = MappingProxyType(names)
        self._reverse = MappingProxyType({k: tuple(v) for k, v in reverse.items()})

        logger.debug(
            f"Feature dictionary built: {len(forward)} canonicals, {len(reverse)} distinct aliases"
        )

    @classmethod
    def empty(cls) -> "FeatureDictionary":
        return cls({})

    def aliases_of(self, canonical_feature: str) -> list[str]:
        """Aliases of a canonical feature in preference order ([] if unknown)"""
        return list(self._forward.get(normalize_label(canonical_feature), ()))

    def canonicals_of(self, label: str) -> list[str]:
        """Canonical features that list this label as an alias ([] if none)"""
        return list(self._reverse.get(normalize_label(label), ()))

    def canonical_names(self) -> list[str]:
        return list(self._names.values())

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for key, canonical in self._names.items():
            yield canonical, list(self._forward[key])

    def __contains__(self, canonical_feature: object) -> bool:
        return isinstance(canonical_feature, str) and normalize_label(canonical_feature) in self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def __repr__(self) -> str:
        return f"FeatureDictionary({len(self)} canonicals)"
