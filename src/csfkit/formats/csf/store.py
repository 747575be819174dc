"""
Entry Store - the in-memory index of a CSF string table.

Entries are keyed by the upper-case label name, so lookups are
case-insensitive while each Label keeps the casing it was written with.
`order` is the serialization sequence and always holds exactly the keys
of `entries`. `categories` groups label names by the prefix before the
first ':' (or "" when there is none), fixed at first sight of a name.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from .sections import CsfHeader, Entry, language_name

logger = logging.getLogger(__name__)


def category_name(label_name: str) -> str:
    """Upper-case category prefix of a label name."""
    upper = label_name.upper()
    idx = upper.find(":")
    if idx == -1:
        return ""
    return upper[:idx]


class EntryStore:
    """
    Ordered, category-aware label/value index.

    Not safe for concurrent mutation; callers own the store for the
    duration of each call.
    """

    def __init__(self, header: Optional[CsfHeader] = None):
        self.header = header if header is not None else CsfHeader()
        self.entries: Dict[str, Entry] = {}
        self.order: List[str] = []
        self.categories: Dict[str, List[str]] = {}

    # -- header scalars ----------------------------------------------------

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def num_labels(self) -> int:
        return self.header.num_labels

    @property
    def num_strings(self) -> int:
        return self.header.num_strings

    @property
    def unused(self) -> int:
        return self.header.unused

    @property
    def language(self) -> int:
        return self.header.language

    def language_name(self) -> str:
        """Human-readable name of the header language."""
        return language_name(self.header.language)

    def _update_counts(self):
        self.header.num_labels = len(self.entries)
        self.header.num_strings = len(self.entries)

    # -- lookup ------------------------------------------------------------

    def lookup(self, name: str) -> Optional[Entry]:
        """Find an entry by label name, ignoring case."""
        return self.entries.get(name.upper())

    def category_of(self, name: str) -> Optional[str]:
        """Category the label was filed under, or None if unknown."""
        key = name.upper()
        if key not in self.entries:
            return None
        return category_name(key)

    def names(self) -> List[str]:
        """Label names in serialization order, original casing."""
        return [self.entries[key].label.name_string for key in self.order]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: str) -> bool:
        return name.upper() in self.entries

    def __iter__(self) -> Iterator[Entry]:
        for key in self.order:
            yield self.entries[key]

    # -- mutation ----------------------------------------------------------

    def _add_category(self, label_name: str):
        self.categories.setdefault(category_name(label_name), []).append(label_name)

    def _remove_category(self, key: str):
        category = category_name(key)
        members = self.categories.get(category)
        if members is None:
            return
        members[:] = [m for m in members if m.upper() != key]
        if not members:
            del self.categories[category]

    def _rename_category(self, key: str, label_name: str):
        members = self.categories.get(category_name(key))
        if members is None:
            return
        members[:] = [label_name if m.upper() == key else m for m in members]

    def ingest(self, entry: Entry):
        """
        Fold a freshly decoded entry into the store.

        The first occurrence of a name fixes its position and category,
        the last occurrence supplies the value. This lets files with
        duplicate labels load without losing their layout.
        """
        key = entry.key
        if key not in self.entries:
            self._add_category(entry.label.name_string)
            self.order.append(key)
        else:
            logger.warning(f"Duplicate label '{entry.label.name_string}' at "
                           f"{entry.label.offset:#x}, keeping the later value")
        self.entries[key] = entry

    def write_before(self, entry: Entry, overwrite_label_casing: bool = False,
                     successor: str = ""):
        """
        Write entry into the store.

        An existing label keeps its position and category, and its stored
        name bytes unless overwrite_label_casing is set. A new label is inserted
        right before successor when that label exists, otherwise appended.
        The successor must be unique in `order`.
        """
        key = entry.key
        successor_key = successor.upper()

        if key in self.entries:
            if not overwrite_label_casing:
                entry = replace(entry, label=replace(entry.label, name=self.entries[key].label.name))
            else:
                self._rename_category(key, entry.label.name_string)
        elif successor and successor_key in self.entries:
            pos = self.order.index(successor_key)
            self.order.insert(pos, key)
            self._add_category(entry.label.name_string)
        else:
            self.order.append(key)
            self._add_category(entry.label.name_string)

        self.entries[key] = entry
        self._update_counts()

    def write(self, entry: Entry, overwrite_label_casing: bool = False):
        """Write entry, appending it when the label is new."""
        self.write_before(entry, overwrite_label_casing, "")

    def remove(self, name: str):
        """Remove a label; unknown names are ignored."""
        if not self.order:
            return
        key = name.upper()
        if key not in self.entries:
            return
        del self.entries[key]
        self.order.remove(key)
        self._remove_category(key)
        self._update_counts()

    def dump(self) -> List[str]:
        """Every pair as "KEY => Label -> Value , Extra", in order."""
        return [f"{key} => {self.entries[key]}" for key in self.order]


def merge(source: EntryStore, into: EntryStore) -> int:
    """
    Overwrite values in `into` with those from `source`.

    Only labels already present in `into` are touched; labels that only
    exist in `source` are never added. Returns the number of labels updated.
    """
    updated = 0
    for key in list(into.order):
        entry = source.entries.get(key)
        if entry is None:
            continue
        into.write(replace(entry, value=replace(entry.value)), False)
        updated += 1
    logger.info(f"Merged {updated} of {len(into.order)} labels")
    return updated
