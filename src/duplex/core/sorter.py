"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for duplicate groups — zero dependencies outside core.
"""
from functools import cmp_to_key
from typing import List, Union
from duplex.core.models import DuplicateGroup, GroupCollection


class Sorter:
    """
    Orders files inside groups and groups inside a collection.

    Files inside a group: ascending by path.
    Groups: descending by common file size; equal sizes put the group whose
    first path is lexicographically largest first.
    """

    @staticmethod
    def sort_files_inside_groups(groups: GroupCollection) -> None:
        """Sorts every group's members by path, in place."""
        for group in groups.values():
            group.sort_by_path()

    @staticmethod
    def compare_groups(a: DuplicateGroup, b: DuplicateGroup) -> int:
        if a.size != b.size:
            return -1 if a.size > b.size else 1
        first_a, first_b = a.files[0].path, b.files[0].path
        if first_a == first_b:
            return 0
        return -1 if first_a > first_b else 1

    @staticmethod
    def order_groups(groups: GroupCollection) -> List[Union[str, int]]:
        """
        Returns group keys in display order.
        Member lists must already be sorted by path.
        """
        compare = cmp_to_key(lambda ka, kb: Sorter.compare_groups(groups[ka], groups[kb]))
        return sorted(groups.keys(), key=compare)
