from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class GroupMatch:
    """Outcome of a group selection; ``group`` is ``None`` on no-match."""

    group: Optional[str]

    @property
    def is_correct(self) -> bool:
        return self.group is not None

    def as_dict(self) -> Dict[str, Any]:
        return {"group": self.group, "is_correct": self.is_correct}


# PUBLIC_INTERFACE
def group_match(selected: Sequence[str], catalog: Mapping[str, str], group_size: int) -> GroupMatch:
    """Return the tag shared by every selected item, or no-match.

    The selection must hold exactly ``group_size`` distinct, known ids.
    """
    ids = set(selected)
    if group_size <= 0 or len(selected) != group_size or len(ids) != group_size:
        return GroupMatch(group=None)
    if any(item not in catalog for item in ids):
        return GroupMatch(group=None)

    tags = {catalog[item] for item in ids}
    if len(tags) != 1:
        return GroupMatch(group=None)
    return GroupMatch(group=tags.pop())
