"""Menu structure and node representation."""
from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class LeafAction:
    """A menu entry that launches an external command."""
    label: str
    command: Tuple[str, ...]
    working_dir: Optional[str] = None

    @property
    def is_submenu(self):
        return False


@dataclass(frozen=True)
class SubMenu:
    """A menu entry owning an ordered, non-empty list of child entries."""
    label: str
    children: Tuple["MenuEntry", ...]

    @property
    def is_submenu(self):
        return True


MenuEntry = Union[LeafAction, SubMenu]
