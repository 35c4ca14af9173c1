"""Loading of the CSV menu file and the optional YAML settings file.

Menu file format, one row per entry::

    label,working_dir,command[,parent]

An empty ``command`` makes the row a sub-menu. A sub-menu's children are
the later rows whose ``parent`` column names it, or, when there are none,
the entries of ``<working_dir>/menu.csv``.
"""
import copy
import csv
import shlex
import logging
from pathlib import Path

import yaml

from .errors import ConfigError
from .menu import LeafAction, SubMenu

logger = logging.getLogger(__name__)

MENU_FILE = "menu.csv"
SETTINGS_FILE = "config.yaml"
COLUMNS = ("label", "working_dir", "command", "parent")

DEFAULT_SETTINGS = {
    'menu_file': MENU_FILE,
    'display': {
        'title': 'Term Commander',
        'marker': '>',
    },
    'launcher': {
        'wait_for_key': False,
    },
    'logging': {
        'level': 'WARNING',
        'file': None,
    },
}


class _Row:
    """One parsed CSV row, before it is turned into a menu entry."""

    def __init__(self, line, label, working_dir, command, parent):
        self.line = line
        self.label = label
        self.working_dir = working_dir
        self.command = command
        self.parent = parent

    @property
    def is_submenu(self):
        return not self.command


def load_menu(path):
    """Parse a menu file into the root level of the menu tree.

    Args:
        path: Path to the CSV menu file.

    Returns:
        Tuple of ``LeafAction`` / ``SubMenu`` entries in display order.

    Raises:
        ConfigError: If any file in the tree is missing or malformed, or a
            sub-menu ends up without entries.
    """
    root = _load_file(Path(path), ())
    logger.info(f"Loaded {len(root)} root entries from {path}")
    return root


def _load_file(path, loading):
    resolved = path.resolve()
    if resolved in loading:
        raise ConfigError(f"{path}: menu files include each other in a cycle")
    loading = loading + (resolved,)

    rows = _read_rows(path)
    groups = {None: []}
    submenus = set()
    for row in rows:
        if row.parent is not None and row.parent not in submenus:
            raise ConfigError(
                f"{path}:{row.line}: parent '{row.parent}' is not a sub-menu defined above"
            )
        if row.is_submenu:
            if row.label in submenus:
                raise ConfigError(f"{path}:{row.line}: duplicate sub-menu '{row.label}'")
            submenus.add(row.label)
        groups.setdefault(row.parent, []).append(row)

    return _build_level(path, groups, None, loading)


def _build_level(path, groups, parent, loading):
    entries = []
    for row in groups.get(parent, []):
        working_dir = _resolve_dir(path.parent, row.working_dir)
        if not row.is_submenu:
            entries.append(LeafAction(row.label, tuple(row.command), working_dir))
            continue

        if row.label in groups:
            children = _build_level(path, groups, row.label, loading)
        elif working_dir is not None and (Path(working_dir) / MENU_FILE).is_file():
            children = _load_file(Path(working_dir) / MENU_FILE, loading)
        else:
            children = ()

        if not children:
            raise ConfigError(f"{path}:{row.line}: sub-menu '{row.label}' has no entries")
        entries.append(SubMenu(row.label, children))
    return tuple(entries)


def _resolve_dir(base_dir, working_dir):
    if not working_dir:
        return None
    directory = Path(working_dir).expanduser()
    if not directory.is_absolute():
        directory = base_dir / directory
    return str(directory)


def _read_rows(path):
    rows = []
    try:
        with open(path, 'r', newline='', encoding='utf-8') as f:
            reader = csv.reader(f)
            first = True
            for cells in reader:
                if not cells or not any(cell.strip() for cell in cells):
                    continue
                if cells[0].lstrip().startswith('#'):
                    continue
                if first:
                    first = False
                    if _is_header(cells):
                        continue
                rows.append(_parse_row(path, reader.line_num, cells))
    except OSError as e:
        raise ConfigError(f"Failed to open {path}: {e}") from e
    except (csv.Error, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    return rows


def _is_header(cells):
    names = tuple(cell.strip().lower() for cell in cells)
    return names in (COLUMNS[:3], COLUMNS)


def _parse_row(path, line, cells):
    if not 3 <= len(cells) <= 4:
        raise ConfigError(f"{path}:{line}: expected 3 or 4 columns, got {len(cells)}")

    cells = [cell.strip() for cell in cells]
    label, working_dir, command = cells[:3]
    parent = cells[3] if len(cells) == 4 and cells[3] else None

    if not label:
        raise ConfigError(f"{path}:{line}: empty label")
    if parent == label:
        raise ConfigError(f"{path}:{line}: '{label}' names itself as parent")

    argv = []
    if command:
        try:
            argv = shlex.split(command)
        except ValueError as e:
            raise ConfigError(f"{path}:{line}: invalid command '{command}': {e}") from e

    return _Row(line, label, working_dir, argv, parent)


def load_settings(path=SETTINGS_FILE, required=False):
    """Load the YAML settings file merged over ``DEFAULT_SETTINGS``.

    Args:
        path: Path to the settings file.
        required: When False a missing file yields the defaults.

    Raises:
        ConfigError: If the file is required but missing, unreadable, or
            not a YAML mapping.
    """
    path = Path(path)
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if not path.exists():
        if required:
            raise ConfigError(f"Settings file not found: {path}")
        return settings

    try:
        with open(path, 'r') as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load settings {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: settings must be a mapping")

    for key, value in raw.items():
        if isinstance(settings.get(key), dict):
            if not isinstance(value, dict):
                raise ConfigError(f"{path}: '{key}' must be a mapping")
            settings[key].update(value)
        else:
            settings[key] = value

    if 'menu_file' in raw:
        menu_file = Path(str(raw['menu_file'])).expanduser()
        if not menu_file.is_absolute():
            menu_file = path.parent / menu_file
        settings['menu_file'] = str(menu_file)
    return settings
