"""
Category folder resolution.

Each data-file category gets one folder under the station's ``Tags``
container, created the first time a symbol of that category is imported.
Nothing is cached; every call consults the live tree, so a folder created by
an earlier record (or an earlier run) is reused.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .models import SymbolCategory
from .namespace import HostTree
from .schema import FOLDER_LABELS

logger = logging.getLogger(__name__)


def get_or_create_folder(tree: HostTree, parent: Any, folder_name: str) -> Optional[Any]:
    """Return the child folder *folder_name* of *parent*, creating it if absent.

    Returns ``None`` when *parent* is missing, the name is empty, or the host
    rejects the folder.
    """
    if parent is None or not folder_name:
        return None

    try:
        existing = tree.get_child(parent, folder_name)
        if existing is not None:
            return existing

        folder = tree.make_folder(folder_name)
        tree.add_child(parent, folder)
        return folder
    except (ValueError, KeyError) as e:
        logger.debug("get_or_create_folder failed for %s: %s", folder_name, e)
        return None


def resolve_folder(tree: HostTree, root: Any, category: SymbolCategory) -> Optional[Any]:
    """Return the destination folder for *category* under *root*.

    ``UNCLASSIFIED`` symbols have no folder of their own and resolve to
    *root*.  ``None`` means resolution failed and the caller should place
    the tag under *root*.
    """
    label = FOLDER_LABELS.get(category)
    if label is None:
        return root
    return get_or_create_folder(tree, root, label)
