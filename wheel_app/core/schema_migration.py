"""One-shot upgrades of older store layouts, run before services load data.

Version history:
    0/1  Challenge templates lived in a global ``challenges`` collection and
         wheels listed template ids. Templates carried a static ``isSuper``.
    2    Challenges are stored inline inside their wheel; super status is
         decided per spin and never persisted on a template.
"""

from __future__ import annotations

import logging
from typing import Callable

from wheel_app.constants.storage_constants import (
    KEY_LEGACY_CHALLENGES,
    KEY_SCHEMA_VERSION,
    KEY_WHEELS,
)
from wheel_app.core.storage import KeyValueStore

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION: int = 2


def upgrade_store(store: KeyValueStore) -> int:
    """Bring the store up to ``CURRENT_SCHEMA_VERSION`` and return the version."""
    version = store.get(KEY_SCHEMA_VERSION)
    if not isinstance(version, int):
        version = 0
    if version >= CURRENT_SCHEMA_VERSION:
        return version

    for target_version, step in _STEPS:
        if version < target_version:
            step(store)
            version = target_version
    store.set(KEY_SCHEMA_VERSION, version)
    logger.info("Store upgraded to schema version %s", version)
    return version


def inline_legacy_challenges(store: KeyValueStore) -> bool:
    """Replace wheel challenge-id lists with inline copies of the templates.

    Returns True when anything was rewritten. Safe to call repeatedly: once the
    global collection is empty, or wheels already hold full objects, nothing
    changes.
    """
    legacy = store.get(KEY_LEGACY_CHALLENGES) or []
    wheels = store.get(KEY_WHEELS) or []
    if not legacy or not wheels:
        return False

    templates = {str(entry.get("id")): entry for entry in legacy if isinstance(entry, dict)}
    for wheel in wheels:
        references = wheel.get("challenges") or []
        if references and isinstance(references[0], str):
            missing = [ref for ref in references if ref not in templates]
            if missing:
                logger.warning(
                    "Wheel %s references unknown challenges, dropping: %s", wheel.get("id"), missing
                )
            wheel["challenges"] = [
                dict(templates[ref]) for ref in references if ref in templates
            ]

    store.set(KEY_WHEELS, wheels)
    store.set(KEY_LEGACY_CHALLENGES, [])
    logger.info("Migrated %d legacy challenges into %d wheels", len(templates), len(wheels))
    return True


def strip_template_super_flags(store: KeyValueStore) -> bool:
    """Drop the persisted ``isSuper`` attribute from every challenge template."""
    wheels = store.get(KEY_WHEELS) or []
    changed = False
    for wheel in wheels:
        for challenge in wheel.get("challenges") or []:
            if isinstance(challenge, dict) and "isSuper" in challenge:
                del challenge["isSuper"]
                changed = True
    if changed:
        store.set(KEY_WHEELS, wheels)
    return changed


_STEPS: list[tuple[int, Callable[[KeyValueStore], bool]]] = [
    (1, inline_legacy_challenges),
    (2, strip_template_super_flags),
]
