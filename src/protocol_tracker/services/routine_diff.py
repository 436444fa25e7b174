"""Diff engine comparing two routine snapshots."""

from protocol_tracker.domain.routines import (
    MACRO_FIELDS,
    UNTRACKED_DIET,
    FieldChange,
    ModifiedItem,
    RoutineChanges,
    RoutineSnapshot,
    SnapshotItem,
    ValueChange,
)

TRACKED_ITEM_FIELDS = ("timing", "timings", "frequency", "frequency_days", "duration")


def compute_changes(
    previous: RoutineSnapshot | None, current: RoutineSnapshot
) -> RoutineChanges:
    """Return what started, stopped or changed between two snapshots."""
    if previous is None:
        diet_changed = None
        if current.diet.type != UNTRACKED_DIET:
            diet_changed = ValueChange(
                from_value=UNTRACKED_DIET, to_value=current.diet.type
            )
        return RoutineChanges(diet_changed=diet_changed, started=list(current.items))

    diet_changed = None
    if previous.diet.type != current.diet.type:
        diet_changed = ValueChange(
            from_value=previous.diet.type, to_value=current.diet.type
        )

    macros_changed: dict[str, ValueChange] | None = None
    for name in MACRO_FIELDS:
        before = getattr(previous.diet.macros, name)
        after = getattr(current.diet.macros, name)
        if before != after:
            if macros_changed is None:
                macros_changed = {}
            macros_changed[name] = ValueChange(from_value=before, to_value=after)

    previous_items = _index_items(previous.items)
    current_items = _index_items(current.items)

    started = [
        item for item_id, item in current_items.items() if item_id not in previous_items
    ]
    stopped = [
        item for item_id, item in previous_items.items() if item_id not in current_items
    ]
    modified = []
    for item_id, item in current_items.items():
        before_item = previous_items.get(item_id)
        if before_item is None:
            continue
        field_changes = _field_changes(before_item, item)
        if field_changes:
            modified.append(ModifiedItem(item=item, changes=field_changes))

    return RoutineChanges(
        diet_changed=diet_changed,
        macros_changed=macros_changed,
        started=started,
        stopped=stopped,
        modified=modified,
    )


def has_changes(changes: RoutineChanges) -> bool:
    """Return True when the diff records anything worth saving."""
    return (
        changes.diet_changed is not None
        or changes.macros_changed is not None
        or bool(changes.started)
        or bool(changes.stopped)
        or bool(changes.modified)
    )


def _index_items(items: list[SnapshotItem]) -> dict[str, SnapshotItem]:
    indexed: dict[str, SnapshotItem] = {}
    for item in items:
        indexed[item.id] = item
    return indexed


def _field_changes(before: SnapshotItem, after: SnapshotItem) -> list[FieldChange]:
    changes = []
    for name in TRACKED_ITEM_FIELDS:
        before_value = getattr(before, name, None)
        after_value = getattr(after, name, None)
        if before_value != after_value:
            changes.append(
                FieldChange(field=name, from_value=before_value, to_value=after_value)
            )
    return changes
