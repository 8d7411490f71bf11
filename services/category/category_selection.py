"""Category selection transitions.

Each function takes the current state and returns a new one; the input is never modified.
"""

from shared.models.category import CategoryNode, CategorySelection, CategorySelectionState


def initial_state() -> CategorySelectionState:
    return CategorySelectionState()


def set_primary(state: CategorySelectionState, category: CategoryNode | None) -> CategorySelectionState:
    """Select a primary category. Always clears the subcategory and restarts the path."""
    return state.model_copy(update={
        "selection": CategorySelection(
            primary=category,
            subcategory=None,
            path=[category] if category else [],
        ),
        "error": None,
    })


def set_subcategory(state: CategorySelectionState, category: CategoryNode | None) -> CategorySelectionState:
    """
    Select a subcategory of the current primary category, or clear it with None.

    Raises:
        ValueError: If there is no primary category or the category is not one of its children.
    """
    primary = state.selection.primary
    if category is None:
        path = [primary] if primary else []
        return state.model_copy(update={
            "selection": CategorySelection(primary=primary, subcategory=None, path=path),
            "error": None,
        })

    if primary is None:
        raise ValueError("Cannot select a subcategory without a primary category.")
    if category.slug not in {child.slug for child in primary.children}:
        raise ValueError(f"Category '{category.slug}' is not a child of '{primary.slug}'.")

    return state.model_copy(update={
        "selection": CategorySelection(primary=primary, subcategory=category, path=[primary, category]),
        "error": None,
    })


def set_path(state: CategorySelectionState, path: list[CategoryNode]) -> CategorySelectionState:
    """
    Select a whole root-to-leaf path; its first two entries become primary and subcategory.

    Raises:
        ValueError: If the second entry is not a child of the first.
    """
    if len(path) > 1 and path[1].slug not in {child.slug for child in path[0].children}:
        raise ValueError(f"Category '{path[1].slug}' is not a child of '{path[0].slug}'.")
    return state.model_copy(update={
        "selection": CategorySelection(
            primary=path[0] if path else None,
            subcategory=path[1] if len(path) > 1 else None,
            path=list(path),
        ),
        "error": None,
    })


def clear_selection(state: CategorySelectionState) -> CategorySelectionState:
    return state.model_copy(update={"selection": CategorySelection(), "error": None})


def set_loading(state: CategorySelectionState, is_loading: bool) -> CategorySelectionState:
    return state.model_copy(update={"is_loading": is_loading})


def set_error(state: CategorySelectionState, error: str | None) -> CategorySelectionState:
    return state.model_copy(update={"error": error, "is_loading": False})
