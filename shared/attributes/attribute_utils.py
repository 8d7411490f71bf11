"""Pure functions for category attribute defaults, validation and form state.

Validation never raises: every check returns an error message or None so the
caller can collect a documentId -> message map and render it next to the fields.
"""

import math

from shared.models.attribute import (
    AttributeDefinition,
    AttributeFormData,
    AttributeState,
    AttributeType,
    AttributeValue,
)
from shared.models.category import CategoryNode


def get_default_attribute_value(attribute_type: AttributeType | str) -> AttributeValue:
    """Return the initial value of an attribute of the given type. Unknown types yield None."""
    if attribute_type in (AttributeType.TEXT, AttributeType.SELECT):
        return ""
    if attribute_type == AttributeType.NUMBER:
        return 0
    if attribute_type == AttributeType.BOOLEAN:
        return False
    if attribute_type == AttributeType.MULTI_SELECT:
        return []
    return None


def is_empty_value(value: AttributeValue) -> bool:
    """None, blank strings and empty sequences count as empty."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


def validate_attribute_value(value: AttributeValue, definition: AttributeDefinition) -> str | None:
    """
    Validate a value against its attribute definition.

    Args:
        value (AttributeValue): The value entered for the attribute.
        definition (AttributeDefinition): The attribute the value belongs to.

    Returns:
        str | None: A user-facing error message, or None if the value is valid.
    """
    empty = is_empty_value(value)
    if definition.required and empty:
        return f"{definition.name} is required"
    if empty:
        return None

    if definition.type == AttributeType.TEXT:
        return _validate_text_value(value, definition)
    if definition.type == AttributeType.NUMBER:
        return _validate_number_value(value, definition)
    if definition.type == AttributeType.SELECT:
        return _validate_select_value(value, definition)
    if definition.type == AttributeType.MULTI_SELECT:
        return _validate_multi_select_value(value, definition)
    # boolean and date only have the required check
    return None


def _validate_text_value(value: AttributeValue, definition: AttributeDefinition) -> str | None:
    if not isinstance(value, str):
        return f"{definition.name} must be text"

    min_length = definition.metadata.get("minLength")
    max_length = definition.metadata.get("maxLength")
    if min_length and len(value) < min_length:
        return f"{definition.name} must be at least {min_length} characters"
    if max_length and len(value) > max_length:
        return f"{definition.name} must be no more than {max_length} characters"
    return None


def _validate_number_value(value: AttributeValue, definition: AttributeDefinition) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return f"{definition.name} must be a valid number"

    minimum = definition.metadata.get("minimum")
    maximum = definition.metadata.get("maximum")
    if minimum is not None and value < minimum:
        return f"{definition.name} must be at least {minimum}"
    if maximum is not None and value > maximum:
        return f"{definition.name} must be no more than {maximum}"
    return None


def _validate_select_value(value: AttributeValue, definition: AttributeDefinition) -> str | None:
    if value not in definition.options:
        return f"{definition.name} must be one of: {', '.join(definition.options)}"
    return None


def _validate_multi_select_value(value: AttributeValue, definition: AttributeDefinition) -> str | None:
    if not isinstance(value, (list, tuple)):
        return f"{definition.name} must be a list"

    invalid_options = [str(v) for v in value if v not in definition.options]
    if invalid_options:
        return f"{definition.name} contains invalid options: {', '.join(invalid_options)}"
    return None


def transform_category_attributes(categories: list[CategoryNode]) -> list[AttributeDefinition]:
    """
    Merge the own attributes of several categories into one list keyed by documentId.

    A category later in the list replaces an attribute with the same documentId
    from an earlier one, but the attribute keeps its first position.
    """
    attributes: dict[str, AttributeDefinition] = {}
    for category in categories:
        for attribute in category.attributes:
            attributes[attribute.document_id] = attribute
    return list(attributes.values())


def initialize_attribute_states(
    definitions: list[AttributeDefinition],
    initial_values: dict[str, AttributeValue] | None = None,
) -> list[AttributeState]:
    """Pair each definition with its initial value, falling back to the type default."""
    initial_values = initial_values or {}
    states = []
    for definition in definitions:
        value = initial_values.get(definition.document_id)
        if value is None:
            value = get_default_attribute_value(definition.type)
        states.append(AttributeState(definition=definition, value=value))
    return states


def update_attribute_state(
    states: list[AttributeState],
    document_id: str,
    value: AttributeValue,
) -> list[AttributeState]:
    """Return a new state list with the value of one attribute replaced and revalidated."""
    updated = []
    for state in states:
        if state.definition.document_id == document_id:
            error = validate_attribute_value(value, state.definition)
            updated.append(state.model_copy(update={"value": value, "error": error}))
        else:
            updated.append(state)
    return updated


def attribute_states_to_form_data(states: list[AttributeState]) -> list[AttributeFormData]:
    return [
        AttributeFormData(
            attribute_document_id=state.definition.document_id,
            attribute_name=state.definition.name,
            value=state.value,
        )
        for state in states
    ]


def validate_all_attributes(states: list[AttributeState]) -> bool:
    return all(validate_attribute_value(state.value, state.definition) is None for state in states)


def get_attribute_errors(states: list[AttributeState]) -> dict[str, str]:
    """Collect the validation errors of all states, keyed by attribute documentId."""
    errors: dict[str, str] = {}
    for state in states:
        error = validate_attribute_value(state.value, state.definition)
        if error:
            errors[state.definition.document_id] = error
    return errors
