"""Association of fields through branching logic.

A field G is associated with a choice field F when G's branching logic is
exactly ``[<F>(<key>)]="1"`` for one of F's choice keys, i.e. G is shown
only when that choice of F is selected. Only this single-condition shape
is recognized; any other expression associates with nothing.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from redcap_form.fields.field import Field


def expression_for(field_name: str, key: str) -> str:
    """Build the branching logic that shows a field when ``key`` is selected."""
    return f'[{field_name}({key})]="1"'


class AssociatedFieldResolver:
    """Computes associated fields for every field of a form.

    Resolution is a pure function of the fields passed in: running it twice
    over the same fields gives the same result, whatever the declaration
    order of owners and associates.
    """

    def resolve(self, fields: Sequence["Field"]) -> dict[str, tuple["Field", ...]]:
        """Compute associated fields for each field.

        Args:
            fields: All fields of a form, in dictionary order.

        Returns:
            Mapping of field name to its associated fields, in dictionary order.
        """
        associations: dict[str, tuple["Field", ...]] = {}
        for owner in fields:
            expressions = {expression_for(owner.name, key) for key in owner.choices}
            if not expressions:
                associations[owner.name] = ()
                continue
            associations[owner.name] = tuple(
                candidate for candidate in fields if candidate.branching_logic in expressions
            )
        return associations

    def wire(self, fields: Sequence["Field"]) -> None:
        """Assign ``associated_fields`` on every field."""
        associations = self.resolve(fields)
        for field in fields:
            field.associated_fields = associations[field.name]
