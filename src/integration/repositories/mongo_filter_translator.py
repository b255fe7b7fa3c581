"""Translate TaskPredicate trees into MongoDB filter documents."""

from typing import Any

from multipledispatch import dispatch

from domain.models import AllOf, AnyOf, ArrayContains, FieldEquals, FieldInRange, FieldIsAbsent, MatchAll

# Filter that no document satisfies ($or must not be empty)
MATCH_NOTHING: dict[str, Any] = {"_id": {"$in": []}}


def to_document_field(field: str) -> str:
    """Map an entity attribute name to its stored key."""
    return "_id" if field == "id" else field


class MongoFilterTranslator:
    """Converts the typed predicate tree to the native query language.

    Array membership and scalar equality share MongoDB's ``{field: value}``
    form; ``{field: None}`` matches both a null and a missing field.
    """

    @dispatch(MatchAll)
    def translate(self, predicate: MatchAll) -> dict[str, Any]:  # type: ignore[override]
        return {}

    @dispatch(FieldEquals)
    def translate(self, predicate: FieldEquals) -> dict[str, Any]:  # type: ignore[override]
        return {to_document_field(predicate.field): predicate.value}

    @dispatch(ArrayContains)
    def translate(self, predicate: ArrayContains) -> dict[str, Any]:  # type: ignore[override]
        return {to_document_field(predicate.field): predicate.value}

    @dispatch(FieldInRange)
    def translate(self, predicate: FieldInRange) -> dict[str, Any]:  # type: ignore[override]
        upper = "$lte" if predicate.end_inclusive else "$lt"
        return {to_document_field(predicate.field): {"$gte": predicate.start, upper: predicate.end}}

    @dispatch(FieldIsAbsent)
    def translate(self, predicate: FieldIsAbsent) -> dict[str, Any]:  # type: ignore[override]
        return {to_document_field(predicate.field): None}

    @dispatch(AllOf)
    def translate(self, predicate: AllOf) -> dict[str, Any]:  # type: ignore[override]
        clauses = [clause for clause in (self.translate(operand) for operand in predicate.operands) if clause]
        if not clauses:
            return {}
        if len(clauses) == 1:
            return clauses[0]
        return {"$and": clauses}

    @dispatch(AnyOf)
    def translate(self, predicate: AnyOf) -> dict[str, Any]:  # type: ignore[override]
        if not predicate.operands:
            return dict(MATCH_NOTHING)
        clauses = [self.translate(operand) for operand in predicate.operands]
        if len(clauses) == 1:
            return clauses[0]
        return {"$or": clauses}
