"""Validators for BSON value types.

With ``parse_to_bson`` set, validated values are handed back as native
``bson`` objects; otherwise identifiers come back as plain hex strings.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import bson
from bson.errors import InvalidId

from .types import JamfFirstPartyTypeKind, JamfType, JamfTypeDef
from .validation.context import INVALID, ParseInput, ParseReturn, get_unknown_type, is_valid, valid
from .validation.issues import ErrorMap, IssueCode, add_issue_to_context
from .validation.nested import handle_nested_parsing

ObjectIdSchemaInput = str | bson.ObjectId | Mapping[str, Any]
DBRefSchemaInput = bson.DBRef | Mapping[str, Any]


def _failure_message(error: Exception) -> str:
    return str(error) or "unknown error"


class JamfObjectId(JamfType[bson.ObjectId | str]):
    """ObjectId given as an ObjectId, a hex string, or ``{"$oid": hex}``."""

    def _parse(self, input: ParseInput) -> ParseReturn[bson.ObjectId | str]:
        ctx = self._process_input_params(input)
        data = input.data

        if isinstance(data, bson.ObjectId):
            if ctx.parse_to_bson:
                return valid(data)
            # Plain output is always the hex string, whatever shape the id arrived in.
            return valid(str(data))

        if isinstance(data, str):
            candidate = data
        elif isinstance(data, Mapping) and data.get("$oid"):
            candidate = data["$oid"]
        else:
            add_issue_to_context(
                ctx,
                IssueCode.INVALID_TYPE,
                expected=f"{bson.ObjectId.__name__} | str",
                received=get_unknown_type(data),
            )
            return INVALID

        try:
            oid = bson.ObjectId(candidate)
        except (InvalidId, TypeError) as e:
            add_issue_to_context(ctx, IssueCode.CUSTOM, message=_failure_message(e))
            return INVALID

        return valid(oid if ctx.parse_to_bson else str(oid))

    @classmethod
    def create(cls, error_map: ErrorMap | None = None, description: str | None = None) -> "JamfObjectId":
        return cls(JamfTypeDef(
            type_name=JamfFirstPartyTypeKind.OBJECT_ID,
            error_map=error_map,
            description=description,
        ))


objectid = JamfObjectId.create


class JamfDBRef(JamfType[bson.DBRef]):
    """DBRef given as a DBRef or ``{"$ref": ..., "$id": ..., "$db": ...}``.

    ``$id`` is validated by a nested JamfObjectId, so its issues are reported
    under the ``$id`` path segment.
    """

    def __init__(self, definition: JamfTypeDef):
        super().__init__(definition)
        self.object_id_schema = objectid()

    def _parse(self, input: ParseInput):
        ctx = self._process_input_params(input)
        data = input.data

        if isinstance(data, bson.DBRef):
            return valid(data)

        if isinstance(data, Mapping) and data.get("$ref") and data.get("$id"):
            def build_reference(result: ParseReturn[Any]) -> ParseReturn[bson.DBRef]:
                if not is_valid(result):
                    return INVALID
                try:
                    return valid(bson.DBRef(data["$ref"], result.value, data.get("$db")))
                except TypeError as e:
                    add_issue_to_context(ctx, IssueCode.CUSTOM, message=_failure_message(e))
                    return INVALID

            return handle_nested_parsing(self.object_id_schema, "$id", input, data["$id"], build_reference)

        add_issue_to_context(
            ctx,
            IssueCode.INVALID_TYPE,
            expected=bson.DBRef.__name__,
            received=get_unknown_type(data),
        )
        return INVALID

    @classmethod
    def create(cls, error_map: ErrorMap | None = None, description: str | None = None) -> "JamfDBRef":
        return cls(JamfTypeDef(
            type_name=JamfFirstPartyTypeKind.DBREF,
            error_map=error_map,
            description=description,
        ))


dbref = JamfDBRef.create


@dataclass(frozen=True)
class InstanceOfDef(JamfTypeDef):
    """Definition of an instance check; ``classes`` lists the accepted types."""
    classes: tuple[type, ...] = ()


class InstanceOf(JamfType[Any]):
    """Accepts instances of the configured classes unchanged."""

    def _parse(self, input: ParseInput) -> ParseReturn[Any]:
        ctx = self._process_input_params(input)
        classes = self._def.classes
        if isinstance(input.data, classes):
            return valid(input.data)

        names = " | ".join(cls.__name__ for cls in classes)
        add_issue_to_context(ctx, IssueCode.CUSTOM, message=f"Input not instance of {names}")
        return INVALID

    @classmethod
    def create(cls, *classes: type, error_map: ErrorMap | None = None) -> "InstanceOf":
        return cls(InstanceOfDef(
            type_name=JamfFirstPartyTypeKind.INSTANCE_OF,
            error_map=error_map,
            classes=classes,
        ))


def regex() -> InstanceOf:
    """Compiled Python pattern or bson.Regex."""
    return InstanceOf.create(re.Pattern, bson.Regex)


def code() -> InstanceOf:
    return InstanceOf.create(bson.Code)
