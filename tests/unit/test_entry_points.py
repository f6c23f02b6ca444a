"""Tests for safe_parse / safe_parse_async / parse entry points."""

import pytest
from bson import DBRef, ObjectId

from jamf import JamfError, ParseParams, dbref, objectid
from jamf.types import JamfFirstPartyTypeKind, JamfType, JamfTypeDef
from jamf.validation import INVALID, JamfInternalError, SafeParseFailure, SafeParseSuccess, valid


class RecordingSchema(JamfType):
    """Captures the context handed to ``_parse``."""

    def __init__(self):
        super().__init__(JamfTypeDef(type_name=JamfFirstPartyTypeKind.OBJECT_ID))
        self.contexts = []

    def _parse(self, input):
        self.contexts.append(input.parent)
        return valid(input.data)


class SilentFailureSchema(JamfType):
    """Breaks the contract: invalid without recording an issue."""

    def __init__(self):
        super().__init__(JamfTypeDef(type_name=JamfFirstPartyTypeKind.OBJECT_ID))

    def _parse(self, input):
        return INVALID


class AwaitableSchema(JamfType):
    """Always hands back a coroutine."""

    def __init__(self):
        super().__init__(JamfTypeDef(type_name=JamfFirstPartyTypeKind.OBJECT_ID))

    def _parse(self, input):
        async def resolve():
            return valid(input.data)
        return resolve()


EQUIVALENCE_CASES = [
    ("64b7f1c2a1b2c3d4e5f60718", False),
    ("64b7f1c2a1b2c3d4e5f60718", True),
    ({"$oid": "64b7f1c2a1b2c3d4e5f60718"}, True),
    ("not-an-id", False),
    (42, True),
    ({"$ref": "users", "$id": "64b7f1c2a1b2c3d4e5f60718"}, True),
    ({"$ref": "users", "$id": "bad"}, False),
    ({"$ref": "users"}, False),
]


class TestSafeParse:
    """Synchronous entry point."""

    def test_context_defaults(self):
        """Test the context built by safe_parse without parameters."""
        schema = RecordingSchema()
        schema.safe_parse("value")

        ctx = schema.contexts[0]
        assert ctx.async_ is False
        assert ctx.parse_to_bson is False
        assert ctx.path == ()
        assert ctx.issues == []
        assert ctx.parent is None

    def test_async_flag_is_ignored(self):
        """Test that safe_parse stays synchronous when async is requested."""
        schema = RecordingSchema()
        result = schema.safe_parse("value", {"async": True})

        assert result == SafeParseSuccess("value")
        assert schema.contexts[0].async_ is False

    def test_params_object_and_overrides(self):
        """Test a ParseParams object combined with keyword overrides."""
        schema = RecordingSchema()
        params = ParseParams(path=["root"], parse_to_bson=False)
        schema.safe_parse("value", params, parse_to_bson=True)

        ctx = schema.contexts[0]
        assert ctx.parse_to_bson is True
        assert ctx.path == ("root",)

    def test_camel_case_params(self):
        """Test camelCase parameter mappings."""
        schema = RecordingSchema()
        schema.safe_parse("value", {"parseToBSON": True, "path": ["a", 1]})

        ctx = schema.contexts[0]
        assert ctx.parse_to_bson is True
        assert ctx.path == ("a", 1)

    def test_fresh_context_per_call(self):
        """Test that each call gets its own context and issue list."""
        schema = RecordingSchema()
        schema.safe_parse("one")
        schema.safe_parse("two")

        assert schema.contexts[0] is not schema.contexts[1]
        assert schema.contexts[0].issues is not schema.contexts[1].issues

    def test_invalid_without_issues_is_fatal(self):
        """Test that an unexplained invalid result raises."""
        with pytest.raises(JamfInternalError, match="no issues detected"):
            SilentFailureSchema().safe_parse("value")

    def test_awaitable_in_sync_mode_is_fatal(self):
        """Test that an awaitable in synchronous mode raises."""
        with pytest.raises(JamfInternalError, match="awaitable"):
            AwaitableSchema().safe_parse("value")

    def test_issues_accumulate_for_one_call(self):
        """Test that a failure carries the issues of its call."""
        result = objectid().safe_parse(42)

        assert isinstance(result, SafeParseFailure)
        assert len(result.issues) == 1


class TestSafeParseAsync:
    """Asynchronous entry point."""

    @pytest.mark.asyncio
    async def test_context_is_async(self):
        """Test that safe_parse_async always builds an async context."""
        schema = RecordingSchema()
        await schema.safe_parse_async("value", {"async": False})

        assert schema.contexts[0].async_ is True

    @pytest.mark.asyncio
    async def test_awaitable_parse_step_is_awaited(self):
        """Test that an awaitable parse step is awaited."""
        result = await AwaitableSchema().safe_parse_async("value")

        assert result == SafeParseSuccess("value")

    @pytest.mark.asyncio
    async def test_dbref_async_success(self, hex_id):
        """Test a successful reference in async mode."""
        result = await dbref().safe_parse_async({"$ref": "users", "$id": hex_id}, parse_to_bson=True)

        assert result.success is True
        assert result.data == DBRef("users", ObjectId(hex_id))

    @pytest.mark.asyncio
    async def test_dbref_async_nested_failure(self):
        """Test nested issue paths in async mode."""
        result = await dbref().safe_parse_async({"$ref": "users", "$id": "bad"})

        assert result.success is False
        assert [issue.path for issue in result.issues] == [["$id"]]

    @pytest.mark.asyncio
    async def test_invalid_without_issues_is_fatal(self):
        """Test that an unexplained invalid result raises in async mode."""
        with pytest.raises(JamfInternalError):
            await SilentFailureSchema().safe_parse_async("value")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value, parse_to_bson", EQUIVALENCE_CASES)
    async def test_sync_and_async_results_are_equal(self, value, parse_to_bson):
        """Test that both entry points give equal results."""
        schema = dbref() if isinstance(value, dict) and "$ref" in value else objectid()

        sync_result = schema.safe_parse(value, parse_to_bson=parse_to_bson)
        async_result = await schema.safe_parse_async(value, parse_to_bson=parse_to_bson)

        assert sync_result == async_result


class TestParse:
    """Raising entry points."""

    def test_parse_returns_value(self, hex_id):
        """Test that parse returns the validated value."""
        assert objectid().parse(hex_id) == hex_id

    def test_parse_raises_aggregate_error(self):
        """Test that parse raises JamfError on failure."""
        with pytest.raises(JamfError) as exc_info:
            objectid().parse(42)

        assert exc_info.value.issues[0].received == "int"

    @pytest.mark.asyncio
    async def test_parse_async_returns_value(self, hex_id):
        """Test that parse_async returns the validated value."""
        value = await objectid().parse_async(hex_id, parse_to_bson=True)

        assert value == ObjectId(hex_id)

    @pytest.mark.asyncio
    async def test_parse_async_raises(self):
        """Test that parse_async raises JamfError on failure."""
        with pytest.raises(JamfError):
            await dbref().parse_async({"$ref": "users"})


class TestRepr:

    def test_repr_names_definition(self):
        """Test the validator repr."""
        assert repr(objectid()) == "JamfObjectId(ObjectID)"
