import pytest

from registry import ToolRegistry
from schema import InvocationRequest, InvocationResult, ParameterSpec, ParamType, ToolDescriptor
from tools import greet


class RecordingHandler:
    """Returns a fixed result and counts invocations."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result or InvocationResult.text("ok")

    async def __call__(self, arguments):
        self.calls.append(dict(arguments))
        return self.result


def make_registry(*params, handler=None):
    registry = ToolRegistry()
    handler = handler or RecordingHandler()
    registry.register(ToolDescriptor("dummy", "Dummy tool", params), handler)
    return registry, handler


class TestRegister:
    def test_duplicate_name_rejected(self):
        registry = ToolRegistry()
        registry.register(greet.tool_spec, greet.handle)
        with pytest.raises(ValueError, match="Duplicate tool: greet"):
            registry.register(greet.tool_spec, greet.handle)

    def test_tools_in_registration_order(self):
        registry = ToolRegistry()
        registry.register(ToolDescriptor("b", "B"), RecordingHandler())
        registry.register(ToolDescriptor("a", "A"), RecordingHandler())
        assert [t.name for t in registry.tools] == ["b", "a"]
        assert len(registry) == 2
        assert "a" in registry
        assert "c" not in registry

    def test_lookup_unknown_raises(self):
        registry = ToolRegistry()
        with pytest.raises(ValueError, match="Unknown tool: nope"):
            registry.get_handler("nope")
        with pytest.raises(ValueError, match="Unknown tool: nope"):
            registry.get_descriptor("nope")


class TestDispatch:
    @pytest.mark.asyncio
    async def test_valid_request_invokes_handler_once(self):
        expected = InvocationResult.text("exact")
        registry, handler = make_registry(
            ParameterSpec("q", ParamType.STRING, required=True),
            handler=RecordingHandler(expected),
        )
        result = await registry.dispatch(InvocationRequest("dummy", {"q": "x"}))
        assert result is expected
        assert handler.calls == [{"q": "x"}]

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        registry, handler = make_registry()
        result = await registry.dispatch(InvocationRequest("missing_tool", {}))
        assert result.is_error
        assert "missing_tool" in result.content
        assert handler.calls == []

    @pytest.mark.asyncio
    async def test_missing_required_argument(self):
        registry, handler = make_registry(ParameterSpec("count", ParamType.NUMBER, required=True))
        result = await registry.dispatch(InvocationRequest("dummy", {}))
        assert result == InvocationResult.error("count must be a number")
        assert handler.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "ptype, bad_value",
        [
            (ParamType.STRING, 42),
            (ParamType.STRING, None),
            (ParamType.NUMBER, "42"),
            (ParamType.NUMBER, True),
            (ParamType.BOOLEAN, 1),
            (ParamType.OBJECT, [1]),
            (ParamType.ARRAY, {"a": 1}),
        ],
    )
    async def test_type_mismatch(self, ptype, bad_value):
        registry, handler = make_registry(ParameterSpec("arg", ptype, required=True))
        result = await registry.dispatch(InvocationRequest("dummy", {"arg": bad_value}))
        assert result.is_error
        assert result.content.startswith("arg must be")
        assert handler.calls == []

    @pytest.mark.asyncio
    async def test_first_failing_parameter_is_reported(self):
        registry, _ = make_registry(
            ParameterSpec("first", ParamType.STRING, required=True),
            ParameterSpec("second", ParamType.STRING, required=True),
        )
        result = await registry.dispatch(InvocationRequest("dummy", {"first": "ok"}))
        assert result.content == "second must be a string"

    @pytest.mark.asyncio
    async def test_optional_parameters_pass_through(self):
        registry, handler = make_registry(
            ParameterSpec("q", ParamType.STRING, required=True),
            ParameterSpec("limit", ParamType.NUMBER),
        )
        result = await registry.dispatch(InvocationRequest("dummy", {"q": "x", "limit": "ten", "extra": 1}))
        assert not result.is_error
        assert handler.calls == [{"q": "x", "limit": "ten", "extra": 1}]

    @pytest.mark.asyncio
    async def test_error_results_are_returned_unmodified(self):
        failure = InvocationResult.error("handler said no")
        registry, _ = make_registry(handler=RecordingHandler(failure))
        assert await registry.dispatch(InvocationRequest("dummy", {})) is failure

    @pytest.mark.asyncio
    async def test_repeated_dispatch_is_independent(self):
        registry = ToolRegistry()
        registry.register(greet.tool_spec, greet.handle)
        request = InvocationRequest("greet", {"name": "Ada"})
        first = await registry.dispatch(request)
        second = await registry.dispatch(request)
        assert first == second == InvocationResult.text("Hello, Ada!")

    @pytest.mark.asyncio
    async def test_dispatch_resolves_through_lookups(self):
        looked_up = []

        class TracingRegistry(ToolRegistry):
            def get_descriptor(self, name):
                looked_up.append(("descriptor", name))
                return super().get_descriptor(name)

            def get_handler(self, name):
                looked_up.append(("handler", name))
                return super().get_handler(name)

        registry = TracingRegistry()
        registry.register(greet.tool_spec, greet.handle)
        await registry.dispatch(InvocationRequest("greet", {"name": "Ada"}))
        await registry.dispatch(InvocationRequest("missing_tool", {}))
        assert looked_up == [("descriptor", "greet"), ("handler", "greet")]
