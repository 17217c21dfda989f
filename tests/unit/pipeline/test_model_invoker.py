"""Unit tests for the model invocation stage."""

import pytest

from earnings_analyzer.core.types import Failure, Success
from earnings_analyzer.exceptions import ModelUnavailableError
from earnings_analyzer.pipeline.model_invoker import ModelInvoker
from tests.helpers import FakeAdapter, unavailable


class _NonTextAdapter:
    model_name = "broken"

    async def generate(self, prompt: str):
        return {"not": "text"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_reply_is_returned_raw():
    adapter = FakeAdapter(reply="```json\n{}\n```")
    invoker = ModelInvoker(adapter)

    result = await invoker.handle("prompt")

    assert result == Success("```json\n{}\n```")
    assert adapter.prompts == ["prompt"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_adapter_is_called_exactly_once_on_failure():
    error = unavailable()
    adapter = FakeAdapter(error=error)

    result = await ModelInvoker(adapter).handle("prompt")

    assert result == Failure(error)
    assert adapter.call_count == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unexpected_adapter_error_is_normalized():
    adapter = FakeAdapter(error=ConnectionResetError("peer reset"))

    result = await ModelInvoker(adapter).handle("prompt")

    assert isinstance(result, Failure)
    assert isinstance(result.error, ModelUnavailableError)
    assert result.error.details == "peer reset"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_text_reply_is_a_model_failure():
    result = await ModelInvoker(_NonTextAdapter()).handle("prompt")

    assert isinstance(result, Failure)
    assert "expected str" in str(result.error)


@pytest.mark.unit
def test_model_name_comes_from_adapter():
    assert ModelInvoker(FakeAdapter()).model_name == "fake-model"
