"""Unit tests for request context propagation."""

import asyncio
from uuid import uuid4

import pytest

from partnerpool.core.context import (
    ContextNotSetError,
    RequestContext,
    get_current_context,
    get_current_context_or_none,
    request_context,
    reset_context,
    set_context,
)
from partnerpool.utils.exceptions import PartnerPoolError


class TestRequestContextCreation:
    """Tests for RequestContext construction."""

    def test_create_context_minimal(self):
        """Test context generates its own identifiers."""
        ctx = RequestContext()

        assert ctx.request_id is not None
        assert ctx.correlation_id is not None
        assert ctx.request_id != ctx.correlation_id
        assert ctx.api_version is None
        assert ctx.started_at.tzinfo is not None

    def test_create_context_full(self):
        request_id = uuid4()
        ctx = RequestContext(request_id=request_id, correlation_id=request_id, api_version="v7")

        assert ctx.correlation_id == request_id
        assert ctx.api_version == "v7"

    def test_context_is_frozen(self):
        ctx = RequestContext()
        with pytest.raises(ValueError):
            ctx.api_version = "v6"


class TestContextManager:
    """Tests for context manager functionality."""

    def test_request_context_sets_and_restores(self):
        """Test that request_context sets and restores context."""
        assert get_current_context_or_none() is None

        ctx = RequestContext(api_version="v7")

        with request_context(ctx) as current:
            assert current is ctx
            assert get_current_context() is ctx

        assert get_current_context_or_none() is None

    def test_nested_contexts(self):
        """Test nested context managers restore correctly."""
        outer_ctx = RequestContext(api_version="v6")
        inner_ctx = RequestContext(api_version="v7")

        with request_context(outer_ctx):
            assert get_current_context().api_version == "v6"

            with request_context(inner_ctx):
                assert get_current_context().api_version == "v7"

            assert get_current_context().api_version == "v6"

        assert get_current_context_or_none() is None

    def test_context_exception_restores(self):
        """Test that context is restored even when exception occurs."""
        ctx = RequestContext()

        with pytest.raises(ValueError):
            with request_context(ctx):
                raise ValueError("Test error")

        assert get_current_context_or_none() is None

    def test_get_current_context_raises_when_not_set(self):
        with pytest.raises(ContextNotSetError) as exc_info:
            get_current_context()

        assert "request_context()" in str(exc_info.value)
        assert isinstance(exc_info.value, PartnerPoolError)

    def test_set_and_reset_context_low_level(self):
        """Test low-level set_context and reset_context."""
        ctx = RequestContext()

        token = set_context(ctx)
        assert get_current_context() is ctx

        reset_context(token)
        assert get_current_context_or_none() is None


class TestAsyncContextIsolation:
    """Tests for async context isolation."""

    async def test_context_survives_await(self):
        ctx = RequestContext()

        with request_context(ctx):
            await asyncio.sleep(0)
            assert get_current_context() is ctx

        assert get_current_context_or_none() is None

    async def test_context_isolated_across_tasks(self):
        """Test that context is isolated across concurrent async tasks."""
        results = {}

        async def handle(version: str):
            with request_context(RequestContext(api_version=version)):
                results[f"{version}_start"] = get_current_context().api_version
                await asyncio.sleep(0.01)
                results[f"{version}_end"] = get_current_context().api_version

        await asyncio.gather(handle("v6"), handle("v7"))

        assert results == {
            "v6_start": "v6",
            "v6_end": "v6",
            "v7_start": "v7",
            "v7_end": "v7",
        }
