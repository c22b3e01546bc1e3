"""Tests for logging context propagation."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from jobclean.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


class TestPushPop:
    """Tests for push_log_context and pop_log_context."""

    def test_empty_context(self):
        """Test that context starts empty."""
        assert get_log_context() == {}

    def test_push_and_pop(self):
        """Test pushing fields and restoring the previous context."""
        token = push_log_context(job_id="li-4012345", mode="listing")
        assert get_log_context() == {"job_id": "li-4012345", "mode": "listing"}

        pop_log_context(token)
        assert get_log_context() == {}

    def test_nested_push_merges(self):
        """Test nested pushes merge and pop in reverse order."""
        outer = push_log_context(mode="detail")
        inner = push_log_context(job_id="li-1")
        assert get_log_context() == {"mode": "detail", "job_id": "li-1"}

        pop_log_context(inner)
        assert get_log_context() == {"mode": "detail"}

        pop_log_context(outer)
        assert get_log_context() == {}

    def test_push_overrides_key(self):
        """Test that pushing the same key shadows the previous value."""
        first = push_log_context(job_id="li-1")
        second = push_log_context(job_id="li-2")
        assert get_log_context() == {"job_id": "li-2"}

        pop_log_context(second)
        assert get_log_context() == {"job_id": "li-1"}
        pop_log_context(first)

    def test_clear_context(self):
        """Test clearing all context."""
        push_log_context(job_id="li-1", mode="listing")
        clear_log_context()
        assert get_log_context() == {}

    def test_returned_context_is_a_copy(self):
        """Test that get_log_context returns a copy, not the actual dict."""
        push_log_context(job_id="li-1")

        context = get_log_context()
        context["mode"] = "modified"

        assert get_log_context() == {"job_id": "li-1"}


class TestLogContextManager:
    """Tests for the log_context context manager."""

    def test_scoped_fields(self):
        """Test fields exist only inside the block."""
        with log_context(job_id="li-1", mode="listing"):
            assert get_log_context() == {"job_id": "li-1", "mode": "listing"}

        assert get_log_context() == {}

    def test_nested_blocks(self):
        """Test nested blocks add and remove their own fields."""
        with log_context(mode="listing"):
            with log_context(job_id="li-1", stage="symbols"):
                assert get_log_context() == {
                    "mode": "listing",
                    "job_id": "li-1",
                    "stage": "symbols",
                }
            assert get_log_context() == {"mode": "listing"}

    def test_restored_after_exception(self):
        """Test that context is restored even when an exception occurs."""
        with pytest.raises(ValueError):
            with log_context(job_id="li-1"):
                raise ValueError("Test exception")

        assert get_log_context() == {}

    def test_worker_threads_are_isolated(self):
        """Test each worker thread sees only the context it pushed."""

        def worker(job_id):
            with log_context(job_id=job_id):
                return get_log_context()["job_id"]

        with log_context(mode="listing"):
            with ThreadPoolExecutor(max_workers=4) as executor:
                seen = list(executor.map(worker, [f"li-{i}" for i in range(8)]))

            assert get_log_context() == {"mode": "listing"}

        assert seen == [f"li-{i}" for i in range(8)]
