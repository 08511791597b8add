"""
Unit tests for the background job scheduler.
"""

from unittest.mock import AsyncMock

import pytest
from apscheduler.triggers.interval import IntervalTrigger

from nursery_api.core import scheduler


@pytest.fixture(autouse=True)
def clean_registry():
    scheduler.clear_registry()
    yield
    scheduler.clear_registry()


class TestRegistry:
    def test_register_before_start(self):
        scheduler.register_job("job_a", AsyncMock(), IntervalTrigger(hours=1))

        assert scheduler.list_registered_jobs() == [{"job_id": "job_a", "registered": True}]

    @pytest.mark.asyncio
    async def test_trigger_unknown_job(self):
        with pytest.raises(ValueError, match="not found"):
            await scheduler.trigger_job_manually("missing")

    @pytest.mark.asyncio
    async def test_trigger_success(self):
        func = AsyncMock(return_value={"ok": True})
        scheduler.register_job("job_a", func, IntervalTrigger(hours=1))

        result = await scheduler.trigger_job_manually("job_a")

        assert result["status"] == "success"
        assert result["result"] == {"ok": True}
        func.assert_awaited_once()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_schedules_registered_jobs(self):
        scheduler.register_job("job_a", AsyncMock(), IntervalTrigger(hours=1))

        instance = await scheduler.start_scheduler()
        try:
            assert instance.running
            assert instance.get_job("job_a") is not None
            jobs = scheduler.list_registered_jobs()
            assert jobs[0]["next_run_time"] is not None

            scheduler.register_job("job_b", AsyncMock(), IntervalTrigger(hours=2))
            assert instance.get_job("job_b") is not None
        finally:
            await scheduler.stop_scheduler()

        assert scheduler.get_scheduler() is None

    @pytest.mark.asyncio
    async def test_stop_when_not_running(self):
        await scheduler.stop_scheduler()
        assert scheduler.get_scheduler() is None
