"""
Callback receiver: status resolution, results payload, aggregation trigger and duplicate handling.
"""
import unittest
from decimal import Decimal

from sqlalchemy import select

from models import DailyMarketUpdate
from services.callbacks import apply_pricing_callback, build_results
from services.dispatcher import process_pricing_queue
from services.errors import InvalidCallbackError, RunNotFoundError
from services.pricing_runs import enqueue_pricing_run
from support import DatabaseTestCase, RecordingExecutor, T0, at


class TestBuildResults(unittest.TestCase):
    def test_omits_absent_and_empty_fields(self):
        results = build_results({
            "run_id": "run-1",
            "rate": "6.125",
            "discount_points": "",
            "screenshot_1": "https://cdn.example.com/s1.png",
            "screenshot_2": None,
            "status": "completed",
        })
        self.assertEqual(results, {"rate": "6.125", "screenshot_1": "https://cdn.example.com/s1.png"})

    def test_keeps_zero_points(self):
        self.assertEqual(build_results({"rate": 6.5, "discount_points": 0}), {"rate": 6.5, "discount_points": 0})


class TestApplyCallback(DatabaseTestCase):
    async def start_run(self, scenario_type=None):
        run = await enqueue_pricing_run(self.session, scenario_type=scenario_type, now=T0)
        await self.session.commit()
        await process_pricing_queue(self.session, RecordingExecutor(), now=at(1))
        return run.id

    async def market_rows(self):
        result = await self.session.execute(select(DailyMarketUpdate))
        return result.scalars().all()

    async def test_missing_run_id(self):
        with self.assertRaises(InvalidCallbackError):
            await apply_pricing_callback(self.session, {"rate": "6.125"})
        with self.assertRaises(InvalidCallbackError):
            await apply_pricing_callback(self.session, {"run_id": ""})

    async def test_unknown_run(self):
        with self.assertRaises(RunNotFoundError):
            await apply_pricing_callback(self.session, {"run_id": "run-missing"})

    async def test_completed_callback_updates_run_and_market(self):
        """Callback for 30yr_fixed -> completed, results stored, today's row updated."""
        run_id = await self.start_run("30yr_fixed")

        result = await apply_pricing_callback(
            self.session,
            {"run_id": run_id, "rate": "6.125", "discount_points": "0.5", "status": "completed"},
            now=at(60),
        )
        await self.session.commit()

        self.assertTrue(result["success"])
        self.assertEqual(result["run_id"], run_id)
        self.assertEqual(result["status"], "completed")
        self.assertTrue(result["market_update_recorded"])

        run = await self.reload(run_id)
        self.assertEqual(run.status, "completed")
        self.assertEqual(run.results_json, {"rate": "6.125", "discount_points": "0.5"})
        self.assertIsNotNone(run.completed_at)

        rows = await self.market_rows()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].date, T0.date())
        self.assertEqual(rows[0].rate_30yr_fixed, Decimal("6.125"))
        self.assertEqual(rows[0].points_30yr_fixed, Decimal("0.5"))
        self.assertIsNone(rows[0].rate_15yr_fixed)

    async def test_status_defaults_to_completed(self):
        run_id = await self.start_run()
        result = await apply_pricing_callback(self.session, {"run_id": run_id, "status": "done"}, now=at(5))
        self.assertEqual(result["status"], "completed")
        run = await self.reload(run_id)
        self.assertIsNone(run.results_json)

    async def test_failed_callback_records_error_and_skips_market(self):
        run_id = await self.start_run("dscr")

        result = await apply_pricing_callback(
            self.session,
            {"run_id": run_id, "status": "failed", "rate": "7.25", "error_message": "Pricer session expired"},
            now=at(30),
        )

        self.assertEqual(result["status"], "failed")
        self.assertFalse(result["market_update_recorded"])
        run = await self.reload(run_id)
        self.assertEqual(run.status, "failed")
        self.assertEqual(run.error_message, "Pricer session expired")
        self.assertEqual(run.results_json, {"rate": "7.25"})
        self.assertIsNotNone(run.completed_at)
        self.assertEqual(await self.market_rows(), [])

    async def test_failed_callback_without_message_keeps_error_unset(self):
        run_id = await self.start_run()
        await apply_pricing_callback(self.session, {"run_id": run_id, "status": "failed"}, now=at(30))
        run = await self.reload(run_id)
        self.assertEqual(run.status, "failed")
        self.assertIsNone(run.error_message)

    async def test_unknown_scenario_completes_without_market_write(self):
        run_id = await self.start_run("jumbo_arm_7_1")

        result = await apply_pricing_callback(self.session, {"run_id": run_id, "rate": "6.9"}, now=at(30))

        self.assertEqual(result["status"], "completed")
        self.assertFalse(result["market_update_recorded"])
        self.assertEqual((await self.reload(run_id)).status, "completed")
        self.assertEqual(await self.market_rows(), [])

    async def test_ad_hoc_run_without_scenario_skips_market(self):
        run_id = await self.start_run()
        result = await apply_pricing_callback(self.session, {"run_id": run_id, "rate": "6.9"}, now=at(30))
        self.assertFalse(result["market_update_recorded"])
        self.assertEqual(await self.market_rows(), [])

    async def test_completed_without_rate_skips_market(self):
        run_id = await self.start_run("15yr_fixed")
        result = await apply_pricing_callback(
            self.session, {"run_id": run_id, "screenshot_1": "s3://shots/1.png"}, now=at(30)
        )
        self.assertFalse(result["market_update_recorded"])
        self.assertEqual((await self.reload(run_id)).results_json, {"screenshot_1": "s3://shots/1.png"})

    async def test_duplicate_callback_is_ignored(self):
        run_id = await self.start_run("30yr_fixed")
        await apply_pricing_callback(self.session, {"run_id": run_id, "rate": "6.125"}, now=at(30))
        await self.session.commit()

        replay = await apply_pricing_callback(
            self.session,
            {"run_id": run_id, "rate": "7.000", "status": "failed", "error_message": "late"},
            now=at(90),
        )

        self.assertTrue(replay["success"])
        self.assertTrue(replay["ignored"])
        self.assertEqual(replay["status"], "completed")
        run = await self.reload(run_id)
        self.assertEqual(run.status, "completed")
        self.assertEqual(run.results_json, {"rate": "6.125"})
        self.assertIsNone(run.error_message)
        rows = await self.market_rows()
        self.assertEqual(rows[0].rate_30yr_fixed, Decimal("6.125"))

    async def test_late_callback_after_timeout_is_ignored(self):
        run_id = await self.start_run("30yr_fixed")
        await process_pricing_queue(self.session, RecordingExecutor(), now=at(200), max_retries=1)

        result = await apply_pricing_callback(self.session, {"run_id": run_id, "rate": "6.5"}, now=at(210))

        self.assertTrue(result["ignored"])
        self.assertEqual(result["status"], "failed")
        self.assertEqual(await self.market_rows(), [])

    async def test_numeric_run_id_is_matched_as_string(self):
        await self.add_run("42", status="running", retry_count=1)

        result = await apply_pricing_callback(self.session, {"run_id": 42, "rate": "6.0"}, now=at(10))

        self.assertEqual(result["run_id"], "42")
        self.assertEqual((await self.reload("42")).status, "completed")
