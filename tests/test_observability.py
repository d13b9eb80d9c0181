"""
Tests for pipeline metrics and logging setup.
"""
import pytest
from loguru import logger

from palcreator import InvalidParameter, extract_palette
from palcreator.config import config
from palcreator.services.observability import (
    MetricsCollector, PerformanceMetrics, get_metrics_collector, performance_monitor,
)
from palcreator.utils.logging import configure_logging, get_logger


class TestPerformanceMonitor:
    """Test stage timing"""

    def test_records_successful_operation(self):
        with performance_monitor("unit_op", pixel_count=10, cluster_count=2):
            pass

        stats = get_metrics_collector().get_operation_stats("unit_op")
        assert stats["total_calls"] == 1
        assert stats["error_count"] == 0
        recent = get_metrics_collector().get_recent_metrics(1)[0]
        assert recent["pixel_count"] == 10
        assert recent["cluster_count"] == 2
        assert recent["duration_ms"] >= 0

    def test_records_error_and_reraises(self):
        with pytest.raises(RuntimeError):
            with performance_monitor("failing_op"):
                raise RuntimeError("boom")

        stats = get_metrics_collector().get_operation_stats("failing_op")
        assert stats["error_count"] == 1
        assert stats["error_rate"] == 1.0
        assert get_metrics_collector().get_recent_metrics(1)[0]["error"] == "boom"

    def test_disabled(self, monkeypatch):
        monkeypatch.setattr(config, "METRICS_ENABLED", False)
        with performance_monitor("skipped_op"):
            pass
        assert get_metrics_collector().get_operation_stats("skipped_op") == {}

    def test_pipeline_stages_recorded(self, block_image, renderer):
        extract_palette(block_image, 4, resize=0.5, renderer=renderer)
        collector = get_metrics_collector()
        for stage in ("pixel_sampling", "color_clustering", "palette_display"):
            assert collector.get_operation_stats(stage)["total_calls"] == 1
        clustering = [m for m in collector.get_recent_metrics(10) if m["operation_name"] == "color_clustering"]
        assert clustering[0]["pixel_count"] == 2500
        assert clustering[0]["cluster_count"] == 4

    def test_validation_fails_before_any_stage(self, block_image):
        with pytest.raises(InvalidParameter):
            extract_palette(block_image, 0, show_pal=False)
        assert get_metrics_collector().get_recent_metrics() == []


class TestMetricsCollector:
    """Test aggregation"""

    def test_history_is_bounded(self):
        collector = MetricsCollector(max_history=3)
        for i in range(5):
            collector.record_performance(PerformanceMetrics(
                operation_name="op", duration_ms=float(i), memory_usage_mb=1.0,
                pixel_count=0, cluster_count=0, timestamp=float(i),
            ))
        assert len(collector.get_recent_metrics(10)) == 3
        assert collector.get_operation_stats("op")["total_calls"] == 5
        assert collector.get_operation_stats("op")["duration_stats"]["max_ms"] == 4.0

    def test_reset(self):
        collector = MetricsCollector()
        collector.record_performance(PerformanceMetrics("op", 1.0, 1.0, 0, 0, 0.0))
        collector.reset()
        assert collector.get_operation_stats("op") == {}


class TestLogging:
    """Test loguru sink setup"""

    def test_configure_logging_level(self):
        messages = []
        configure_logging("ERROR")
        sink = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            get_logger(method="kmeans").info("bound message")
        finally:
            logger.remove(sink)
        assert any("bound message" in m for m in messages)

    def test_configure_logging_replaces_sink(self):
        first = configure_logging("WARNING")
        second = configure_logging("INFO")
        assert first != second
        with pytest.raises(ValueError):
            logger.remove(first)

    def test_extract_palette_logs_bind_method_and_n(self, block_image):
        records = []
        sink = logger.add(lambda m: records.append(m.record), level="INFO")
        try:
            extract_palette(block_image, 4, resize=0.5, show_pal=False)
        finally:
            logger.remove(sink)
        bound = [r["extra"] for r in records if r["extra"].get("method") == "kmeans"]
        assert bound and all(extra["n"] == 4 for extra in bound)
