from debug_tools import DebugCollector


def test_disabled_collector_records_nothing():
    debug = DebugCollector()
    debug.add_flow("step")
    debug.set_count("words", 3)
    debug.add_sample("results", "x")
    debug.add_anomaly("unknown_tags", "cat: zzz")

    assert debug.flow == []
    assert debug.counts["words"] is None
    assert debug.samples["results"] == []
    assert debug.anomalies["unknown_tags"] == []
    assert debug.emit() == ""


def test_enabled_collector_reports():
    debug = DebugCollector()
    debug.enable()
    debug.add_flow("lookup_started")
    debug.set_count("found", 2)
    debug.set_count("bogus", 1)
    debug.add_anomaly("unknown_tags", "cat: zzz")

    report = debug.emit()

    assert report.startswith("=== DEBUG REPORT START ===")
    assert report.endswith("=== DEBUG REPORT END ===")
    assert "  found: 2" in report
    assert "bogus" not in report
    assert "  - lookup_started" in report
    assert "  unknown_tags: 1 (sample shown)" in report


def test_samples_are_capped():
    debug = DebugCollector()
    debug.enable()
    for i in range(5):
        debug.add_sample("errors", i, limit=3)

    assert debug.samples["errors"] == [0, 1, 2]


def test_reset_clears_collected_data():
    debug = DebugCollector()
    debug.enable()
    debug.add_flow("step")
    debug.set_count("words", 1)
    debug.reset()

    assert debug.enabled
    assert debug.flow == []
    assert debug.counts["words"] is None
