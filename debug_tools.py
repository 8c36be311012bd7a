# debug_tools.py
# Per-request debug collector. Silent unless enabled.

COUNT_KEYS = ("words", "found", "not_found", "expanded")
SAMPLE_KEYS = ("results", "errors")
ANOMALY_KEYS = ("unknown_tags", "unmatched_braces", "lookup_errors")


class DebugCollector:
    """
    Collects counts, samples, flow checkpoints and anomalies for one
    lookup request, then emits them as a single report.
    """

    def __init__(self):
        self.enabled = False
        self.reset()

    def reset(self):
        """Clear everything collected so far (call once per request)."""
        self.counts = {key: None for key in COUNT_KEYS}
        self.samples = {key: [] for key in SAMPLE_KEYS}
        self.flow = []
        self.anomalies = {key: [] for key in ANOMALY_KEYS}

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def add_flow(self, message: str):
        """Record a pipeline checkpoint."""
        if self.enabled:
            self.flow.append(message)

    def set_count(self, key: str, value: int):
        if self.enabled and key in self.counts:
            self.counts[key] = value

    def add_sample(self, key: str, item, limit=10):
        """
        Add a sample to a category (results, errors).
        Only keeps up to `limit` items.
        """
        if self.enabled and key in self.samples:
            if len(self.samples[key]) < limit:
                self.samples[key].append(item)

    def add_anomaly(self, key: str, item, limit=10):
        if self.enabled and key in self.anomalies:
            if len(self.anomalies[key]) < limit:
                self.anomalies[key].append(item)

    def emit(self):
        """
        Produce the consolidated report as a string ("" when disabled).
        """
        if not self.enabled:
            return ""

        report = []
        report.append("=== DEBUG REPORT START ===")

        report.append("\nCOUNTS:")
        for k, v in self.counts.items():
            report.append(f"  {k}: {v}")

        report.append("\nFLOW CHECKPOINTS:")
        for step in self.flow:
            report.append(f"  - {step}")

        report.append("\nSAMPLES:")
        for k, items in self.samples.items():
            report.append(f"  {k} (sample of {len(items)}):")
            for item in items:
                report.append(f"    {item}")

        report.append("\nANOMALIES:")
        for k, items in self.anomalies.items():
            report.append(f"  {k}: {len(items)} (sample shown)")
            for item in items:
                report.append(f"    {item}")

        report.append("=== DEBUG REPORT END ===")

        return "\n".join(report)


# Shared instance the server imports.
DEBUG = DebugCollector()
