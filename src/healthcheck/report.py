"""Human-readable rendering of a run report."""

from .aggregator import RunReport

REPORT_TITLE = "Flask Application Health Check Report"
_RULE = "=" * 40
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def render_report(report: RunReport) -> str:
    """Render *report* as the block appended to the primary log."""
    failed = ", ".join(report.failed_probes) if report.failed_probes else "none"
    lines = [
        "",
        _RULE,
        REPORT_TITLE,
        _RULE,
        f"Checked at: {report.timestamp.strftime(_TIMESTAMP_FORMAT)}",
        f"Overall status: {report.overall_status.value}",
        f"Failed probes: {failed}",
        _RULE,
    ]
    for result in report.results:
        lines.append(f"  {result.name:<18} {result.outcome.name:<8} {result.detail}")
    if report.results:
        lines.append(_RULE)
    lines.append("")
    return "\n".join(lines)


__all__ = ["REPORT_TITLE", "render_report"]
