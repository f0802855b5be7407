"""
Pytest Configuration and Fixtures

This module provides:
- Timestamped result file generation
- Shared fixtures for all tests
- Test category organization
"""

import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Dict, Any

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import test configuration
from tests.test_config import (
    CONFIG, EXPECTED, TEST_DATA, MESSAGES, TEST_CATEGORIES,
    get_all_sample_posts,
)


# =============================================================================
# TEST RESULT FILE CONFIGURATION
# =============================================================================

RESULTS_DIR = PROJECT_ROOT / "test_results"


def get_result_filename() -> str:
    """Generate timestamped result filename."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"test_results_{timestamp}.txt"


# =============================================================================
# PYTEST HOOKS FOR CUSTOM OUTPUT
# =============================================================================

class TestResultCollector:
    """Collects test results for formatted output."""

    __test__ = False

    def __init__(self):
        self.results: List[Dict[str, Any]] = []
        self.start_time: datetime = None
        self.end_time: datetime = None
        self.categories: Dict[str, List[Dict]] = {}

    def add_result(self, nodeid: str, outcome: str, duration: float, message: str = ""):
        """Add a test result."""
        category = self._extract_category(nodeid)

        result = {
            "nodeid": nodeid,
            "name": nodeid.split("::")[-1].replace("test_", "").replace("_", " ").title(),
            "category": category,
            "outcome": outcome,
            "duration": duration,
            "message": message,
        }

        self.results.append(result)
        self.categories.setdefault(category, []).append(result)

    def _extract_category(self, nodeid: str) -> str:
        """Extract test category from nodeid (file name without test_ and .py)."""
        filename = nodeid.split("::")[0].split("/")[-1]
        return filename.replace("test_", "").replace(".py", "")

    def get_summary(self) -> Dict[str, int]:
        """Get test result summary."""
        return {
            "total": len(self.results),
            "passed": sum(1 for r in self.results if r["outcome"] == "passed"),
            "failed": sum(1 for r in self.results if r["outcome"] == "failed"),
            "skipped": sum(1 for r in self.results if r["outcome"] == "skipped"),
        }


# Global collector instance
_collector = TestResultCollector()


def pytest_configure(config):
    """Register custom markers and start the collector."""
    for category, info in TEST_CATEGORIES.items():
        config.addinivalue_line("markers", f"{category}: {info['description']}")

    _collector.start_time = datetime.now()
    RESULTS_DIR.mkdir(exist_ok=True)


def pytest_runtest_logreport(report):
    """Called after each test phase."""
    if report.when == "call":  # Only record the actual test call
        _collector.add_result(
            nodeid=report.nodeid,
            outcome=report.outcome,
            duration=report.duration,
            message=str(report.longrepr) if report.longrepr else "",
        )


def pytest_sessionfinish(session, exitstatus):
    """Called after all tests complete."""
    _collector.end_time = datetime.now()
    save_report(generate_formatted_report(_collector))


def generate_formatted_report(collector: TestResultCollector) -> str:
    """Generate a formatted test report."""
    summary = collector.get_summary()
    lines = [
        "=" * 80,
        "MEDPULSE - TEST RESULTS REPORT",
        "=" * 80,
        f"Run Date:     {collector.start_time.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Total Tests:  {summary['total']}",
        f"Passed:       {summary['passed']} ✓",
        f"Failed:       {summary['failed']} ✗",
        f"Skipped:      {summary['skipped']} ○",
        "",
    ]

    for category, results in sorted(collector.categories.items()):
        cat_info = TEST_CATEGORIES.get(category, {
            "name": category.replace("_", " ").title(),
            "protects_against": [],
        })
        lines.append(f"── {cat_info['name']} " + "─" * max(0, 74 - len(cat_info["name"])))

        for protection in cat_info.get("protects_against", []):
            lines.append(f"  • {protection}")

        for result in results:
            status = "✓" if result["outcome"] == "passed" else "✗" if result["outcome"] == "failed" else "○"
            lines.append(f"    {status} {result['name']:<60} ({result['duration'] * 1000:.0f}ms)")
            if result["outcome"] == "failed" and result["message"]:
                lines.append(f"      └─ {result['message'].splitlines()[0][:70]}")
        lines.append("")

    lines.append("=" * 80)
    return "\n".join(lines)


def save_report(report: str):
    """Save report to timestamped file."""
    filepath = RESULTS_DIR / get_result_filename()
    with open(filepath, "w") as f:
        f.write(report)
    print(f"\n📄 Test results saved to: {filepath}")


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def sample_posts():
    """Provide the sample posts as Post instances created within the window."""
    from medpulse.models.post import Post

    now = datetime.now()
    posts = []
    for offset, row in enumerate(get_all_sample_posts()):
        post = Post.from_dict(row)
        post.created_at = now - timedelta(hours=offset)
        posts.append(post)
    return posts


@pytest.fixture
def mock_storage(sample_posts):
    """Provide an in-memory storage seeded with the sample posts."""
    from medpulse.storage import MockSupabaseStorage
    return MockSupabaseStorage(posts=sample_posts)


@pytest.fixture
def failing_storage():
    """Provide an in-memory storage where every call fails."""
    from medpulse.storage import MockSupabaseStorage
    storage = MockSupabaseStorage()
    storage.fail_with = "Simulated data store outage"
    return storage


@pytest.fixture
def ledger_activities():
    """Provide the sample ledger as KarmaActivity instances, oldest first."""
    from medpulse.karma import create_activity

    base = datetime(2026, 1, 1, 12, 0, 0)
    activities = []
    for minutes, (user_id, activity_type) in enumerate(TEST_DATA["ledger"]):
        activity = create_activity(user_id, activity_type)
        activities.append(_with_time(activity, base + timedelta(minutes=minutes)))
    return activities


def _with_time(activity, created_at):
    from dataclasses import replace
    return replace(activity, created_at=created_at)


@pytest.fixture
def test_config():
    """Provide access to test configuration."""
    return CONFIG


@pytest.fixture
def expected_values():
    """Provide access to expected values."""
    return EXPECTED


@pytest.fixture
def test_data():
    """Provide access to test data."""
    return TEST_DATA


@pytest.fixture
def messages():
    """Provide access to expected messages."""
    return MESSAGES
