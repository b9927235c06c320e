# conftest.py
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-optional",
        action="store_true",
        default=False,
        help="Run tests marked as optional (they need a live MySQL server)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: runs without a database")
    config.addinivalue_line("markers", "optional: needs a live MySQL server, see --run-optional")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-optional"):
        return

    skip_marker = pytest.mark.skip(reason="Optional test, use --run-optional to include")
    for item in items:
        if "optional" in item.keywords:
            item.add_marker(skip_marker)
