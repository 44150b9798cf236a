"""Configures pytest further: speed tiers for key generation heavy tests."""
import pytest

SPEED_TIERS = {
    "slow": ("--skip-slow", "key sizes of 2048 bits and up"),
    "extreme": ("--run-extreme", "key sizes of 4096 bits and up"),
}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slow key generation tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme key generation tests")


def pytest_configure(config):
    for marker, (_, scope) in SPEED_TIERS.items():
        config.addinivalue_line("markers", f"{marker}: {scope}")


def pytest_collection_modifyitems(config, items):
    skipped = set()
    if config.getoption("--skip-slow"):
        skipped.add("slow")
    if not config.getoption("--run-extreme"):
        skipped.add("extreme")
    for item in items:
        for marker in skipped.intersection(item.keywords):
            option = SPEED_TIERS[marker][0]
            item.add_marker(pytest.mark.skip(reason=f"{marker.capitalize()} test: toggled by {option}"))
